# orchestration and business rules.
# fan out one thread per provider, collect readings until all reported or the deadline fires,
# abort on the first provider error, and average what arrived in time


from __future__ import annotations
import logging
import queue
import time
from threading import Thread
from typing import Iterable, List, Tuple
from .models import CityTemperature
from .providers import TemperatureProvider

logger = logging.getLogger(__name__)

# global ceiling for one aggregation call, in seconds
DEFAULT_DEADLINE = 1.0

class AggregationError(RuntimeError):
    pass

class ConfigurationError(AggregationError):
    # no providers to ask
    pass

class NoReadingsError(AggregationError):
    # the deadline fired before any provider answered
    pass

def _ask(provider: TemperatureProvider, city: str, outcomes: queue.Queue) -> None:
    # worker body: exactly one (value, error) pair per provider
    try:
        outcomes.put((provider.temperature(city), None))
    except Exception as exc:
        outcomes.put((None, exc))

class Aggregator:
    """Combined temperature from several providers queried concurrently.

    Every call starts one daemon worker thread per provider and waits at most
    ``deadline`` seconds. The first provider error is re-raised unchanged.
    Readings that arrive after the deadline are ignored, and the workers that
    produce them are left to finish on their own; being daemons, they never
    keep the interpreter alive.
    """

    def __init__(self, providers: Iterable[TemperatureProvider], deadline: float = DEFAULT_DEADLINE):
        if deadline <= 0:
            raise ValueError(f"deadline must be positive (got {deadline})")
        self.providers: Tuple[TemperatureProvider, ...] = tuple(providers)
        self.deadline = deadline

    def __len__(self) -> int:
        return len(self.providers)

    def temperature(self, city: str) -> float:
        if not self.providers:
            raise ConfigurationError("no weather providers configured")

        expires = time.monotonic() + self.deadline
        # room for every outcome, so workers never block on a consumer that has returned
        outcomes: queue.Queue = queue.Queue(maxsize=len(self.providers))
        for i, provider in enumerate(self.providers):
            Thread(target=_ask, args=(provider, city, outcomes), name=f"provider-{i}", daemon=True).start()

        readings: List[float] = []
        for _ in self.providers:
            remaining = expires - time.monotonic()
            if remaining <= 0:
                break
            try:
                value, exc = outcomes.get(timeout=remaining)
            except queue.Empty:
                break
            if exc is not None:
                logger.warning("aborting %r after provider error: %s", city, exc)
                raise exc
            readings.append(value)

        if len(readings) < len(self.providers):
            logger.info(
                "deadline of %.2fs reached for %r with %d/%d readings",
                self.deadline, city, len(readings), len(self.providers),
            )
        if not readings:
            raise NoReadingsError(f"no provider answered for {city!r} within {self.deadline:.2f}s")
        return sum(readings) / len(readings)

    def report(self, city: str) -> CityTemperature:
        # temperature() plus the wall time it took, for front ends that show it
        begin = time.monotonic()
        temp = self.temperature(city)
        return CityTemperature(city=city, temp=temp, took=time.monotonic() - begin)
