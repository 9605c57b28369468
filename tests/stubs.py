# in-process providers with scripted latency and outcome, so aggregator tests never touch the network

import threading
import time


class FixedProvider:
    def __init__(self, value, delay=0.0):
        self.value = value
        self.delay = delay
        self.calls = 0

    def temperature(self, city):
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        return self.value


class FailingProvider:
    def __init__(self, error, delay=0.0):
        self.error = error
        self.delay = delay

    def temperature(self, city):
        if self.delay:
            time.sleep(self.delay)
        raise self.error


class BlockedProvider:
    # answers only once `release` is set, or after `limit` seconds
    def __init__(self, release: threading.Event, value=20.0, limit=5.0):
        self.release = release
        self.value = value
        self.limit = limit

    def temperature(self, city):
        self.release.wait(self.limit)
        return self.value
