# settings: api keys and timings from an optional json file, overridden by environment variables

from __future__ import annotations
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional
from dotenv import load_dotenv
from .client import JSONClient
from .providers import OpenWeatherMap, TemperatureProvider, WeatherAPI, WeatherUnderground
from .service import DEFAULT_DEADLINE, Aggregator

load_dotenv()  # in production, environment variables is injected by docker, kubernetes, cloud provider

# json key -> environment variable, in the order providers are built
KEY_ENV = {
    "openweathermap": "OPENWEATHERMAP_API_KEY",
    "weatherunderground": "WEATHERUNDERGROUND_API_KEY",
    "weatherapi": "WEATHERAPI_KEY",
}

class ConfigError(RuntimeError):
    pass

@dataclass(frozen=True)
class Settings:
    api_keys: Mapping[str, str]
    deadline: float = DEFAULT_DEADLINE
    http_timeout: float = JSONClient.DEFAULT_TIMEOUT

def _read_key_file(path: Path) -> Dict[str, str]:
    try:
        data = json.loads(path.read_text())
    except OSError as exc:
        raise ConfigError(f"cannot read config file {str(path)!r}: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(f"invalid JSON in config file {str(path)!r}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config file {str(path)!r} must hold a JSON object")
    return {k: str(v) for k, v in data.items() if k in KEY_ENV and v}

def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number (got {raw!r})") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive (got {raw!r})")
    return value

def load_settings(config_path: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> Settings:
    # a config_path that does not exist is an error, pass None to rely on the environment only
    env = os.environ if env is None else env
    keys: Dict[str, str] = {}
    if config_path is not None:
        keys.update(_read_key_file(Path(config_path)))
    for key, var in KEY_ENV.items():
        if env.get(var):
            keys[key] = env[var]
    return Settings(
        api_keys=keys,
        deadline=_positive_float(env, "WEATHER_DEADLINE", DEFAULT_DEADLINE),
        http_timeout=_positive_float(env, "WEATHER_HTTP_TIMEOUT", JSONClient.DEFAULT_TIMEOUT),
    )

def build_providers(settings: Settings) -> List[TemperatureProvider]:
    # one provider per configured key, sharing a single client with per-thread sessions
    client = JSONClient(timeout=settings.http_timeout)
    factories = {
        "openweathermap": OpenWeatherMap,
        "weatherunderground": WeatherUnderground,
        "weatherapi": WeatherAPI,
    }
    return [
        factories[key](settings.api_keys[key], client=client)
        for key in KEY_ENV
        if settings.api_keys.get(key)
    ]

def build_aggregator(settings: Settings) -> Aggregator:
    return Aggregator(build_providers(settings), deadline=settings.deadline)
