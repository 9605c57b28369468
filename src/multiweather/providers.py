# concrete weather providers
# each one maps a city name to a temperature in Celsius or raises ProviderError
# payload parsing is kept in pure functions so it can be tested against local fixtures

from __future__ import annotations
import logging
import math
from typing import Any, Optional, Protocol
from urllib.parse import quote
from .client import JSONClient, ProviderError
from .models import kelvin_to_celsius

logger = logging.getLogger(__name__)

class TemperatureProvider(Protocol):
    # anything that can turn a city name into degrees Celsius
    def temperature(self, city: str) -> float:
        ...

def _number(data: Any, *path: str) -> float:
    # walk a nested dict and coerce the leaf to a finite float, raising ProviderError on bad shape
    field = ".".join(path)
    node = data
    try:
        for key in path:
            node = node[key]
        if isinstance(node, bool):
            raise TypeError(f"boolean {field}")
        value = float(node)
    except (KeyError, TypeError, ValueError) as exc:
        raise ProviderError(f"Unexpected API shape: missing {field}") from exc
    if not math.isfinite(value):
        raise ProviderError(f"Unexpected API shape: non-finite {field} ({node!r})")
    return value

def parse_openweathermap(data: Any) -> float:
    # openweathermap shape: data["main"]["temp"] in Kelvin
    return kelvin_to_celsius(_number(data, "main", "temp"))

def parse_weatherunderground(data: Any) -> float:
    # weather underground shape: data["current_observation"]["temp_c"]
    return _number(data, "current_observation", "temp_c")

def parse_weatherapi(data: Any) -> float:
    # weatherapi shape: data["current"]["temp_c"]
    return _number(data, "current", "temp_c")

class OpenWeatherMap:
    name = "openweathermap"
    BASE_URL = "https://api.openweathermap.org"

    def __init__(self, api_key: str, client: Optional[JSONClient] = None, base_url: str = BASE_URL):
        self.api_key = api_key
        self.client = client or JSONClient()
        self.base_url = base_url.rstrip("/")

    def temperature(self, city: str) -> float:
        data = self.client.get_json(
            f"{self.base_url}/data/2.5/weather",
            params={"appid": self.api_key, "q": city},
            what=city,
        )
        temp = parse_openweathermap(data)
        logger.info("%s: %s: %.2f", self.name, city, temp)
        return temp

class WeatherUnderground:
    name = "weatherunderground"
    BASE_URL = "http://api.wunderground.com"

    def __init__(self, api_key: str, client: Optional[JSONClient] = None, base_url: str = BASE_URL):
        self.api_key = api_key
        self.client = client or JSONClient()
        self.base_url = base_url.rstrip("/")

    def temperature(self, city: str) -> float:
        # the city is part of the path here, not a query parameter
        url = f"{self.base_url}/api/{quote(self.api_key)}/conditions/q/{quote(city)}.json"
        temp = parse_weatherunderground(self.client.get_json(url, what=city))
        logger.info("%s: %s: %.2f", self.name, city, temp)
        return temp

class WeatherAPI:
    name = "weatherapi"
    BASE_URL = "https://api.weatherapi.com"

    def __init__(self, api_key: str, client: Optional[JSONClient] = None, base_url: str = BASE_URL):
        self.api_key = api_key
        self.client = client or JSONClient()
        self.base_url = base_url.rstrip("/")

    def temperature(self, city: str) -> float:
        data = self.client.get_json(
            f"{self.base_url}/v1/current.json",
            params={"key": self.api_key, "q": city, "aqi": "no"},
            what=city,
        )
        temp = parse_weatherapi(data)
        logger.info("%s: %s: %.2f", self.name, city, temp)
        return temp
