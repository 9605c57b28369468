import json

import pytest

from multiweather.config import ConfigError, Settings, build_aggregator, build_providers, load_settings
from multiweather.providers import OpenWeatherMap, WeatherAPI, WeatherUnderground
from multiweather.service import DEFAULT_DEADLINE


def write_keys(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    return str(path)


def test_keys_from_file(tmp_path):
    path = write_keys(tmp_path, {"openweathermap": "owm", "weatherunderground": "wu", "unused": "x"})
    settings = load_settings(path, env={})
    assert dict(settings.api_keys) == {"openweathermap": "owm", "weatherunderground": "wu"}
    assert settings.deadline == DEFAULT_DEADLINE


def test_environment_overrides_file(tmp_path):
    path = write_keys(tmp_path, {"openweathermap": "from-file"})
    settings = load_settings(path, env={"OPENWEATHERMAP_API_KEY": "from-env", "WEATHERAPI_KEY": "wapi"})
    assert settings.api_keys["openweathermap"] == "from-env"
    assert settings.api_keys["weatherapi"] == "wapi"


def test_timings_from_environment():
    settings = load_settings(env={"WEATHER_DEADLINE": "2.5", "WEATHER_HTTP_TIMEOUT": "4"})
    assert settings.deadline == 2.5
    assert settings.http_timeout == 4.0


@pytest.mark.parametrize("raw", ["soon", "0", "-1"])
def test_bad_deadline(raw):
    with pytest.raises(ConfigError, match="WEATHER_DEADLINE"):
        load_settings(env={"WEATHER_DEADLINE": raw})


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="cannot read config file"):
        load_settings(str(tmp_path / "nope.json"), env={})


def test_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError, match="invalid JSON"):
        load_settings(str(path), env={})


def test_file_must_hold_object(tmp_path):
    with pytest.raises(ConfigError, match="JSON object"):
        load_settings(write_keys(tmp_path, ["owm"]), env={})


def test_providers_built_in_fixed_order():
    settings = Settings(api_keys={"weatherapi": "c", "openweathermap": "a", "weatherunderground": "b"}, http_timeout=3.0)
    providers = build_providers(settings)
    assert [type(p) for p in providers] == [OpenWeatherMap, WeatherUnderground, WeatherAPI]
    assert [p.api_key for p in providers] == ["a", "b", "c"]
    # one shared client, configured once
    assert providers[0].client is providers[2].client
    assert providers[0].client.timeout == 3.0


def test_only_configured_providers_are_built():
    providers = build_providers(Settings(api_keys={"weatherunderground": "b", "openweathermap": ""}))
    assert [type(p) for p in providers] == [WeatherUnderground]


def test_build_aggregator_uses_deadline():
    agg = build_aggregator(Settings(api_keys={"openweathermap": "a"}, deadline=0.5))
    assert len(agg) == 1
    assert agg.deadline == 0.5
