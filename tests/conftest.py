"""Pytest configuration and fixtures."""

import json
import tempfile
from pathlib import Path

import pytest

from cityweather.models.city import Location
from cityweather.models.forecast import ForecastPeriod
from cityweather.services.forecast_service import ForecastError


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "api": {
            "base_url": "https://api.weather.gov",
            "user_agent": "cityweather-tests",
            "timeout_seconds": 5,
        },
        "catalog": {
            "sample_every": 2,
            "page_size": 20,
        },
        "settings": {
            "max_cities": 3,
            "storage_dir": ".test-storage",
            "log_level": "DEBUG",
        },
    }


@pytest.fixture
def sample_config_file(temp_dir, sample_config_data):
    """Create a sample config file for testing."""
    config_path = temp_dir / "config.json"
    with open(config_path, "w") as f:
        json.dump(sample_config_data, f)
    return config_path


@pytest.fixture
def period_payload():
    """A forecast period as returned by the NWS forecast endpoint."""
    return {
        "number": 1,
        "name": "This Afternoon",
        "startTime": "2026-10-19T14:00:00-05:00",
        "endTime": "2026-10-19T18:00:00-05:00",
        "isDaytime": True,
        "temperature": 72,
        "temperatureUnit": "F",
        "probabilityOfPrecipitation": {"unitCode": "wmoUnit:percent", "value": 40},
        "windSpeed": "10 mph",
        "windDirection": "S",
        "icon": "https://api.weather.gov/icons/land/day/tsra_hi,40?size=medium",
        "shortForecast": "Chance Showers And Thunderstorms",
        "detailedForecast": "A chance of showers and thunderstorms. Mostly sunny, with a high near 72.",
    }


@pytest.fixture
def points_payload():
    """A points response linking to a gridpoint forecast."""
    return {
        "properties": {
            "gridId": "TOP",
            "gridX": 31,
            "gridY": 80,
            "forecast": "https://api.weather.gov/gridpoints/TOP/31,80/forecast",
        }
    }


@pytest.fixture
def forecast_payload(period_payload):
    """A forecast response with two periods."""
    tonight = dict(period_payload)
    tonight.update(
        {
            "number": 2,
            "name": "Tonight",
            "isDaytime": False,
            "temperature": 55,
            "probabilityOfPrecipitation": {"unitCode": "wmoUnit:percent", "value": None},
            "detailedForecast": "Mostly clear, with a low around 55.",
        }
    )
    return {"properties": {"periods": [period_payload, tonight]}}


@pytest.fixture
def sample_locations():
    """A handful of catalog locations."""
    return [
        Location(city="Austin", state="Texas", state_abbr="TX", latitude=30.2672, longitude=-97.7431),
        Location(city="Boston", state="Massachusetts", state_abbr="MA", latitude=42.3601, longitude=-71.0589),
        Location(city="Chicago", state="Illinois", state_abbr="IL", latitude=41.8781, longitude=-87.6298),
        Location(city="Denver", state="Colorado", state_abbr="CO", latitude=39.7392, longitude=-104.9903),
        Location(city="El Paso", state="Texas", state_abbr="TX", latitude=31.7619, longitude=-106.485),
        Location(city="Fargo", state="North Dakota", state_abbr="ND", latitude=46.8772, longitude=-96.7898),
    ]


class FakeForecastService:
    """Forecast source that records calls and replays scripted results.

    Results are keyed by (latitude, longitude); a ForecastError value is raised.
    """

    def __init__(self, default: ForecastPeriod | None = None):
        self.default = default
        self.results: dict[tuple[float, float], ForecastPeriod | ForecastError] = {}
        self.calls: list[tuple[float, float]] = []
        self.gates: dict[tuple[float, float], object] = {}

    async def fetch_current_period(self, latitude: float, longitude: float) -> ForecastPeriod:
        self.calls.append((latitude, longitude))
        gate = self.gates.get((latitude, longitude))
        if gate is not None:
            await gate.wait()
        result = self.results.get((latitude, longitude), self.default)
        if isinstance(result, ForecastError):
            raise result
        if result is None:
            raise ForecastError("no scripted result")
        return result


@pytest.fixture
def sample_period(period_payload):
    return ForecastPeriod.model_validate(period_payload)


@pytest.fixture
def fake_forecasts(sample_period):
    return FakeForecastService(default=sample_period)
