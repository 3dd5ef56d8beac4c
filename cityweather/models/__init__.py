"""Data models for the weather app."""

from .city import City, Location, city_id
from .config import ApiConfig, CatalogConfig, Config, Settings
from .forecast import ForecastPeriod
from .selection import SelectionState

__all__ = [
    "ApiConfig",
    "CatalogConfig",
    "City",
    "Config",
    "ForecastPeriod",
    "Location",
    "SelectionState",
    "Settings",
    "city_id",
]
