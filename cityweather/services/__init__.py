"""Services for fetching forecasts, searching locations and persisting cities."""

from .city_repository import CityRepository, InMemoryCityRepository, StoredCityRepository
from .forecast_service import FORECAST_ERROR_MESSAGE, ForecastError, ForecastService
from .location_catalog import LocationCatalog, SampledLocationCatalog, load_locations
from .storage import LocalStorage

__all__ = [
    "FORECAST_ERROR_MESSAGE",
    "CityRepository",
    "ForecastError",
    "ForecastService",
    "InMemoryCityRepository",
    "LocalStorage",
    "LocationCatalog",
    "SampledLocationCatalog",
    "StoredCityRepository",
    "load_locations",
]
