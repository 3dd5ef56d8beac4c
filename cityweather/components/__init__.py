"""UI components for the weather app."""

from .city_list import CityList
from .city_picker import CityPicker
from .forecast_card import ForecastCard
from .status_bar import StatusBar

__all__ = ["CityList", "CityPicker", "ForecastCard", "StatusBar"]
