"""City selection controller.

Owns the selection list, the focused city and the forecast shown for it.
All state changes are published to listeners as `SelectionState` snapshots.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from .models.city import City, Location
from .models.forecast import ForecastPeriod
from .models.selection import SelectionState
from .services.city_repository import CityRepository
from .services.forecast_service import FORECAST_ERROR_MESSAGE, ForecastError

logger = logging.getLogger(__name__)

MAX_CITY_COUNT = 5

StateListener = Callable[[SelectionState], None]


def local_now() -> datetime:
    """Current local time, timezone-aware so the zone can be displayed."""
    return datetime.now().astimezone()


class ForecastSource(Protocol):
    async def fetch_current_period(self, latitude: float, longitude: float) -> ForecastPeriod: ...


class CitySelectionController:
    """Coordinates city selection, forecast retrieval and persistence."""

    def __init__(
        self,
        repository: CityRepository,
        forecasts: ForecastSource,
        max_cities: int = MAX_CITY_COUNT,
        clock: Callable[[], datetime] = local_now,
    ):
        if max_cities < 1:
            raise ValueError(f"max_cities must be at least 1, got {max_cities}")
        self._repository = repository
        self._forecasts = forecasts
        self._clock = clock
        self.max_cities = max_cities

        self._cities: list[City] = []
        self._focused: City | None = None
        self._forecast: ForecastPeriod | None = None
        self._forecast_city: City | None = None
        self._last_updated: datetime | None = None
        self._error = ""
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> SelectionState:
        return SelectionState(
            cities=tuple(self._cities),
            focused_city=self._focused,
            forecast=self._forecast,
            forecast_city=self._forecast_city,
            last_updated=self._last_updated,
            error=self._error,
            max_cities=self.max_cities,
        )

    @property
    def cities(self) -> list[City]:
        return list(self._cities)

    @property
    def can_add(self) -> bool:
        return len(self._cities) < self.max_cities

    def subscribe(self, listener: StateListener) -> None:
        """Register a callback invoked with a fresh snapshot after every change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        state = self.state
        for listener in self._listeners:
            listener(state)

    def _persist(self) -> None:
        self._repository.save(self._cities)

    def _find(self, city_id: str) -> City | None:
        return next((c for c in self._cities if c.id == city_id), None)

    def load(self) -> None:
        """Hydrate the selection list from the repository."""
        stored = self._repository.load()
        if len(stored) > self.max_cities:
            logger.warning(
                f"Stored list has {len(stored)} cities, keeping the first {self.max_cities}"
            )
            stored = stored[: self.max_cities]
        self._cities = stored
        logger.info(f"Loaded {len(stored)} stored cities")
        self._notify()

    async def add_city(self, location: Location) -> City | None:
        """Add a location to the list and select it.

        A location already in the list is re-selected in place. Returns the
        selected city, or None when the list is full.
        """
        self._error = ""
        existing = self._find(location.id)
        if existing is not None:
            logger.debug(f"{existing.display_name} already added, re-selecting")
            await self.select_city(existing)
            return existing

        if not self.can_add:
            logger.info(f"Refusing to add {location.label}: limit of {self.max_cities} reached")
            self._error = f"You have selected the max number of cities ({self.max_cities})"
            self._notify()
            return None

        city = City.from_location(location)
        self._cities.append(city)
        self._persist()
        logger.info(f"Added {city.display_name}")
        await self.select_city(city)
        return city

    async def select_city(self, city: City) -> None:
        """Focus a city and refresh its forecast."""
        if self._find(city.id) is None:
            raise ValueError(f"City {city.id} is not in the selection list")

        self._error = ""
        self._focused = city
        self._notify()
        await self._update_forecast(city)

    async def refresh(self) -> None:
        """Refetch the forecast for the focused city."""
        if self._focused is None:
            return
        await self._update_forecast(self._focused)

    async def remove_city(self, city_id: str) -> None:
        """Remove a city; focus moves to the first remaining one if needed."""
        self._error = ""
        city = self._find(city_id)
        if city is None:
            logger.debug(f"Ignoring removal of unknown city {city_id}")
            return

        self._cities.remove(city)
        self._persist()
        logger.info(f"Removed {city.display_name}")

        if self._focused is None or self._focused.id != city_id:
            self._notify()
            return

        if self._cities:
            await self.select_city(self._cities[0])
        else:
            self._focused = None
            self._forecast = None
            self._forecast_city = None
            self._last_updated = None
            self._notify()

    async def _update_forecast(self, city: City) -> None:
        """Fetch and apply the forecast for a city unless focus has moved on."""
        try:
            period = await self._forecasts.fetch_current_period(city.latitude, city.longitude)
        except ForecastError as e:
            if not self._is_focused(city):
                logger.debug(f"Discarding failed forecast for {city.display_name}: no longer focused")
                return
            logger.warning(f"Forecast unavailable for {city.display_name}: {e}")
            self._error = FORECAST_ERROR_MESSAGE
            self._notify()
            return

        if not self._is_focused(city):
            logger.debug(f"Discarding forecast for {city.display_name}: no longer focused")
            return

        self._forecast = period
        self._forecast_city = city
        self._last_updated = self._clock()
        self._error = ""
        self._notify()

    def _is_focused(self, city: City) -> bool:
        return self._focused is not None and self._focused.id == city.id
