"""Persistence of the selected city list."""

import logging
from typing import Protocol

from pydantic import ValidationError

from ..models.city import City
from .storage import LocalStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "storedCities"


class CityRepository(Protocol):
    """Loads and saves the ordered selection list."""

    def load(self) -> list[City]: ...

    def save(self, cities: list[City]) -> None: ...


class StoredCityRepository:
    """City repository backed by a single LocalStorage key."""

    def __init__(self, storage: LocalStorage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> list[City]:
        """Read the stored list, skipping records that no longer validate."""
        raw = self.storage.get_item(self.key)
        if not raw:
            return []
        if not isinstance(raw, list):
            logger.warning(f"Ignoring stored {self.key}: expected a list, got {type(raw).__name__}")
            return []

        cities = []
        for record in raw:
            try:
                cities.append(City.model_validate(record))
            except ValidationError as e:
                logger.warning(f"Skipping invalid stored city {record!r}: {e}")
        return cities

    def save(self, cities: list[City]) -> None:
        self.storage.set_item(self.key, [city.model_dump(mode="json") for city in cities])


class InMemoryCityRepository:
    """City repository that keeps the list for the lifetime of the process."""

    def __init__(self, cities: list[City] | None = None):
        self._cities = list(cities or [])
        self.save_count = 0

    def load(self) -> list[City]:
        return list(self._cities)

    def save(self, cities: list[City]) -> None:
        self._cities = list(cities)
        self.save_count += 1
