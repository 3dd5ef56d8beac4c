"""Location catalog backing the city picker."""

import json
import logging
from pathlib import Path
from typing import Protocol

from ..models.city import Location

logger = logging.getLogger(__name__)

BUNDLED_LOCATIONS = Path(__file__).resolve().parent.parent / "data" / "locations.json"


class LocationCatalog(Protocol):
    """Searchable, paginated source of candidate locations."""

    def search(self, query: str = "", offset: int = 0, limit: int = 50) -> list[Location]: ...


def load_locations(path: Path | str | None = None) -> list[Location]:
    """Load catalog entries from a JSON file (the bundled list by default)."""
    path = Path(path) if path else BUNDLED_LOCATIONS
    if not path.exists():
        raise FileNotFoundError(f"Locations file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    locations = [Location.model_validate(entry) for entry in data]
    logger.debug(f"Loaded {len(locations)} locations from {path}")
    return locations


class SampledLocationCatalog:
    """In-memory catalog that keeps every n-th named location.

    Sampling bounds the option list for large source files; a backend query
    implementing the same search signature can replace it.
    """

    def __init__(self, locations: list[Location], sample_every: int = 1):
        if sample_every < 1:
            raise ValueError(f"sample_every must be at least 1, got {sample_every}")
        self._locations = [
            loc for i, loc in enumerate(locations) if i % sample_every == 0 and loc.city
        ]

    def __len__(self) -> int:
        return len(self._locations)

    def search(self, query: str = "", offset: int = 0, limit: int = 50) -> list[Location]:
        """Return up to `limit` matches for `query`, skipping the first `offset`."""
        if offset < 0:
            raise ValueError(f"offset must not be negative, got {offset}")
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")

        needle = query.strip().lower()
        if needle:
            matches = [
                loc
                for loc in self._locations
                if needle in loc.label.lower() or needle in loc.state.lower()
            ]
        else:
            matches = self._locations

        return matches[offset : offset + limit]
