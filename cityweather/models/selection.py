"""Selection state snapshot shared between the controller and the UI."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .city import City
from .forecast import ForecastPeriod


class SelectionState(BaseModel):
    """Immutable view of the controller state at one point in time."""

    model_config = ConfigDict(frozen=True)

    cities: tuple[City, ...] = ()
    focused_city: City | None = None
    forecast: ForecastPeriod | None = None
    forecast_city: City | None = None  # City the forecast was fetched for
    last_updated: datetime | None = None
    error: str = ""
    max_cities: int = Field(default=5, ge=1)

    @property
    def can_add(self) -> bool:
        """Whether another city can be added."""
        return len(self.cities) < self.max_cities

    @property
    def open_slots(self) -> int:
        """Number of free places left in the selection list."""
        return max(self.max_cities - len(self.cities), 0)
