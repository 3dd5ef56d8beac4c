"""City and catalog location models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


def city_id(latitude: float, longitude: float) -> str:
    """Build the identity key for a pair of coordinates."""
    return f"{latitude},{longitude}"


class Location(BaseModel):
    """A single entry in the bundled location catalog."""

    city: str = ""
    state: str = ""
    state_abbr: str = ""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    @property
    def id(self) -> str:
        return city_id(self.latitude, self.longitude)

    @property
    def label(self) -> str:
        """Return 'City, ST' for display in the picker."""
        if self.state_abbr:
            return f"{self.city}, {self.state_abbr}"
        return self.city


class City(BaseModel):
    """A city the user has added to the selection list."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    state: str = ""
    state_abbr: str = ""
    latitude: float
    longitude: float

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject blank city names."""
        if not v.strip():
            raise ValueError("City name must not be empty")
        return v

    @classmethod
    def from_location(cls, location: Location) -> "City":
        """Create a city from a catalog location."""
        return cls(
            id=location.id,
            name=location.city,
            state=location.state,
            state_abbr=location.state_abbr,
            latitude=location.latitude,
            longitude=location.longitude,
        )

    @property
    def display_name(self) -> str:
        """Return 'Name, ST' for the city list."""
        if self.state_abbr:
            return f"{self.name}, {self.state_abbr}"
        return self.name
