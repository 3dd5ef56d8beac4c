"""Tests for City and Location models."""

import pytest
from pydantic import ValidationError

from cityweather.models.city import City, Location, city_id


class TestLocation:
    """Tests for Location model."""

    def test_label_with_state(self):
        """Test label combines city and state abbreviation."""
        loc = Location(city="Austin", state="Texas", state_abbr="TX", latitude=30.27, longitude=-97.74)
        assert loc.label == "Austin, TX"

    def test_label_without_state(self):
        """Test label falls back to the city name."""
        loc = Location(city="Somewhere", latitude=1, longitude=2)
        assert loc.label == "Somewhere"

    def test_id_from_coordinates(self):
        """Test id is derived from latitude and longitude."""
        loc = Location(city="A", latitude=10, longitude=20)
        assert loc.id == "10.0,20.0"

    def test_invalid_latitude(self):
        """Test that out-of-range latitude is rejected."""
        with pytest.raises(ValidationError):
            Location(city="A", latitude=91, longitude=0)

    def test_invalid_longitude(self):
        """Test that out-of-range longitude is rejected."""
        with pytest.raises(ValidationError):
            Location(city="A", latitude=0, longitude=-181)


class TestCity:
    """Tests for City model."""

    def test_from_location(self):
        """Test building a city from a catalog location."""
        loc = Location(city="Boston", state="Massachusetts", state_abbr="MA", latitude=42.36, longitude=-71.06)
        city = City.from_location(loc)
        assert city.id == loc.id
        assert city.name == "Boston"
        assert city.state == "Massachusetts"
        assert city.state_abbr == "MA"
        assert city.latitude == 42.36
        assert city.longitude == -71.06

    def test_same_coordinates_same_identity(self):
        """Test that two locations with equal coordinates share an id."""
        a = City.from_location(Location(city="A", latitude=10, longitude=20))
        b = City.from_location(Location(city="B", latitude=10.0, longitude=20.0))
        assert a.id == b.id

    def test_separator_avoids_collisions(self):
        """Test that coordinates which concatenate alike still differ."""
        assert city_id(1.2, 34) != city_id(1.23, 4)

    def test_immutable(self):
        """Test that cities cannot be modified once created."""
        city = City(id="1,2", name="A", latitude=1, longitude=2)
        with pytest.raises(ValidationError):
            city.name = "B"

    def test_blank_name_rejected(self):
        """Test that a blank name is rejected."""
        with pytest.raises(ValidationError):
            City(id="1,2", name="  ", latitude=1, longitude=2)

    def test_display_name(self):
        """Test display name formatting."""
        city = City(id="1,2", name="Denver", state="Colorado", state_abbr="CO", latitude=1, longitude=2)
        assert city.display_name == "Denver, CO"
        assert City(id="1,2", name="Denver", latitude=1, longitude=2).display_name == "Denver"

    def test_json_round_trip(self):
        """Test that a dumped city validates back to an equal city."""
        city = City(id="1,2", name="Denver", state="Colorado", state_abbr="CO", latitude=1, longitude=2)
        assert City.model_validate(city.model_dump(mode="json")) == city
