"""City picker component: a search box feeding a select of catalog locations."""

from textual.app import ComposeResult
from textual.message import Message
from textual.widgets import Input, Select, Static

from ..models.city import Location

DEFAULT_PROMPT = "Select a city"


def capacity_prompt(max_cities: int) -> str:
    return f"You have selected the max number of cities ({max_cities})"


class CityPicker(Static):
    """Search and select a location to add."""

    DEFAULT_CSS = """
    CityPicker {
        height: auto;
        layout: horizontal;
    }

    CityPicker #city-search {
        width: 1fr;
    }

    CityPicker #city-select {
        width: 2fr;
    }
    """

    class LocationChosen(Message):
        """Message sent when the user picks a location."""

        def __init__(self, location: Location) -> None:
            super().__init__()
            self.location = location

    class QueryChanged(Message):
        """Message sent when the search text changes."""

        def __init__(self, query: str) -> None:
            super().__init__()
            self.query = query

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._options: dict[str, Location] = {}

    def compose(self) -> ComposeResult:
        yield Input(placeholder="Search cities", id="city-search")
        yield Select([], prompt=DEFAULT_PROMPT, id="city-select")

    def set_locations(self, locations: list[Location]) -> None:
        """Replace the select options."""
        self._options = {loc.id: loc for loc in locations}
        self.query_one("#city-select", Select).set_options(
            (loc.label, loc.id) for loc in self._options.values()
        )

    def set_capacity_reached(self, reached: bool, max_cities: int) -> None:
        """Disable the picker once the selection list is full."""
        select = self.query_one("#city-select", Select)
        select.disabled = reached
        select.prompt = capacity_prompt(max_cities) if reached else DEFAULT_PROMPT
        self.query_one("#city-search", Input).disabled = reached

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(self.QueryChanged(event.value))

    def on_select_changed(self, event: Select.Changed) -> None:
        """Forward the chosen location and reset the select."""
        event.stop()
        if event.value is Select.BLANK:
            return
        location = self._options.get(event.value)
        if location is None:
            return
        self.post_message(self.LocationChosen(location))
        event.select.clear()
