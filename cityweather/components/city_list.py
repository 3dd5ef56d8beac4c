"""City list component showing the selected cities."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import ListItem, ListView, Static

from ..models.city import City
from .forecast_card import escape_markup


class CityListItem(ListItem):
    """A single city chip in the list."""

    def __init__(self, city: City, focused: bool = False) -> None:
        super().__init__(classes="focused-city" if focused else "")
        self.city = city
        self.is_focused_city = focused

    def compose(self) -> ComposeResult:
        marker = "●" if self.is_focused_city else " "
        yield Static(f"{marker} {escape_markup(self.city.display_name)}", markup=True)


class CityList(ListView):
    """List view of selected cities with keyboard navigation."""

    DEFAULT_CSS = """
    CityList {
        height: auto;
        max-height: 7;
    }

    CityList ListItem {
        padding: 0 1;
    }

    CityList ListItem.focused-city {
        text-style: bold;
        color: $accent;
    }
    """

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("x", "remove_city", "Remove", show=True),
    ]

    class CitySelected(Message):
        """Message sent when a city is chosen from the list."""

        def __init__(self, city: City) -> None:
            super().__init__()
            self.city = city

    class RemoveRequested(Message):
        """Message sent when the user asks to remove a city."""

        def __init__(self, city: City) -> None:
            super().__init__()
            self.city = city

    def __init__(self, cities: list[City] | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._cities = cities or []
        self._focused_city_id: str | None = None

    def compose(self) -> ComposeResult:
        for city in self._cities:
            yield CityListItem(city, city.id == self._focused_city_id)

    def update_cities(self, cities: list[City], focused_id: str | None = None) -> None:
        """Rebuild the list when the selection or focus changed."""
        if [c.id for c in cities] == [c.id for c in self._cities] and focused_id == self._focused_city_id:
            return
        self._cities = list(cities)
        self._focused_city_id = focused_id
        self.clear()
        for city in self._cities:
            self.append(CityListItem(city, city.id == focused_id))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Translate the generic selection into a CitySelected message."""
        event.stop()
        if isinstance(event.item, CityListItem):
            self.post_message(self.CitySelected(event.item.city))

    def action_remove_city(self) -> None:
        """Request removal of the highlighted city."""
        if self.highlighted_child and isinstance(self.highlighted_child, CityListItem):
            self.post_message(self.RemoveRequested(self.highlighted_child.city))
