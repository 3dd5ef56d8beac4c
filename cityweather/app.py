"""Textual application wiring the controller to the UI components."""

import logging
from collections.abc import Awaitable

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Label

from .components import CityList, CityPicker, ForecastCard, StatusBar
from .controller import CitySelectionController, ForecastSource
from .models.config import Config
from .models.selection import SelectionState
from .services.city_repository import (
    CityRepository,
    InMemoryCityRepository,
    StoredCityRepository,
)
from .services.forecast_service import ForecastService
from .services.location_catalog import SampledLocationCatalog, load_locations
from .services.storage import LocalStorage

logger = logging.getLogger(__name__)


class CityWeatherApp(App):
    """Terminal weather lookup for a short list of cities."""

    TITLE = "City Weather"

    CSS = """
    #main {
        padding: 1 2;
    }

    #cities-header {
        padding: 1 0 0 0;
        color: $text-muted;
    }

    ForecastCard {
        margin: 1 0 0 0;
    }
    """

    BINDINGS = [
        Binding("r", "refresh", "Refresh"),
        Binding("x", "remove_focused", "Remove"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        config: Config | None = None,
        persist: bool = True,
        repository: CityRepository | None = None,
        forecasts: ForecastSource | None = None,
    ) -> None:
        super().__init__()
        self.config = config or Config()

        if repository is None:
            if persist:
                storage = LocalStorage(self.config.settings.storage_dir)
                repository = StoredCityRepository(storage)
            else:
                repository = InMemoryCityRepository()

        api = self.config.api
        self.catalog = SampledLocationCatalog(
            load_locations(self.config.catalog.locations_path),
            sample_every=self.config.catalog.sample_every,
        )
        if forecasts is None:
            forecasts = ForecastService(
                base_url=api.base_url,
                user_agent=api.user_agent,
                timeout=api.timeout_seconds,
            )
        self.controller = CitySelectionController(
            repository,
            forecasts,
            max_cities=self.config.settings.max_cities,
        )

    def compose(self) -> ComposeResult:
        with Vertical(id="main"):
            yield Label(f"[bold]{self.TITLE}[/bold]", id="title")
            yield CityPicker(id="city-picker")
            yield Label("", id="cities-header")
            yield CityList(id="city-list")
            yield ForecastCard(id="forecast-card")
        yield StatusBar()

    def on_mount(self) -> None:
        logger.debug(f"Catalog has {len(self.catalog)} locations")
        self.controller.subscribe(self._render_state)
        self.query_one(CityPicker).set_locations(
            self.catalog.search("", 0, self.config.catalog.page_size)
        )
        self.controller.load()

    def _render_state(self, state: SelectionState) -> None:
        """Push a controller snapshot into the widgets."""
        picker = self.query_one(CityPicker)
        picker.set_capacity_reached(not state.can_add, state.max_cities)

        self.query_one("#cities-header", Label).update(
            f"Cities {len(state.cities)}/{state.max_cities}"
        )
        self.query_one(CityList).update_cities(
            list(state.cities), state.focused_city.id if state.focused_city else None
        )

        card = self.query_one(ForecastCard)
        focused = state.focused_city
        if focused is None:
            card.clear()
        elif state.forecast is not None and state.forecast_city is not None and (
            state.forecast_city.id == focused.id or state.error
        ):
            # A failed fetch keeps showing the previous forecast
            card.update_forecast(state.forecast_city, state.forecast, state.last_updated)
        elif state.error:
            card.set_unavailable(focused)
        else:
            card.set_loading(focused)
        card.set_error(state.error)

        self.query_one(StatusBar).set_last_updated(state.last_updated)

    @work(group="forecast")
    async def _run(self, action: Awaitable[None], activity: str) -> None:
        """Run a controller action in a worker, showing activity meanwhile."""
        status = self.query_one(StatusBar)
        status.set_activity(activity)
        try:
            await action
        finally:
            status.clear_activity()

    def on_city_picker_query_changed(self, event: CityPicker.QueryChanged) -> None:
        self.query_one(CityPicker).set_locations(
            self.catalog.search(event.query, 0, self.config.catalog.page_size)
        )

    def on_city_picker_location_chosen(self, event: CityPicker.LocationChosen) -> None:
        self._run(self.controller.add_city(event.location), "Fetching forecast...")

    def on_city_list_city_selected(self, event: CityList.CitySelected) -> None:
        if event.city not in self.controller.cities:
            logger.debug(f"Ignoring selection of removed city {event.city.id}")
            return
        self._run(self.controller.select_city(event.city), "Fetching forecast...")

    def on_city_list_remove_requested(self, event: CityList.RemoveRequested) -> None:
        self._run(self.controller.remove_city(event.city.id), "Removing...")

    def action_refresh(self) -> None:
        """Refresh the focused city's forecast."""
        if self.controller.state.focused_city is None:
            self.notify("No city selected", severity="warning")
            return
        self._run(self.controller.refresh(), "Refreshing...")

    def action_remove_focused(self) -> None:
        """Remove the focused city."""
        focused = self.controller.state.focused_city
        if focused is None:
            return
        self._run(self.controller.remove_city(focused.id), "Removing...")
