"""Forecast card component for displaying the focused city's forecast."""

from datetime import datetime

from rich.style import Style
from rich.text import Text
from textual.app import ComposeResult
from textual.widgets import Label, Static

from ..models.city import City
from ..models.forecast import ForecastPeriod


def escape_markup(text: str) -> str:
    """Escape markup characters in API-provided text."""
    return text.replace("[", r"\[").replace("]", r"\]")


def icon_link(url: str) -> Text:
    """Render the icon URL as a terminal hyperlink."""
    text = Text("icon: ", style="dim")
    text.append(url, style=Style(link=url, underline=True))
    return text


def format_temperature(temperature: float, unit: str) -> str:
    """Return e.g. '72 °F'."""
    return f"{temperature:g} °{unit}"


def format_precipitation(probability: int | None) -> str:
    """Return e.g. '40% chance of precipitation', or '' when unknown."""
    if probability is None:
        return ""
    return f"{probability}% chance of precipitation"


def format_last_updated(when: datetime | None) -> str:
    """Return e.g. 'October 19, 2026 at 3:04:05 PM', with the zone name when known."""
    if when is None:
        return ""
    hour = when.hour % 12 or 12
    text = f"{when:%B} {when.day}, {when.year} at {hour}:{when:%M:%S} {when:%p}"
    zone = when.tzname()
    if zone:
        text = f"{text} {zone}"
    return text


def temperature_color(temperature: float, unit: str) -> str:
    """Get color for a temperature in either unit."""
    celsius = (temperature - 32) * 5 / 9 if unit.upper() == "F" else temperature
    if celsius <= 0:
        return "blue"
    elif celsius <= 10:
        return "cyan"
    elif celsius <= 20:
        return "green"
    elif celsius <= 30:
        return "yellow"
    return "red"


class ForecastCard(Static):
    """Card displaying the current forecast period for a city."""

    DEFAULT_CSS = """
    ForecastCard {
        height: auto;
        border: solid $primary;
        padding: 0 1;
    }

    ForecastCard #forecast-conditions {
        padding: 1 0 0 0;
    }

    ForecastCard #forecast-details {
        padding: 1 0;
    }

    ForecastCard #forecast-icon {
        color: $text-muted;
    }

    ForecastCard #forecast-updated {
        color: $text-muted;
    }

    ForecastCard #forecast-error {
        color: $error;
        display: none;
    }

    ForecastCard #forecast-error.visible {
        display: block;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._city: City | None = None
        self._forecast: ForecastPeriod | None = None

    def compose(self) -> ComposeResult:
        yield Static("[dim]Select a city to see its forecast[/dim]", id="forecast-header")
        yield Static("", id="forecast-conditions")
        yield Static("", id="forecast-details")
        yield Static("", id="forecast-icon")
        yield Static("", id="forecast-updated")
        yield Label("", id="forecast-error")

    def set_loading(self, city: City) -> None:
        """Show a loading state while the city's forecast is fetched."""
        if self._city is not None and self._city.id == city.id and self._forecast is not None:
            return
        self._show_placeholder(city, "[dim]Loading...[/dim]")

    def set_unavailable(self, city: City) -> None:
        """Show that no forecast could be retrieved for the city."""
        self._show_placeholder(city, "[dim]No forecast available[/dim]")

    def _show_placeholder(self, city: City, message: str) -> None:
        self._city = city
        self._forecast = None
        self.query_one("#forecast-header", Static).update(
            f"[bold]{escape_markup(city.name)}, {escape_markup(city.state)}[/bold]"
        )
        self.query_one("#forecast-conditions", Static).update(message)
        self.query_one("#forecast-details", Static).update("")
        self.query_one("#forecast-icon", Static).update("")
        self.query_one("#forecast-updated", Static).update("")

    def set_error(self, error: str) -> None:
        """Show an error below the card, keeping whatever forecast is displayed."""
        error_label = self.query_one("#forecast-error", Label)
        if error:
            error_label.update(f"[red]{escape_markup(error)}[/red]")
            error_label.add_class("visible")
        else:
            error_label.update("")
            error_label.remove_class("visible")

    def update_forecast(
        self, city: City, forecast: ForecastPeriod, last_updated: datetime | None = None
    ) -> None:
        """Render a forecast period for a city."""
        self._city = city
        self._forecast = forecast

        tc = temperature_color(forecast.temperature, forecast.temperature_unit)
        conditions = f"[{tc}]{format_temperature(forecast.temperature, forecast.temperature_unit)}[/{tc}]"
        precipitation = format_precipitation(forecast.probability_of_precipitation)
        if precipitation:
            conditions += f"    💧 {precipitation}"
        if forecast.name:
            conditions = f"[dim]{escape_markup(forecast.name)}[/dim]  {conditions}"

        self.query_one("#forecast-header", Static).update(
            f"[bold]{escape_markup(city.name)}, {escape_markup(city.state)}[/bold]"
        )
        self.query_one("#forecast-conditions", Static).update(conditions)
        self.query_one("#forecast-details", Static).update(
            escape_markup(forecast.detailed_forecast)
        )
        self.query_one("#forecast-icon", Static).update(icon_link(forecast.icon))
        self.query_one("#forecast-updated", Static).update(
            f"last updated: {format_last_updated(last_updated)}" if last_updated else ""
        )

    def clear(self) -> None:
        """Clear all data."""
        self._city = None
        self._forecast = None
        self.query_one("#forecast-header", Static).update(
            "[dim]Select a city to see its forecast[/dim]"
        )
        self.query_one("#forecast-conditions", Static).update("")
        self.query_one("#forecast-details", Static).update("")
        self.query_one("#forecast-icon", Static).update("")
        self.query_one("#forecast-updated", Static).update("")
