"""Status bar component showing update status and keyboard hints."""

from datetime import datetime

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Static


def updated_text(last_updated: datetime | None, now: datetime) -> str:
    """Return the relative 'Updated ...' text for the status bar."""
    if last_updated is None:
        return ""
    if last_updated.tzinfo is not None and now.tzinfo is None:
        now = now.astimezone()
    minutes = int((now - last_updated).total_seconds() // 60)
    if minutes <= 0:
        return "Updated just now"
    elif minutes == 1:
        return "Updated 1 min ago"
    return f"Updated {minutes} mins ago"


class StatusBar(Horizontal):
    """Bottom status bar with time, update info, and keyboard hints."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        background: $surface-darken-1;
        color: $text-muted;
        padding: 0 1;
        width: 100%;
    }

    StatusBar #status-time {
        width: auto;
    }

    StatusBar #status-updated {
        width: auto;
        padding-left: 2;
    }

    StatusBar #status-activity {
        width: auto;
        padding-left: 2;
        color: $warning;
    }

    StatusBar #status-spacer {
        width: 1fr;
    }

    StatusBar #status-hints {
        width: auto;
        text-align: right;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._last_updated: datetime | None = None

    def compose(self) -> ComposeResult:
        yield Static("", id="status-time")
        yield Static("", id="status-updated")
        yield Static("", id="status-activity")
        yield Static("", id="status-spacer")
        yield Static(
            "[dim]enter[/dim] Select  [dim]x[/dim] Remove  [dim]r[/dim] Refresh  [dim]q[/dim] Quit",
            id="status-hints",
        )

    def on_mount(self) -> None:
        """Start clock update timer."""
        self.set_interval(1, self._update_time)

    def _update_time(self) -> None:
        """Update the current time display."""
        now = datetime.now()
        self.query_one("#status-time", Static).update(f"[bold]{now.strftime('%H:%M:%S')}[/bold]")
        text = updated_text(self._last_updated, now)
        self.query_one("#status-updated", Static).update(f"[dim]{text}[/dim]" if text else "")

    def set_last_updated(self, time: datetime | None) -> None:
        """Update the last forecast update timestamp."""
        self._last_updated = time
        self._update_time()

    def set_activity(self, activity: str) -> None:
        """Set current activity message (e.g., 'Fetching forecast...')."""
        self.query_one("#status-activity", Static).update(
            f"[yellow]{activity}[/yellow]" if activity else ""
        )

    def clear_activity(self) -> None:
        """Clear activity message."""
        self.set_activity("")
