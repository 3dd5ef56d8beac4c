"""Entry point for running the weather app as a module."""

import argparse
import atexit
import logging
import signal
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from textual.app import App
from textual.logging import TextualHandler

from .app import CityWeatherApp
from .models.config import Config

_logger = logging.getLogger(__name__)

LOG_FILE_NAME = "cityweather.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUP_COUNT = 3

# SIGINT never arrives while Textual holds the terminal; ctrl+c is read as a key
SHUTDOWN_SIGNALS = ("SIGTERM", "SIGHUP")


def build_log_handler(log_dir: Path) -> logging.Handler:
    """Return a rotating file handler in log_dir.

    The app owns the terminal, so nothing is written to stderr. When log_dir
    cannot be created or written, records go to the Textual devtools console.
    """
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        _logger.warning(f"Cannot write logs to {log_dir}: {e}")
        return TextualHandler()


def setup_logging(log_level: str = "INFO", log_dir: Path | str = "logs") -> logging.Handler:
    """Attach a log handler to the root logger and return it.

    Args:
        log_level: The logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for the rotating log file
    """
    handler = build_log_handler(Path(log_dir))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper()))
    root.addHandler(handler)

    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return handler


def _log_shutdown() -> None:
    _logger.info("City Weather stopped")


def install_shutdown_handlers(app: App) -> None:
    """Exit the app cleanly when the process is asked to stop."""

    def handle(signum: int, frame: object) -> None:
        _logger.info(f"Received {signal.Signals(signum).name}, exiting")
        app.exit()

    for name in SHUTDOWN_SIGNALS:
        signum = getattr(signal, name, None)
        if signum is not None:
            signal.signal(signum, handle)

    atexit.register(_log_shutdown)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="City Weather - current NWS forecasts for up to five US cities"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config.json"),
        help="Path to configuration file (default: config.json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--no-persist",
        action="store_true",
        help="Keep the selected cities in memory only",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Show version and exit",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.version:
        from . import __version__

        print(f"City Weather v{__version__}")
        sys.exit(0)

    config = Config.load_or_default(args.config)

    log_level = "DEBUG" if args.verbose else config.settings.log_level
    setup_logging(log_level, config.settings.log_dir)

    if not args.config.exists():
        _logger.info(f"Config file not found: {args.config}, using defaults")

    app = CityWeatherApp(config=config, persist=not args.no_persist)
    install_shutdown_handlers(app)

    _logger.info(f"Starting City Weather, persistence {'off' if args.no_persist else 'on'}")
    app.run()


if __name__ == "__main__":
    main()
