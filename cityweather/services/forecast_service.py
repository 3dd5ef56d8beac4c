"""Forecast service using the National Weather Service API."""

import logging

import httpx
from pydantic import ValidationError

from .. import __version__
from ..models.forecast import ForecastPeriod

logger = logging.getLogger(__name__)

# api.weather.gov is free and needs no key, only a User-Agent
API_BASE_URL = "https://api.weather.gov"
DEFAULT_USER_AGENT = f"cityweather/{__version__}"

FORECAST_ERROR_MESSAGE = (
    "An error has occurred, most likely caused by a missing property in the "
    "weather response, or the API being down"
)


class ForecastError(Exception):
    """Raised when a forecast cannot be retrieved or understood."""


def format_coordinate(value: float) -> str:
    """Format a coordinate with at most four decimals, as the points endpoint expects."""
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


class ForecastService:
    """Resolves the forecast for a pair of coordinates.

    The lookup takes two requests: the points endpoint maps coordinates to a
    forecast office grid and links to its forecast, which is then fetched.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout

    @property
    def headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": "application/geo+json"}

    def points_url(self, latitude: float, longitude: float) -> str:
        return f"{self.base_url}/points/{format_coordinate(latitude)},{format_coordinate(longitude)}"

    async def fetch_current_period(self, latitude: float, longitude: float) -> ForecastPeriod:
        """Return the first forecast period for the given coordinates.

        Raises:
            ForecastError: on any network, HTTP or payload problem.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, headers=self.headers, follow_redirects=True
            ) as client:
                points = await self._get_json(client, self.points_url(latitude, longitude))
                forecast_url = self._extract_forecast_url(points)
                forecast = await self._get_json(client, forecast_url)

            return self._parse_first_period(forecast)

        except httpx.TimeoutException as e:
            logger.warning(f"Timeout fetching forecast for {latitude},{longitude}")
            raise ForecastError("Request timeout") from e

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"HTTP error fetching forecast: {status} for {e.request.url}")
            raise ForecastError(f"HTTP {status}") from e

        except httpx.RequestError as e:
            logger.error(f"Connection error fetching forecast: {e}")
            raise ForecastError("Connection error") from e

    async def _get_json(self, client: httpx.AsyncClient, url: str) -> dict:
        logger.debug(f"GET {url}")
        response = await client.get(url)
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as e:
            raise ForecastError(f"Invalid JSON from {url}") from e
        if not isinstance(data, dict):
            raise ForecastError(f"Unexpected payload from {url}")
        return data

    def _properties(self, payload: dict, what: str) -> dict:
        properties = payload.get("properties")
        if not isinstance(properties, dict):
            raise ForecastError(f"{what} response has no properties object")
        return properties

    def _extract_forecast_url(self, points: dict) -> str:
        """Pull the forecast link out of a points response."""
        properties = self._properties(points, "Points")
        forecast_url = properties.get("forecast")
        if not forecast_url or not isinstance(forecast_url, str):
            raise ForecastError("Points response has no forecast link")
        return forecast_url

    def _parse_first_period(self, forecast: dict) -> ForecastPeriod:
        """Parse the first period of a forecast response."""
        properties = self._properties(forecast, "Forecast")
        periods = properties.get("periods")
        if not periods or not isinstance(periods, list):
            raise ForecastError("Forecast response has no periods")

        try:
            return ForecastPeriod.model_validate(periods[0])
        except ValidationError as e:
            logger.error(f"Error parsing forecast period: {e}")
            raise ForecastError(f"Parse error: {e.error_count()} invalid field(s)") from e
