"""Tests for the NWS forecast service with mocked httpx."""

import httpx
import pytest
import respx

from cityweather.services.forecast_service import (
    ForecastError,
    ForecastService,
    format_coordinate,
)

BASE_URL = "https://test-nws.example.com"
POINTS_URL = f"{BASE_URL}/points/39.7456,-97.0892"
FORECAST_URL = f"{BASE_URL}/gridpoints/TOP/31,80/forecast"


@pytest.fixture
def service() -> ForecastService:
    return ForecastService(base_url=BASE_URL, user_agent="cityweather-tests", timeout=1.0)


@pytest.fixture
def points(points_payload) -> dict:
    points_payload["properties"]["forecast"] = FORECAST_URL
    return points_payload


class TestFormatCoordinate:
    """Tests for coordinate formatting."""

    def test_integral(self):
        assert format_coordinate(10) == "10"
        assert format_coordinate(-97.0) == "-97"

    def test_trims_trailing_zeros(self):
        assert format_coordinate(39.7450) == "39.745"

    def test_rounds_to_four_decimals(self):
        assert format_coordinate(39.745678) == "39.7457"

    def test_negative_zero(self):
        assert format_coordinate(-0.00001) == "0"


class TestFetchCurrentPeriod:
    """Tests for the two-step forecast lookup."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_success(self, service, points, forecast_payload):
        """Test that the first period of the linked forecast is returned."""
        points_route = respx.get(POINTS_URL).mock(return_value=httpx.Response(200, json=points))
        forecast_route = respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json=forecast_payload)
        )

        period = await service.fetch_current_period(39.7456, -97.0892)

        assert points_route.call_count == 1
        assert forecast_route.call_count == 1
        assert period.name == "This Afternoon"
        assert period.temperature == 72
        assert period.probability_of_precipitation == 40

    @pytest.mark.asyncio
    @respx.mock
    async def test_sends_headers(self, service, points, forecast_payload):
        """Test User-Agent and Accept headers on both requests."""
        points_route = respx.get(POINTS_URL).mock(return_value=httpx.Response(200, json=points))
        forecast_route = respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json=forecast_payload)
        )

        await service.fetch_current_period(39.7456, -97.0892)

        for route in (points_route, forecast_route):
            request = route.calls[0].request
            assert request.headers["user-agent"] == "cityweather-tests"
            assert request.headers["accept"] == "application/geo+json"

    @pytest.mark.asyncio
    @respx.mock
    async def test_follows_redirect(self, service, points, forecast_payload):
        """Test that a redirected points lookup is followed."""
        respx.get(f"{BASE_URL}/points/39.7456,-97.0892").mock(
            return_value=httpx.Response(301, headers={"Location": f"{BASE_URL}/points/39.746,-97.089"})
        )
        respx.get(f"{BASE_URL}/points/39.746,-97.089").mock(
            return_value=httpx.Response(200, json=points)
        )
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=forecast_payload))

        period = await service.fetch_current_period(39.7456, -97.0892)
        assert period.temperature == 72

    @pytest.mark.asyncio
    @respx.mock
    async def test_points_http_error(self, service):
        """Test that a failed points lookup raises ForecastError without retrying."""
        route = respx.get(POINTS_URL).mock(return_value=httpx.Response(500))

        with pytest.raises(ForecastError, match="HTTP 500"):
            await service.fetch_current_period(39.7456, -97.0892)
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_forecast_http_error(self, service, points):
        """Test that a failed forecast request raises ForecastError."""
        respx.get(POINTS_URL).mock(return_value=httpx.Response(200, json=points))
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(ForecastError, match="HTTP 503"):
            await service.fetch_current_period(39.7456, -97.0892)

    @pytest.mark.asyncio
    @respx.mock
    async def test_connection_error(self, service):
        """Test that transport errors are wrapped."""
        respx.get(POINTS_URL).mock(side_effect=httpx.ConnectError("boom"))

        with pytest.raises(ForecastError, match="Connection error") as exc_info:
            await service.fetch_current_period(39.7456, -97.0892)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout(self, service):
        """Test that timeouts are wrapped."""
        respx.get(POINTS_URL).mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(ForecastError, match="timeout"):
            await service.fetch_current_period(39.7456, -97.0892)

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_forecast_link(self, service):
        """Test a points response without a forecast link."""
        respx.get(POINTS_URL).mock(return_value=httpx.Response(200, json={"properties": {}}))

        with pytest.raises(ForecastError, match="no forecast link"):
            await service.fetch_current_period(39.7456, -97.0892)

    @pytest.mark.asyncio
    @respx.mock
    async def test_points_properties_not_an_object(self, service):
        """Test a points response whose properties is a string."""
        respx.get(POINTS_URL).mock(return_value=httpx.Response(200, json={"properties": "oops"}))

        with pytest.raises(ForecastError, match="no properties object"):
            await service.fetch_current_period(39.7456, -97.0892)

    @pytest.mark.asyncio
    @respx.mock
    async def test_forecast_properties_not_an_object(self, service, points):
        """Test a forecast response whose properties is a list."""
        respx.get(POINTS_URL).mock(return_value=httpx.Response(200, json=points))
        respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json={"properties": [{"periods": []}]})
        )

        with pytest.raises(ForecastError, match="no properties object"):
            await service.fetch_current_period(39.7456, -97.0892)

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_periods(self, service, points):
        """Test a forecast response with no periods."""
        respx.get(POINTS_URL).mock(return_value=httpx.Response(200, json=points))
        respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json={"properties": {"periods": []}})
        )

        with pytest.raises(ForecastError, match="no periods"):
            await service.fetch_current_period(39.7456, -97.0892)

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_properties(self, service):
        """Test a points response with no properties key at all."""
        respx.get(POINTS_URL).mock(return_value=httpx.Response(200, json={"type": "Feature"}))

        with pytest.raises(ForecastError):
            await service.fetch_current_period(39.7456, -97.0892)

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_period(self, service, points, forecast_payload):
        """Test a first period missing a required field."""
        del forecast_payload["properties"]["periods"][0]["detailedForecast"]
        respx.get(POINTS_URL).mock(return_value=httpx.Response(200, json=points))
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=forecast_payload))

        with pytest.raises(ForecastError, match="Parse error"):
            await service.fetch_current_period(39.7456, -97.0892)

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_json(self, service):
        """Test a non-JSON response body."""
        respx.get(POINTS_URL).mock(return_value=httpx.Response(200, text="<html>"))

        with pytest.raises(ForecastError, match="Invalid JSON"):
            await service.fetch_current_period(39.7456, -97.0892)
