"""Forecast data models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ForecastPeriod(BaseModel):
    """One forecast period from the NWS forecast endpoint.

    Field names follow Python conventions; the camelCase names used by the
    API are accepted through aliases.
    """

    model_config = ConfigDict(populate_by_name=True)

    temperature: float
    temperature_unit: str = Field(alias="temperatureUnit")
    probability_of_precipitation: int | None = Field(
        default=None, alias="probabilityOfPrecipitation"
    )
    detailed_forecast: str = Field(alias="detailedForecast")
    icon: str
    name: str = ""
    short_forecast: str = Field(default="", alias="shortForecast")
    is_daytime: bool | None = Field(default=None, alias="isDaytime")
    start_time: datetime | None = Field(default=None, alias="startTime")
    end_time: datetime | None = Field(default=None, alias="endTime")

    @field_validator("probability_of_precipitation", mode="before")
    @classmethod
    def unwrap_quantity(cls, v):
        """Unwrap the API's {"unitCode": ..., "value": n} quantity object."""
        if isinstance(v, dict):
            v = v.get("value")
        if v is None:
            return None
        return round(float(v))

    @field_validator("temperature_unit")
    @classmethod
    def validate_unit(cls, v: str) -> str:
        """Require a non-empty unit token."""
        if not v.strip():
            raise ValueError("Temperature unit must not be empty")
        return v.strip()
