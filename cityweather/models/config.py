"""Configuration models using Pydantic for validation."""

from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from .. import __version__


class ApiConfig(BaseModel):
    """National Weather Service API configuration."""

    base_url: str = "https://api.weather.gov"
    user_agent: str = f"cityweather/{__version__}"
    timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate that URL is a valid HTTP/HTTPS URL."""
        try:
            parsed = urlparse(v)
            if parsed.scheme not in ("http", "https"):
                raise ValueError(f"URL must use http or https scheme, got '{parsed.scheme}'")
            if not parsed.netloc:
                raise ValueError("URL must have a valid host")
        except Exception as e:
            raise ValueError(f"Invalid URL '{v}': {e}")
        return v.rstrip("/")

    @field_validator("user_agent")
    @classmethod
    def validate_user_agent(cls, v: str) -> str:
        """The NWS API rejects requests without a User-Agent."""
        if not v.strip():
            raise ValueError("User agent must not be empty")
        return v


class CatalogConfig(BaseModel):
    """Location catalog configuration."""

    locations_path: Path | None = None  # Defaults to the bundled locations.json
    sample_every: int = Field(default=1, ge=1)
    page_size: int = Field(default=50, ge=1)


class Settings(BaseModel):
    """General application settings."""

    max_cities: int = Field(default=5, ge=1, le=20)
    storage_dir: str = ".cityweather"
    log_dir: str = "logs"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class Config(BaseModel):
    """Main configuration model."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    settings: Settings = Field(default_factory=Settings)

    @classmethod
    def load(cls, path: Path | str = "config.json") -> "Config":
        """Load configuration from a JSON file."""
        import json

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.model_validate(data)

    @classmethod
    def load_or_default(cls, path: Path | str = "config.json") -> "Config":
        """Load configuration or return default if file doesn't exist."""
        try:
            return cls.load(path)
        except FileNotFoundError:
            return cls()
