# weathernav/core/config.py
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (.env file).

    Provider services receive an instance of this class at construction time;
    the route-weather pipeline itself never reads configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "WeatherNav API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Provider credentials. Empty/missing means "skip this provider".
    MAPBOX_TOKEN: Optional[str] = None
    OPENROUTE_API_KEY: Optional[str] = None
    OPENWEATHER_API_KEY: Optional[str] = None

    # Nominatim rejects requests without an identifying User-Agent
    NOMINATIM_USER_AGENT: str = "WeatherNavApp/1.0"

    HTTP_TIMEOUT_S: float = 10.0

    # Straight-line fallback route
    STRAIGHT_LINE_POINTS: int = 10
    STRAIGHT_LINE_DURATION_S: float = 3600.0


settings = Settings()
