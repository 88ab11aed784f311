# gymfinder/core/config.py
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    api_url: str = "http://localhost:5001"  # primary backend (catalog + scout submission)
    overpass_url: str = "https://overpass-api.de/api/interpreter"
    user_agent: str = "GymFinder/0.1"

    discovery_radius_m: int = Field(default=5000, gt=0)
    discovery_limit: int = Field(default=20, gt=0)
    default_center_lat: float = Field(default=32.7157, ge=-90.0, le=90.0)
    default_center_lng: float = Field(default=-117.1611, ge=-180.0, le=180.0)

    fly_to_zoom: float = 14
    fly_to_duration_ms: int = Field(default=1500, ge=0)

    # Sheet release offsets (pixels). Positive = downward.
    sheet_close_drag_threshold: float = Field(default=100.0, ge=0.0)
    sheet_open_drag_threshold: float = Field(default=100.0, ge=0.0)

    http_timeout_s: float = Field(default=10.0, gt=0.0)
    http_retries: int = Field(default=3, ge=1)
    discovery_timeout_s: float = Field(default=25.0, gt=0.0)

    session_file: Path = Path.home() / ".gymfinder" / "session.json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="GYMFINDER_",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
