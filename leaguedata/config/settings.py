import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MASTER_REGISTRY_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vSbCy1pnMHPC-i_MU3x2U8ESVtSeDu7M8RrDbNxl0D-aT-TFlJJ9o7KDMyugap2vlQgTCF8y5FSwLT2"
    "/pub?output=csv"
)


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Data Sources
    master_registry_url: str = Field(
        DEFAULT_MASTER_REGISTRY_URL,
        description="Location of the master league registry (CSV, one row per league).",
    )
    http_timeout_seconds: float = Field(
        30.0,
        gt=0,
        description="Timeout for the default HTTP client when the caller supplies none.",
    )
    fetch_max_attempts: int = Field(
        1,
        ge=1,
        description="Fetch attempts per resource. 1 means a single attempt, no retry.",
    )

    # Layout
    standings_max_per_chunk: int = Field(
        9, ge=1, description="Maximum teams per standings page."
    )
    schedule_split_threshold: int = Field(
        10,
        ge=1,
        description="Schedule groups with more games than this are split in two.",
    )

    # Leaderboards
    gaa_min_games_ratio: float = Field(
        0.44,
        ge=0,
        le=1,
        description="Share of the pool's max games played a goalie needs for the GAA board.",
    )
    points_leaders: int = Field(5, ge=1)
    goals_leaders: int = Field(3, ge=1)
    ppg_leaders: int = Field(3, ge=1)
    gaa_leaders: int = Field(3, ge=1)
    min_division_players: int = Field(
        5,
        ge=0,
        description="Divisions with fewer player stat lines get no stat leaders.",
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
