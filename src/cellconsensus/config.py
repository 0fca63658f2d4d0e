from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (.env file).

    Holds the sentinel label, the spellings treated as missing labels,
    output locations and logging configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Voting
    sentinel_label: str = "ambiguous"
    missing_values: list[str] = [
        "",
        "na",
        "nan",
        "none",
        "null",
        "unassigned",
        "unknown",
    ]

    # Directory Paths
    results_dir: Path = Path("results")

    # Logging Configuration
    log_level: str = "INFO"
    log_format: str = "{time} | {level} | {message}"
