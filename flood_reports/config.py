"""
Configuration settings for the flood-control reports pipeline.

Uses Pydantic Settings to load environment variables for file locations,
report thresholds, and logging. Report generators take the same values as
keyword arguments, so the defaults here only matter for the CLI.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Files
    input_path: str = Field("dpwh_flood_control_projects.csv", alias="FLOOD_INPUT_PATH")
    output_dir: str = Field("reports", alias="FLOOD_OUTPUT_DIR")

    # Year window
    start_year: int = Field(2021, alias="FLOOD_START_YEAR")
    end_year: int = Field(2023, alias="FLOOD_END_YEAR")

    # Report thresholds
    delay_threshold_days: int = Field(30, alias="FLOOD_DELAY_THRESHOLD_DAYS")
    reliability_delay_days: float = Field(90.0, alias="FLOOD_RELIABILITY_DELAY_DAYS")
    min_contractor_projects: int = Field(5, alias="FLOOD_MIN_CONTRACTOR_PROJECTS")
    top_contractors: int = Field(15, alias="FLOOD_TOP_CONTRACTORS")
    preview_rows: int = Field(2, alias="FLOOD_PREVIEW_ROWS")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="JSON_LOGS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
