"""Application settings and configuration management."""
from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    DB_PATH: str = Field(default="data/atendimento.db")
    APP_CONFIG_PATH: str = Field(default="app_config.json")

    MIN_EVALUATION_MESSAGES: int = Field(default=4, ge=4)
    TIMING_MIN_MESSAGES: int = Field(default=3, ge=1)
    TIMING_WINDOW: int = Field(default=4, ge=1)
    DEFAULT_RUBRIC: Literal["principles", "sales_criteria"] = "principles"

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True, extra="ignore")


settings = Settings()
