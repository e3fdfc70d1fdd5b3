"""Configuration model and helpers.

Data contract:
- timezone: IANA zone current_time() reads "now" in (null = host local clock).
  Callers that pass no config get default_config(), i.e. Europe/Amsterdam.
- match_max_distance: ceiling best_match() applies when called with this
  config and no explicit max_distance (null = no ceiling)
- log_level: stdlib level name setup_logging() applies to the textalgos logger
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, field_validator

from .paths import config_path


class Config(BaseModel):
    """Root configuration model for textalgos."""

    timezone: Optional[str] = "Europe/Amsterdam"
    match_max_distance: Optional[int] = Field(default=None, ge=0)
    log_level: str = "INFO"

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    def level_number(self) -> int:
        """Return log_level as the numeric stdlib level."""
        return logging.getLevelName(self.log_level)


def default_config() -> Config:
    """Return default configuration values."""
    return Config(
        timezone="Europe/Amsterdam",
        match_max_distance=None,
        log_level="INFO",
    )


def load_config(path: Path | None = None) -> Config:
    """Load and validate config.yml from disk."""
    path = path or config_path()
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return Config.model_validate(data)


def save_config(config: Config, path: Path | None = None) -> None:
    """Save config.yml to disk."""
    path = path or config_path()
    payload = config.model_dump()
    path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
