"""Configuration management for D-NAV extraction.

Loads configuration from:
1. dnav.yaml in current directory
2. ~/.config/dnav/dnav.yaml
3. Environment variables (DNAV_* prefix)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Extraction tunables
MIN_SEGMENT_LENGTH = 45
MAX_SEGMENT_LENGTH = 240
REPEATED_LINE_SHARE = 0.4
SCORE_THRESHOLD = 20
MIN_CANDIDATES = 30
DUPLICATE_SIMILARITY_THRESHOLD = 0.86
TITLE_MAX_WORDS = 10
TITLE_MAX_CHARS = 80


class ExtractionConfig(BaseModel):
    """Decision-candidate extraction thresholds."""

    min_segment_length: int = MIN_SEGMENT_LENGTH
    max_segment_length: int = MAX_SEGMENT_LENGTH
    repeated_line_share: float = Field(default=REPEATED_LINE_SHARE, gt=0, le=1)
    score_threshold: int = SCORE_THRESHOLD
    min_candidates: int = Field(
        default=MIN_CANDIDATES,
        ge=0,
        description="Return at least this many candidates when the threshold is too strict",
    )
    duplicate_similarity: float = Field(default=DUPLICATE_SIMILARITY_THRESHOLD, gt=0, le=1)
    title_max_words: int = TITLE_MAX_WORDS
    title_max_chars: int = TITLE_MAX_CHARS


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Path | None = None


class Config(BaseSettings):
    """Main configuration for D-NAV extraction."""

    model_config = SettingsConfigDict(
        env_prefix="DNAV_",
        env_nested_delimiter="__",
    )

    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def find_config_file() -> Path | None:
    """Find the configuration file.

    Searches in order:
    1. ./dnav.yaml
    2. ~/.config/dnav/dnav.yaml
    """
    locations = [
        Path.cwd() / "dnav.yaml",
        Path.home() / ".config" / "dnav" / "dnav.yaml",
    ]

    for path in locations:
        if path.exists():
            return path

    return None


def load_config() -> Config:
    """Load configuration from file and environment.

    Returns:
        Config: The loaded configuration.
    """
    config_data: dict[str, Any] = {}

    config_file = find_config_file()
    if config_file:
        with open(config_file) as f:
            config_data = yaml.safe_load(f) or {}

    # Environment overrides for common settings
    env_overrides = {
        "DNAV_SCORE_THRESHOLD": ("extraction", "score_threshold"),
        "DNAV_MIN_CANDIDATES": ("extraction", "min_candidates"),
        "DNAV_LOG_LEVEL": ("logging", "level"),
    }

    for env_var, path in env_overrides.items():
        value = os.environ.get(env_var)
        if value:
            section, key = path
            if section not in config_data:
                config_data[section] = {}
            config_data[section][key] = value

    return Config(**config_data)


# Global config instance (lazy loaded)
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config: The configuration instance.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
