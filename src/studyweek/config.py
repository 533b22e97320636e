"""Configuration management for studyweek."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from studyweek.core.engine import SchedulingConfig

logger = logging.getLogger(__name__)

STUDYWEEK_HOME = Path(os.environ.get("STUDYWEEK_HOME", Path.home() / "studyweek"))
CONFIG_FILE = STUDYWEEK_HOME / "config" / "studyweek.conf"
DATA_DIR = STUDYWEEK_HOME / "data"


@dataclass
class Config:
    """studyweek configuration."""

    max_session_length: int = 60
    min_session_length: int = 5
    buffer_time: int = 5
    max_study_hours_per_week: float | None = None
    merge_overlaps: bool = False
    timezone: str = ""
    data_dir: str = ""
    # Remote store settings
    api_base_url: str = ""
    api_token: str = ""
    calendar_base_url: str = "http://localhost:5001"

    def scheduling(self) -> SchedulingConfig:
        """Engine settings from this config."""
        return SchedulingConfig(
            max_session_length=self.max_session_length,
            min_session_length=self.min_session_length,
            buffer_time=self.buffer_time,
            max_study_hours_per_week=self.max_study_hours_per_week,
            merge_overlaps=self.merge_overlaps,
        )

    def resolved_data_dir(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        number = int(value)
    except ValueError:
        logger.warning(f"Invalid {key.upper()} value {value!r}, using {default}")
        return default
    if number < 0:
        logger.warning(f"Negative {key.upper()} value {value!r}, using {default}")
        return default
    return number


def _parse_bool(value: str) -> bool:
    return value.lower() in ("1", "true", "yes", "on")


def load_config() -> Config:
    """Load configuration from studyweek.conf file."""
    config = Config()

    if not CONFIG_FILE.exists():
        return config

    for line in CONFIG_FILE.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Handle quoted values with inline comments: "value" # comment
        if value.startswith('"') or value.startswith("'"):
            quote = value[0]
            end_quote = value.find(quote, 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif "#" in value:
            value = value.split("#")[0].strip()

        match key:
            case "max_session_length":
                config.max_session_length = _parse_int(key, value, config.max_session_length)
                if config.max_session_length == 0:
                    logger.warning("MAX_SESSION_LENGTH must be positive, using 60")
                    config.max_session_length = 60
            case "min_session_length":
                config.min_session_length = _parse_int(key, value, config.min_session_length)
            case "buffer_time":
                config.buffer_time = _parse_int(key, value, config.buffer_time)
            case "max_study_hours_per_week":
                if not value:
                    config.max_study_hours_per_week = None
                    continue
                try:
                    config.max_study_hours_per_week = float(value)
                except ValueError:
                    logger.warning(f"Invalid MAX_STUDY_HOURS_PER_WEEK value {value!r}, ignoring")
            case "merge_overlaps":
                config.merge_overlaps = _parse_bool(value)
            case "timezone":
                config.timezone = value
            case "data_dir":
                config.data_dir = value
            case "api_base_url":
                config.api_base_url = value.rstrip("/")
            case "api_token":
                config.api_token = value
            case "calendar_base_url":
                config.calendar_base_url = value.rstrip("/")
            case _:
                logger.debug(f"Ignoring unknown config key {key.upper()}")

    return config
