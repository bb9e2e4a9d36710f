"""Configuration management for FlexWise."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

FLEXWISE_HOME = Path(os.environ.get("FLEXWISE_HOME", Path.home() / "flexwise"))
CONFIG_FILE = FLEXWISE_HOME / "config" / "flexwise.conf"
DATA_DIR = FLEXWISE_HOME / "data"

SORT_CHOICES = ("priority", "due", "none")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class Config:
    """FlexWise configuration."""

    data_file: str = ""
    timezone: str = "Europe/Berlin"
    teacher_name: str = ""
    default_sort: str = "priority"
    show_completed: bool = False
    upcoming_window_minutes: int = 30
    log_level: str = "WARNING"

    @property
    def tasks_path(self) -> Path:
        if self.data_file:
            return Path(self.data_file).expanduser()
        return DATA_DIR / "tasks.json"


def _strip_value(value: str) -> str:
    """Remove surrounding quotes, or an inline comment from unquoted values."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def _parse_bool(key: str, value: str, default: bool) -> bool:
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    logger.warning(f"Invalid boolean for {key.upper()}: {value!r}, using {default}")
    return default


def load_config(path: Path | None = None) -> Config:
    """Load configuration from flexwise.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _strip_value(value.strip())

        match key:
            case "data_file":
                config.data_file = value
            case "timezone":
                config.timezone = value
            case "teacher_name":
                config.teacher_name = value
            case "default_sort":
                if value in SORT_CHOICES:
                    config.default_sort = value
                else:
                    logger.warning(f"Unknown DEFAULT_SORT {value!r}, using {config.default_sort!r}")
            case "show_completed":
                config.show_completed = _parse_bool(key, value, config.show_completed)
            case "upcoming_window_minutes":
                try:
                    config.upcoming_window_minutes = int(value)
                except ValueError:
                    logger.warning(f"Invalid UPCOMING_WINDOW_MINUTES: {value!r}")
            case "log_level":
                if value.upper() in LOG_LEVELS:
                    config.log_level = value.upper()
                else:
                    logger.warning(f"Unknown LOG_LEVEL {value!r}, using {config.log_level!r}")
            case _:
                logger.debug(f"Ignoring unknown config key {key!r}")

    return config
