"""Configuration management for StudyNext."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

STUDYNEXT_HOME = Path(os.environ.get("STUDYNEXT_HOME", Path.home() / "studynext"))
CONFIG_FILE = STUDYNEXT_HOME / "config" / "studynext.conf"
DATA_DIR = STUDYNEXT_HOME / "data"


@dataclass
class Config:
    """StudyNext configuration."""

    user_id: str = "local"
    display_name: str = "Student"
    plan: str = "free"
    api_base_url: str = ""
    api_token: str = ""
    data_dir: str = ""
    timezone: str = "America/Toronto"
    tonight_start_hour: int = 19
    week_start_day: str = "Sunday"
    free_active_limit: int = 10
    history_days: int = 30
    reminder_interval_minutes: int = 15
    # Telegram bot settings
    telegram_bot_token: str = ""
    telegram_allowed_users: list[int] = field(default_factory=list)

    @property
    def is_premium(self) -> bool:
        return self.plan == "premium"

    @property
    def data_path(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}, using {default}")
        return default


def load_config(path: Path | None = None) -> Config:
    """Load configuration from studynext.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
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
            if end_quote != -1:
                value = value[1:end_quote]
            else:
                value = value[1:]
        else:
            # Unquoted: strip inline comments
            if "#" in value:
                value = value.split("#")[0].strip()

        match key:
            case "user_id":
                config.user_id = value
            case "display_name":
                config.display_name = value
            case "plan":
                config.plan = value.lower()
            case "api_base_url":
                config.api_base_url = value.rstrip("/")
            case "api_token":
                config.api_token = value
            case "data_dir":
                config.data_dir = value
            case "timezone":
                config.timezone = value
            case "tonight_start_hour":
                config.tonight_start_hour = _parse_int(key, value, config.tonight_start_hour)
            case "week_start_day":
                config.week_start_day = value
            case "free_active_limit":
                config.free_active_limit = _parse_int(key, value, config.free_active_limit)
            case "history_days":
                config.history_days = _parse_int(key, value, config.history_days)
            case "reminder_interval_minutes":
                config.reminder_interval_minutes = _parse_int(
                    key, value, config.reminder_interval_minutes
                )
            case "telegram_bot_token":
                config.telegram_bot_token = value
            case "telegram_allowed_users":
                config.telegram_allowed_users = [int(u.strip()) for u in value.split(",") if u.strip()]
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
