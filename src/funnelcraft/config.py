"""Configuration management for Funnelcraft."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.composer import DEFAULT_COLOR, is_valid_color

logger = logging.getLogger(__name__)

FUNNELCRAFT_HOME = Path(os.environ.get("FUNNELCRAFT_HOME", Path.home() / "funnelcraft"))
CONFIG_FILE = FUNNELCRAFT_HOME / "config" / "funnelcraft.conf"
DATA_DIR = FUNNELCRAFT_HOME / "data"


@dataclass
class Config:
    """Funnelcraft configuration."""

    catalog_source: str = "file"
    catalog_file: str = ""
    funnel_store: str = "file"
    data_dir: str = ""
    default_color: str = DEFAULT_COLOR
    # Supabase (PostgREST) settings
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_user_id: str = ""
    request_timeout: int = 30


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment on unquoted values."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from funnelcraft.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        logger.debug(f"No config file at {path}, using defaults")
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        raw = value.strip()
        value = _unquote(raw)

        match key:
            case "catalog_source":
                config.catalog_source = value.lower()
            case "catalog_file":
                config.catalog_file = value
            case "funnel_store":
                config.funnel_store = value.lower()
            case "data_dir":
                config.data_dir = value
            case "default_color":
                # Hex colours start with "#", so an unquoted one is not a comment
                color = raw.split()[0] if raw.startswith("#") else value
                if is_valid_color(color):
                    config.default_color = color
                else:
                    logger.warning(f"Invalid DEFAULT_COLOR {color!r}, keeping {config.default_color}")
            case "supabase_url":
                config.supabase_url = value.rstrip("/")
            case "supabase_key":
                config.supabase_key = value
            case "supabase_user_id":
                config.supabase_user_id = value
            case "request_timeout":
                try:
                    config.request_timeout = int(value)
                except ValueError:
                    logger.warning(f"Invalid REQUEST_TIMEOUT {value!r}, keeping {config.request_timeout}")

    return config
