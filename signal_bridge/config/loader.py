"""Configuration loader with JSON file and environment variable support."""

import json
import os
from pathlib import Path
from typing import Any

from pydantic.alias_generators import to_camel

from .models import BridgeConfig

CONFIG_PATH_ENV = "SIGNAL_BRIDGE_CONFIG_PATH"
DEFAULT_CONFIG_FILE = "config.json"


def resolve_config_path(config_path: str | None = None) -> Path:
    """Pick the config file: explicit argument, env var, then config.json in the cwd."""
    if config_path is None:
        config_path = os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_FILE)
    return Path(config_path).expanduser().resolve()


def load_config(config_path: str | None = None) -> BridgeConfig:
    """
    Load configuration from JSON file with environment variable overrides.

    Priority: env vars > config file > defaults

    Args:
        config_path: Path to JSON config file. If None, uses SIGNAL_BRIDGE_CONFIG_PATH
                     or defaults to 'config.json' in the working directory.

    Returns:
        Validated BridgeConfig with absolute folder paths

    Raises:
        FileNotFoundError: If the config file or the signals folder doesn't exist
        json.JSONDecodeError: If config file has invalid JSON
        pydantic.ValidationError: If config values are invalid
    """
    config_file = resolve_config_path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_file}")

    # utf-8-sig: editors on Windows like to prepend a BOM
    with open(config_file, encoding="utf-8-sig") as f:
        config_data: dict[str, Any] = json.load(f)

    # Apply environment variable overrides
    # Format: SIGNAL_BRIDGE_TELEGRAM_BOT_TOKEN, SIGNAL_BRIDGE_DUPLICATE_MINUTES, etc.
    if bot_token := os.environ.get("SIGNAL_BRIDGE_TELEGRAM_BOT_TOKEN"):
        _override(config_data.setdefault("telegram", {}), "bot_token", bot_token)

    if chat_id := os.environ.get("SIGNAL_BRIDGE_TELEGRAM_CHAT_ID"):
        _override(config_data.setdefault("telegram", {}), "chat_id", chat_id)

    if poll_interval := os.environ.get("SIGNAL_BRIDGE_POLL_INTERVAL_SECONDS"):
        _override(config_data, "poll_interval_seconds", int(poll_interval))

    if duplicate_minutes := os.environ.get("SIGNAL_BRIDGE_DUPLICATE_MINUTES"):
        _override(config_data, "duplicate_minutes", float(duplicate_minutes))

    if log_level := os.environ.get("SIGNAL_BRIDGE_LOG_LEVEL"):
        _override(config_data, "log_level", log_level)

    config = BridgeConfig(**config_data)
    return prepare_folders(config)


def prepare_folders(config: BridgeConfig) -> BridgeConfig:
    """
    Resolve folders to absolute paths and make sure they are usable.

    The signals folder must already exist (the platform owns it); the
    journal folder is created on demand.

    Raises:
        FileNotFoundError: If the signals folder does not exist
    """
    signals_folder = Path(config.signals_folder).expanduser().resolve()
    if not signals_folder.is_dir():
        raise FileNotFoundError(f"signals_folder does not exist: {signals_folder}")

    journal_folder = Path(config.journal_folder).expanduser().resolve()
    journal_folder.mkdir(parents=True, exist_ok=True)

    return config.model_copy(
        update={
            "signals_folder": str(signals_folder),
            "journal_folder": str(journal_folder),
        }
    )


def _override(section: dict[str, Any], field: str, value: Any) -> None:
    """Set a snake_case key, dropping its camelCase spelling so the override wins."""
    section.pop(to_camel(field), None)
    section[field] = value
