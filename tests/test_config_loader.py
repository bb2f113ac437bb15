"""Unit tests for configuration loader."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from signal_bridge.config.loader import load_config


@pytest.fixture
def folders(tmp_path: Path) -> tuple[Path, Path]:
    signals = tmp_path / "signals"
    signals.mkdir()
    return signals, tmp_path / "journal"


def write_config(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_config_from_explicit_path(tmp_path: Path, folders: tuple[Path, Path]) -> None:
    """Test loading config from explicit file path."""
    signals, journal = folders
    config_file = write_config(
        tmp_path / "custom.json",
        {
            "signals_folder": str(signals),
            "journal_folder": str(journal),
            "poll_interval_seconds": 5,
            "duplicate_minutes": 2.5,
            "screenshot_region": {"x": 10, "y": 20, "width": 640, "height": 480},
        },
    )

    config = load_config(str(config_file))

    assert config.signals_folder == str(signals.resolve())
    assert config.journal_folder == str(journal.resolve())
    assert config.poll_interval_seconds == 5
    assert config.duplicate_minutes == 2.5
    assert config.screenshot_region.width == 640
    assert config.screenshot_region.is_whole_window is False


def test_load_config_creates_journal_folder(tmp_path: Path, folders: tuple[Path, Path]) -> None:
    """Test the journal folder is created when missing."""
    signals, journal = folders
    config_file = write_config(
        tmp_path / "config.json",
        {"signals_folder": str(signals), "journal_folder": str(journal / "nested")},
    )

    load_config(str(config_file))

    assert (journal / "nested").is_dir()


def test_load_config_legacy_camel_case_file(tmp_path: Path, folders: tuple[Path, Path]) -> None:
    """Test the legacy camelCase layout with flat Telegram keys."""
    signals, journal = folders
    config_file = write_config(
        tmp_path / "config.json",
        {
            "mt5WindowTitle": "MetaTrader 5 - Demo",
            "signalsFolder": str(signals),
            "journalFolder": str(journal),
            "telegramBotToken": "abc:123",
            "telegramChatId": 987654,
            "pollIntervalSeconds": 4,
            "duplicateMinutes": 10,
            "screenshotRegion": {"x": 0, "y": 0, "width": 0, "height": 0},
            "screenshotDelaySeconds": 1,
        },
    )

    config = load_config(str(config_file))

    assert config.mt5_window_title == "MetaTrader 5 - Demo"
    assert config.telegram.bot_token == "abc:123"
    assert config.telegram.chat_id == "987654"
    assert config.poll_interval_seconds == 4
    assert config.duplicate_minutes == 10
    assert config.screenshot_delay_seconds == 1
    assert config.screenshot_region.is_whole_window


def test_load_config_from_env_var(tmp_path: Path, folders: tuple[Path, Path], monkeypatch: pytest.MonkeyPatch) -> None:
    """Test loading config from SIGNAL_BRIDGE_CONFIG_PATH environment variable."""
    signals, journal = folders
    config_file = write_config(
        tmp_path / "env_config.json",
        {"signals_folder": str(signals), "journal_folder": str(journal), "duplicate_minutes": 7},
    )
    monkeypatch.setenv("SIGNAL_BRIDGE_CONFIG_PATH", str(config_file))

    config = load_config()
    assert config.duplicate_minutes == 7


def test_load_config_default_file_in_cwd(tmp_path: Path, folders: tuple[Path, Path], monkeypatch: pytest.MonkeyPatch) -> None:
    """Test config.json in the working directory is the default."""
    signals, journal = folders
    write_config(tmp_path / "config.json", {"signals_folder": str(signals), "journal_folder": str(journal)})
    monkeypatch.chdir(tmp_path)

    config = load_config()
    assert config.poll_interval_seconds == 3


def test_load_config_env_overrides(tmp_path: Path, folders: tuple[Path, Path], monkeypatch: pytest.MonkeyPatch) -> None:
    """Test SIGNAL_BRIDGE_* overrides beat file values, including camelCase keys."""
    signals, journal = folders
    config_file = write_config(
        tmp_path / "config.json",
        {
            "signals_folder": str(signals),
            "journal_folder": str(journal),
            "pollIntervalSeconds": 9,
            "telegram": {"botToken": "file-token", "chatId": "1"},
        },
    )
    monkeypatch.setenv("SIGNAL_BRIDGE_TELEGRAM_BOT_TOKEN", "env-token")
    monkeypatch.setenv("SIGNAL_BRIDGE_TELEGRAM_CHAT_ID", "42")
    monkeypatch.setenv("SIGNAL_BRIDGE_POLL_INTERVAL_SECONDS", "2")
    monkeypatch.setenv("SIGNAL_BRIDGE_DUPLICATE_MINUTES", "0.5")
    monkeypatch.setenv("SIGNAL_BRIDGE_LOG_LEVEL", "debug")

    config = load_config(str(config_file))

    assert config.telegram.bot_token == "env-token"
    assert config.telegram.chat_id == "42"
    assert config.poll_interval_seconds == 2
    assert config.duplicate_minutes == 0.5
    assert config.log_level == "DEBUG"


def test_load_config_file_not_found(tmp_path: Path) -> None:
    """Test error when config file doesn't exist."""
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_config(str(tmp_path / "nonexistent.json"))


def test_load_config_invalid_json(tmp_path: Path) -> None:
    """Test error when config file has invalid JSON."""
    config_file = tmp_path / "invalid.json"
    config_file.write_text("{invalid json")

    with pytest.raises(json.JSONDecodeError):
        load_config(str(config_file))


def test_load_config_missing_signals_folder(tmp_path: Path) -> None:
    """Test a signals folder that does not exist is fatal."""
    config_file = write_config(
        tmp_path / "config.json",
        {"signals_folder": str(tmp_path / "nope"), "journal_folder": str(tmp_path / "journal")},
    )

    with pytest.raises(FileNotFoundError, match="signals_folder does not exist"):
        load_config(str(config_file))


def test_load_config_requires_folders(tmp_path: Path) -> None:
    """Test signals_folder and journal_folder must be set."""
    config_file = write_config(tmp_path / "config.json", {"poll_interval_seconds": 3})

    with pytest.raises(ValidationError, match="Field required"):
        load_config(str(config_file))


def test_load_config_rejects_sub_second_poll(tmp_path: Path, folders: tuple[Path, Path]) -> None:
    """Test pollIntervalSeconds must be >= 1."""
    signals, journal = folders
    config_file = write_config(
        tmp_path / "config.json",
        {"signals_folder": str(signals), "journal_folder": str(journal), "poll_interval_seconds": 0},
    )

    with pytest.raises(ValidationError, match="greater than or equal to 1"):
        load_config(str(config_file))


def test_load_config_accepts_bom(tmp_path: Path, folders: tuple[Path, Path]) -> None:
    """Test a UTF-8 BOM written by Notepad is tolerated."""
    signals, journal = folders
    config_file = tmp_path / "config.json"
    payload = json.dumps({"signals_folder": str(signals), "journal_folder": str(journal)})
    config_file.write_bytes(b"\xef\xbb\xbf" + payload.encode("utf-8"))

    assert load_config(str(config_file)).signals_folder == str(signals.resolve())
