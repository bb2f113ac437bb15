import os
from datetime import datetime
from pathlib import Path
from typing import Generator

import pytest

from signal_bridge.config.models import BridgeConfig
from signal_bridge.models.signal import Signal


@pytest.fixture(autouse=True)
def clean_config_env() -> Generator[None, None, None]:
    """Ensure SIGNAL_BRIDGE_* env vars do not interfere with tests unless explicitly set."""
    # Store original values
    original_env = {}
    keys_to_clear = [key for key in os.environ if key.startswith("SIGNAL_BRIDGE_")]

    for key in keys_to_clear:
        original_env[key] = os.environ.pop(key)

    yield

    # Restore
    for key, value in original_env.items():
        os.environ[key] = value


@pytest.fixture
def bridge_config(tmp_path: Path) -> BridgeConfig:
    """Config pointing at temporary signals/journal folders."""
    signals = tmp_path / "signals"
    journal = tmp_path / "journal"
    signals.mkdir()
    journal.mkdir()
    return BridgeConfig(
        signals_folder=str(signals),
        journal_folder=str(journal),
        duplicate_minutes=5,
        screenshot_delay_seconds=2,
    )


@pytest.fixture
def signal() -> Signal:
    return Signal(
        timestamp=datetime(2024, 1, 15, 9, 30, 0),
        symbol="EURUSD",
        strategy="OB",
        session="London",
    )


class FakeSleep:
    """Records requested delays instead of waiting."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()
