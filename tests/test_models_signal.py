"""Unit tests for the Signal model."""

import dataclasses
from datetime import datetime

import pytest

from signal_bridge.models.signal import Signal


def test_signal_creation_valid(signal: Signal) -> None:
    """Test creating a valid signal."""
    assert signal.symbol == "EURUSD"
    assert signal.strategy == "OB"
    assert signal.session == "London"


def test_signal_default_session() -> None:
    """Test session defaults to empty string."""
    s = Signal(timestamp=datetime(2024, 1, 15), symbol="EURUSD", strategy="OB")
    assert s.session == ""


def test_signal_is_immutable(signal: Signal) -> None:
    """Test signals cannot be mutated after construction."""
    with pytest.raises(dataclasses.FrozenInstanceError):
        signal.symbol = "GBPUSD"  # type: ignore[misc]


def test_signal_rejects_empty_symbol() -> None:
    """Test empty symbol is rejected."""
    with pytest.raises(ValueError, match="symbol"):
        Signal(timestamp=datetime(2024, 1, 15), symbol="", strategy="OB")


def test_signal_rejects_empty_strategy() -> None:
    """Test empty strategy is rejected."""
    with pytest.raises(ValueError, match="strategy"):
        Signal(timestamp=datetime(2024, 1, 15), symbol="EURUSD", strategy="")


def test_signal_dedup_key(signal: Signal) -> None:
    """Test dedup key is (symbol, strategy)."""
    assert signal.dedup_key == ("EURUSD", "OB")


def test_signal_describe() -> None:
    """Test describe omits a trailing blank session."""
    s = Signal(timestamp=datetime(2024, 1, 15), symbol="EURUSD", strategy="OB")
    assert s.describe() == "EURUSD OB"
