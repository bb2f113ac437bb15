"""Parser for the ``key = value`` signal files written by the expert advisor."""

import re
from collections.abc import Iterable, Sequence
from datetime import datetime

from signal_bridge.models.signal import Signal

# (shape check, strptime format), tried in order; first match wins.
# ASCII digits only; strptime accepts any Unicode digit
TIMESTAMP_FORMATS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"[0-9]{4}\.[0-9]{2}\.[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}"), "%Y.%m.%d %H:%M:%S"),
    (re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}"), "%Y-%m-%d %H:%M:%S"),
)

REQUIRED_KEYS = ("timestamp", "symbol", "strategy")


def parse_timestamp(text: str) -> datetime | None:
    """Parse a signal timestamp against the accepted formats.

    Args:
        text: Raw timestamp value, e.g. ``2024.01.15 09:30:00``.

    Returns:
        Naive datetime, or None if no format matches.
    """
    for shape, fmt in TIMESTAMP_FORMATS:
        if not shape.fullmatch(text):
            continue
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            # right shape, impossible date (e.g. month 13)
            continue
    return None


def parse_key_values(lines: Iterable[str]) -> dict[str, str]:
    """Collect ``key = value`` pairs, lower-casing keys.

    Lines without ``=`` are skipped. Later duplicates win.
    """
    values: dict[str, str] = {}
    for line in lines:
        key, sep, value = line.partition("=")
        if not sep:
            continue
        values[key.strip().lower()] = value.strip()
    return values


def parse_signal_lines(lines: Sequence[str]) -> Signal | None:
    """
    Build a Signal from the lines of a signal file.

    Args:
        lines: File content split into lines

    Returns:
        The parsed Signal, or None if the content is empty, a required key
        is missing or blank, or the timestamp matches no accepted format.
    """
    if not lines:
        return None

    values = parse_key_values(lines)
    if any(not values.get(key) for key in REQUIRED_KEYS):
        return None

    timestamp = parse_timestamp(values["timestamp"])
    if timestamp is None:
        return None

    return Signal(
        timestamp=timestamp,
        symbol=values["symbol"],
        strategy=values["strategy"],
        session=values.get("session", ""),
    )
