"""Signal file detection and parsing."""

from .parser import TIMESTAMP_FORMATS, parse_signal_lines, parse_timestamp
from .watcher import DEFAULT_SIGNAL_FILE, SignalFileWatcher

__all__ = [
    "DEFAULT_SIGNAL_FILE",
    "SignalFileWatcher",
    "TIMESTAMP_FORMATS",
    "parse_signal_lines",
    "parse_timestamp",
]
