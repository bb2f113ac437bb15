"""Append-only CSV journal of accepted signals, partitioned by day.

Rows go to <journal_folder>/<YYYY-MM-DD>/trade_memory.csv, next to that
day's screenshots. Earlier helper versions kept a single
<journal_folder>/trade_memory.csv and used the day folder for screenshots
only; rows written by this version are not appended to that file.
"""

import csv
import logging
from pathlib import Path

from signal_bridge.models.signal import Signal

logger = logging.getLogger(__name__)

JOURNAL_FILE_NAME = "trade_memory.csv"
JOURNAL_HEADER = (
    "datetime",
    "symbol",
    "strategy",
    "session",
    "screenshot_path",
    "status",
    "result_R",
    "notes",
)
DEFAULT_STATUS = "pending"
DEFAULT_RESULT_R = "0"


def day_folder(root: Path, signal: Signal) -> Path:
    """Folder holding a signal's journal and screenshots: <root>/<YYYY-MM-DD>."""
    return Path(root) / signal.timestamp.strftime("%Y-%m-%d")


class JournalWriter:
    """Writes one journal row per accepted signal.

    The header is written only when the day's file does not exist yet.
    Rows are never deduplicated here; the caller writes each signal once.
    """

    def __init__(self, journal_folder: Path) -> None:
        self.journal_folder = Path(journal_folder)

    def journal_path(self, signal: Signal) -> Path:
        return day_folder(self.journal_folder, signal) / JOURNAL_FILE_NAME

    def write_entry(self, signal: Signal, screenshot_path: Path | None = None) -> Path:
        """
        Append a row for the signal.

        Args:
            signal: Accepted signal
            screenshot_path: Saved chart capture, or None if capture failed

        Returns:
            Path of the journal file written to

        Raises:
            OSError: If the folder or file cannot be written
        """
        journal_file = self.journal_path(signal)
        journal_file.parent.mkdir(parents=True, exist_ok=True)
        write_header = not journal_file.exists()

        row = (
            signal.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            signal.symbol,
            signal.strategy,
            signal.session,
            str(screenshot_path) if screenshot_path else "",
            DEFAULT_STATUS,
            DEFAULT_RESULT_R,
            "",
        )

        with open(journal_file, "a", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator="\n")
            if write_header:
                writer.writerow(JOURNAL_HEADER)
            writer.writerow(row)

        logger.debug(f"Journal row appended to {journal_file}")
        return journal_file
