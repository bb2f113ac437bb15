"""Change detection for the signal file rewritten by the expert advisor."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SIGNAL_FILE = "latest_signal.txt"


class SignalFileWatcher:
    """Reports the signal file's content once per modification.

    The marker advances as soon as a newer write is observed, before the
    content is read or parsed. A rewrite that fails to read or parse is
    therefore not retried until the file changes again.
    """

    def __init__(self, path: Path) -> None:
        """
        Initialize the watcher.

        Args:
            path: Signal file to watch (may not exist yet)
        """
        self.path = Path(path)
        self._last_write_ns = -1

    @property
    def last_write_ns(self) -> int:
        """Modification time (ns) of the last write already observed."""
        return self._last_write_ns

    def poll(self) -> list[str] | None:
        """
        Return the file's lines if it was modified since the last poll.

        Returns:
            Lines of the file, or None when the file is absent or unchanged.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        try:
            mtime_ns = self.path.stat().st_mtime_ns
        except FileNotFoundError:
            return None

        if mtime_ns <= self._last_write_ns:
            return None

        self._last_write_ns = mtime_ns
        logger.debug(f"Signal file changed: {self.path} (mtime_ns={mtime_ns})")
        return self.path.read_text(encoding="utf-8-sig").splitlines()
