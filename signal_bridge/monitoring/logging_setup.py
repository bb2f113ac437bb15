"""Console and file logging for the bridge process.

Every logging.Handler serializes emit() behind its own lock, so lines from
the console and the shared log file never interleave.
"""

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so a second call replaces them
_HANDLER_FLAG = "_signal_bridge_handler"


def configure_logging(log_file: Path | None = None, level: str = "INFO") -> logging.Logger:
    """Install console (and optionally file) handlers on the root logger.

    Args:
        log_file: Append-mode log file; console only when None
        level: Root log level name

    Returns:
        The root logger
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))

    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    setattr(console_handler, _HANDLER_FLAG, True)
    root.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        setattr(file_handler, _HANDLER_FLAG, True)
        root.addHandler(file_handler)

    return root
