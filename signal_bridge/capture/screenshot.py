"""Chart capture of the MetaTrader window.

Locates the platform window by title, grabs either a configured region
inside it or the whole window, and saves a PNG next to the day's journal.

Example:
    >>> service = ScreenshotService(config)
    >>> path = service.capture(signal)
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from signal_bridge.config.models import BridgeConfig
from signal_bridge.journal.writer import day_folder
from signal_bridge.models.signal import Signal

if TYPE_CHECKING:
    from PIL.Image import Image

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.\-]")


class CaptureError(RuntimeError):
    """Raised when the chart could not be captured."""


class WindowNotFoundError(CaptureError):
    """Raised when no window matches the configured title."""


@dataclass(frozen=True)
class WindowRect:
    """Screen position and size of a window."""

    left: int
    top: int
    width: int
    height: int


# (left, top, right, bottom) in screen coordinates
BBox = tuple[int, int, int, int]
WindowLocator = Callable[[str], WindowRect | None]
Grabber = Callable[[BBox], "Image"]


def find_window(title: str) -> WindowRect | None:
    """Find a window by title, preferring an exact match over a substring match.

    Only available on Windows; pygetwindow refuses to import elsewhere.
    """
    import pygetwindow

    candidates = pygetwindow.getWindowsWithTitle(title)
    if not candidates:
        return None
    exact = [w for w in candidates if w.title == title]
    window = (exact or candidates)[0]
    return WindowRect(
        left=window.left,
        top=window.top,
        width=window.width,
        height=window.height,
    )


def grab_screen(bbox: BBox) -> "Image":
    """Grab a screen rectangle with Pillow."""
    from PIL import ImageGrab

    return ImageGrab.grab(bbox=bbox, all_screens=True)


def screenshot_filename(signal: Signal) -> str:
    """<symbol>_<strategy>_<session>_<HH-MM-SS>.png with unsafe characters replaced."""
    stem = (
        f"{signal.symbol}_{signal.strategy}_{signal.session}_"
        f"{signal.timestamp.strftime('%H-%M-%S')}"
    )
    return _UNSAFE_FILENAME_CHARS.sub("_", stem) + ".png"


class ScreenshotService:
    """Captures the platform chart for a signal."""

    def __init__(
        self,
        config: BridgeConfig,
        locate_window: WindowLocator = find_window,
        grab: Grabber = grab_screen,
    ) -> None:
        """
        Initialize the service.

        Args:
            config: Bridge configuration (window title, region, journal folder)
            locate_window: Returns the window rectangle for a title, or None
            grab: Returns an image of a screen bounding box
        """
        self.window_title = config.mt5_window_title
        self.region = config.screenshot_region
        self.journal_folder = Path(config.journal_folder)
        self._locate_window = locate_window
        self._grab = grab

    def resolve_bbox(self, window: WindowRect) -> BBox:
        """Screen bounding box to grab: the configured region, or the whole window."""
        if self.region.is_whole_window:
            return (
                window.left,
                window.top,
                window.left + window.width,
                window.top + window.height,
            )

        left = window.left + self.region.x
        top = window.top + self.region.y
        return (left, top, left + self.region.width, top + self.region.height)

    def capture(self, signal: Signal) -> Path:
        """
        Capture the chart and save it as PNG.

        Args:
            signal: Signal the capture belongs to (names the file and day folder)

        Returns:
            Path of the saved PNG

        Raises:
            WindowNotFoundError: If the platform window is not open
            CaptureError: If grabbing or saving the image fails
        """
        window = self._locate_window(self.window_title)
        if window is None:
            raise WindowNotFoundError(f"MT5 window not found: {self.window_title}")

        bbox = self.resolve_bbox(window)
        if bbox[2] <= bbox[0] or bbox[3] <= bbox[1]:
            raise CaptureError(f"Empty capture region {bbox} for window {window}")

        try:
            image = self._grab(bbox)
        except Exception as e:
            raise CaptureError(f"Screen grab failed for {bbox}: {e}") from e

        folder = day_folder(self.journal_folder, signal)
        path = folder / screenshot_filename(signal)
        try:
            folder.mkdir(parents=True, exist_ok=True)
            image.save(path, format="PNG")
        except OSError as e:
            raise CaptureError(f"Could not save screenshot to {path}: {e}") from e

        logger.debug(f"Captured {bbox} of '{self.window_title}' to {path}")
        return path
