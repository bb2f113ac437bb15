"""Screen capture of the trading platform."""

from .screenshot import (
    CaptureError,
    ScreenshotService,
    WindowNotFoundError,
    WindowRect,
    find_window,
    grab_screen,
    screenshot_filename,
)

__all__ = [
    "CaptureError",
    "ScreenshotService",
    "WindowNotFoundError",
    "WindowRect",
    "find_window",
    "grab_screen",
    "screenshot_filename",
]
