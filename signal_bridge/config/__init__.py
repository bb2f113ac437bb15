"""Configuration package for the signal bridge."""

from .loader import load_config, prepare_folders
from .models import BridgeConfig, ScreenshotRegion, TelegramConfig

__all__ = [
    "BridgeConfig",
    "ScreenshotRegion",
    "TelegramConfig",
    "load_config",
    "prepare_folders",
]
