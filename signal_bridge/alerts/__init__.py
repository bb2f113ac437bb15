"""Alert services for the signal bridge.

Provides notification capabilities for operators:
- TelegramNotifier: setup notifications via Telegram bot
"""

from signal_bridge.alerts.telegram import (
    NotificationStatus,
    TelegramError,
    TelegramNotifier,
    build_caption,
)

__all__ = [
    "NotificationStatus",
    "TelegramError",
    "TelegramNotifier",
    "build_caption",
]
