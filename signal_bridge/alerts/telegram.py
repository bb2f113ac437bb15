"""Telegram notifications for new setups.

Sends the chart capture as a photo with a caption, or the caption alone
when no capture is available. Missing credentials turn notifications into
a logged no-op; API and transport failures raise TelegramError.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from pathlib import Path
from typing import Any

import httpx

from signal_bridge.config.models import TelegramConfig
from signal_bridge.models.signal import Signal

logger = logging.getLogger(__name__)


class NotificationStatus(str, Enum):
    """Outcome of a notification attempt that did not fail."""

    SENT_PHOTO = "sent_photo"
    SENT_TEXT = "sent_text"
    SKIPPED = "skipped"  # credentials not configured


class TelegramError(RuntimeError):
    """Bot API call failed (HTTP error status or transport failure)."""

    def __init__(self, method: str, message: str, status_code: int | None = None) -> None:
        super().__init__(f"Telegram {method} failed: {message}")
        self.method = method
        self.status_code = status_code


def build_caption(signal: Signal) -> str:
    """Caption shown with the chart, e.g. '⚠ New Setup: EURUSD – OB – London – 09:30'."""
    return (
        f"⚠ New Setup: {signal.symbol} – {signal.strategy} – "
        f"{signal.session} – {signal.timestamp.strftime('%H:%M')}"
    )


class TelegramNotifier:
    """Telegram Bot API client for setup notifications.

    Example:
        >>> config = TelegramConfig(bot_token="xxx", chat_id="123")
        >>> async with TelegramNotifier(config) as notifier:
        ...     await notifier.notify(signal, Path("chart.png"))
    """

    TELEGRAM_API_BASE = "https://api.telegram.org"

    def __init__(
        self,
        config: TelegramConfig,
        client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        """Initialize notifier with configuration.

        Args:
            config: Telegram bot configuration
            client: Shared HTTP client; one is created per request when omitted
                and the notifier is not used as a context manager
            sleep: Awaitable sleep used between retries
        """
        self.config = config
        self._client = client
        self._owns_client = False
        self._sleep = sleep or asyncio.sleep

        # Retry configuration
        self._max_retries = config.max_retries
        self._retry_delay = 1.0

    async def __aenter__(self) -> "TelegramNotifier":
        """Async context manager entry."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout_seconds)
            self._owns_client = True
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    async def notify(self, signal: Signal, screenshot_path: Path | None = None) -> NotificationStatus:
        """Notify the operator about a new setup.

        Args:
            signal: Accepted signal
            screenshot_path: Chart capture; text-only when None or missing on disk

        Returns:
            What was sent, or SKIPPED when credentials are not configured

        Raises:
            TelegramError: If the Bot API rejects the request or is unreachable
        """
        if not self.config.has_credentials:
            logger.warning("Telegram credentials missing. Skipping notification.")
            return NotificationStatus.SKIPPED

        caption = build_caption(signal)

        if screenshot_path is not None and Path(screenshot_path).is_file():
            await self.send_photo(caption, Path(screenshot_path))
            return NotificationStatus.SENT_PHOTO

        if screenshot_path is not None:
            logger.warning(f"Screenshot {screenshot_path} not found, sending text only")
        await self.send_message(caption)
        return NotificationStatus.SENT_TEXT

    async def send_message(self, text: str) -> None:
        """Send a plain text message to the configured chat."""
        await self._post(
            "sendMessage",
            data={"chat_id": self.config.chat_id, "text": text},
        )

    async def send_photo(self, caption: str, photo_path: Path) -> None:
        """Send a PNG with caption to the configured chat."""
        photo = photo_path.read_bytes()
        await self._post(
            "sendPhoto",
            data={"chat_id": self.config.chat_id, "caption": caption},
            files={"photo": (photo_path.name, photo, "image/png")},
        )

    async def _post(
        self,
        method: str,
        data: dict[str, str],
        files: dict[str, tuple[str, bytes, str]] | None = None,
    ) -> None:
        if not self._client:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                return await self._post_with_client(client, method, data, files)
        return await self._post_with_client(self._client, method, data, files)

    async def _post_with_client(
        self,
        client: httpx.AsyncClient,
        method: str,
        data: dict[str, str],
        files: dict[str, tuple[str, bytes, str]] | None,
    ) -> None:
        """Post with retries on rate limiting (429) and timeouts."""
        url = f"{self.TELEGRAM_API_BASE}/bot{self.config.bot_token}/{method}"

        for attempt in range(self._max_retries):
            last_attempt = attempt == self._max_retries - 1
            try:
                response = await client.post(url, data=data, files=files)
            except httpx.TimeoutException as e:
                if last_attempt:
                    raise TelegramError(
                        method, f"timed out after {self._max_retries} attempts"
                    ) from e
                await self._sleep(self._retry_delay * (attempt + 1))
                continue
            except httpx.HTTPError as e:
                raise TelegramError(method, self._redact(f"transport error: {e}")) from e

            if response.status_code == 200:
                return

            if response.status_code == 429 and not last_attempt:
                # Rate limited by Telegram
                retry_after = self._retry_after(response)
                logger.warning(f"Telegram rate limit hit, retrying in {retry_after}s")
                await self._sleep(retry_after)
                continue

            raise TelegramError(
                method,
                self._redact(f"{response.status_code} {response.text}"),
                status_code=response.status_code,
            )

        raise TelegramError(method, f"gave up after {self._max_retries} attempts")

    @staticmethod
    def _retry_after(response: httpx.Response) -> float:
        try:
            return float(response.json().get("parameters", {}).get("retry_after", 10))
        except (ValueError, AttributeError):
            return 10.0

    def _redact(self, text: str) -> str:
        if self.config.bot_token:
            return text.replace(self.config.bot_token, "***")
        return text
