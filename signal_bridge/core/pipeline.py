"""Signal pipeline: capture, journal and notify for one accepted signal.

Each stage is a separate call returning a StageResult, so a failing stage
never stops the ones after it.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from signal_bridge.models.signal import Signal

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class Capturer(Protocol):
    def capture(self, signal: Signal) -> Path: ...


class Journal(Protocol):
    def write_entry(self, signal: Signal, screenshot_path: Path | None = None) -> Path: ...


class Notifier(Protocol):
    async def notify(self, signal: Signal, screenshot_path: Path | None = None) -> Any: ...


@dataclass(frozen=True)
class StageResult:
    """Outcome of one pipeline stage."""

    stage: str
    ok: bool
    value: Any = None
    error: str | None = None


@dataclass(frozen=True)
class PipelineOutcome:
    """Results of all three stages for a signal."""

    signal: Signal
    capture: StageResult
    journal: StageResult
    notify: StageResult

    @property
    def screenshot_path(self) -> Path | None:
        return self.capture.value if self.capture.ok else None

    @property
    def ok(self) -> bool:
        return self.capture.ok and self.journal.ok and self.notify.ok


class SignalPipeline:
    """Runs the side effects for an accepted signal in a fixed order.

    settle delay → capture → journal → notify. The delay happens once,
    before capture, so the platform can finish redrawing the chart.
    """

    def __init__(
        self,
        capturer: Capturer,
        journal: Journal,
        notifier: Notifier,
        settle_delay_seconds: float = 0.0,
        sleep: Sleep | None = None,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            capturer: Screenshot service
            journal: Journal writer
            notifier: Operator notifier
            settle_delay_seconds: Wait before capturing
            sleep: Awaitable sleep (injected by tests)
        """
        self.capturer = capturer
        self.journal = journal
        self.notifier = notifier
        self.settle_delay_seconds = settle_delay_seconds
        self._sleep = sleep or asyncio.sleep

    async def process(self, signal: Signal) -> PipelineOutcome:
        """Run all stages for the signal. Never raises for stage failures."""
        await self._sleep(self.settle_delay_seconds)

        capture = self._capture(signal)
        screenshot_path = capture.value if capture.ok else None
        journal = self._write_journal(signal, screenshot_path)
        notify = await self._notify(signal, screenshot_path)

        return PipelineOutcome(signal=signal, capture=capture, journal=journal, notify=notify)

    def _capture(self, signal: Signal) -> StageResult:
        try:
            path = self.capturer.capture(signal)
        except Exception as e:
            logger.error(f"Screenshot failed: {e}")
            return StageResult(stage="capture", ok=False, error=str(e))
        logger.info(f"Screenshot saved to {path}")
        return StageResult(stage="capture", ok=True, value=path)

    def _write_journal(self, signal: Signal, screenshot_path: Path | None) -> StageResult:
        try:
            journal_path = self.journal.write_entry(signal, screenshot_path)
        except Exception as e:
            logger.error(f"Journal update failed: {e}")
            return StageResult(stage="journal", ok=False, error=str(e))
        logger.info(f"Journal updated: {journal_path}")
        return StageResult(stage="journal", ok=True, value=journal_path)

    async def _notify(self, signal: Signal, screenshot_path: Path | None) -> StageResult:
        try:
            status = await self.notifier.notify(signal, screenshot_path)
        except Exception as e:
            logger.error(f"Telegram notification failed: {e}")
            return StageResult(stage="notify", ok=False, error=str(e))
        logger.info(f"Notification result: {getattr(status, 'value', status)}")
        return StageResult(stage="notify", ok=True, value=status)
