"""Poll loop driving signal detection and the pipeline."""

import asyncio
import logging

from signal_bridge.core.pipeline import PipelineOutcome, SignalPipeline, Sleep
from signal_bridge.gates.duplicate_gate import DuplicateSignalGate
from signal_bridge.signals.parser import parse_signal_lines
from signal_bridge.signals.watcher import SignalFileWatcher

logger = logging.getLogger(__name__)


class SignalLoop:
    """Checks the signal file on a fixed interval and processes new setups.

    Iterations run strictly one after another; the watcher marker and the
    duplicate gate state are only touched from here.
    """

    def __init__(
        self,
        watcher: SignalFileWatcher,
        gate: DuplicateSignalGate,
        pipeline: SignalPipeline,
        poll_interval_seconds: float,
        sleep: Sleep | None = None,
    ):
        """
        Initialize the loop.

        Args:
            watcher: Change detector for the signal file
            gate: Duplicate-signal gate
            pipeline: Capture/journal/notify pipeline
            poll_interval_seconds: Pause between iterations
            sleep: Awaitable sleep (injected by tests)
        """
        self.watcher = watcher
        self.gate = gate
        self.pipeline = pipeline
        self.poll_interval_seconds = poll_interval_seconds
        self._sleep = sleep or asyncio.sleep
        self.iterations = 0

    async def poll_once(self) -> PipelineOutcome | None:
        """
        Run one detection cycle.

        Returns:
            The pipeline outcome if a new signal was processed, else None.

        Raises:
            OSError: If the changed signal file cannot be read.
        """
        lines = self.watcher.poll()
        if lines is None:
            return None

        signal = parse_signal_lines(lines)
        if signal is None:
            logger.warning(f"{self.watcher.path.name} exists but could not be parsed.")
            return None

        accepted, reason = self.gate.evaluate(signal)
        if not accepted:
            logger.info(f"Duplicate signal ignored for {signal.symbol}|{signal.strategy}: {reason}")
            return None

        logger.info(f"New signal detected: {signal.describe()}")
        return await self.pipeline.process(signal)

    async def run(self, max_iterations: int | None = None) -> None:
        """
        Poll until the process is stopped, or for a fixed number of iterations.

        Args:
            max_iterations: Maximum number of iterations to run (None = forever)
        """
        logger.info(f"Helper loop started (interval={self.poll_interval_seconds}s).")
        while max_iterations is None or self.iterations < max_iterations:
            try:
                await self.poll_once()
            except Exception as e:
                logger.error(f"Processing error: {e}", exc_info=True)

            self.iterations += 1
            await self._sleep(self.poll_interval_seconds)
