"""Duplicate-signal gate. Suppresses repeats of a setup inside a cooldown window."""

import logging
from datetime import datetime, timedelta

from signal_bridge.models.signal import Signal

logger = logging.getLogger(__name__)


class DuplicateSignalGate:
    """Accepts a signal only if its (symbol, strategy) was not accepted recently.

    The comparison is signed and relative to the previously accepted signal
    only: an older timestamp inside the window is rejected too, and wall-clock
    time is never consulted.
    """

    def __init__(
        self,
        cooldown_minutes: float,
        last_accepted: dict[tuple[str, str], datetime] | None = None,
    ) -> None:
        """Initialize DuplicateSignalGate.

        Args:
            cooldown_minutes: Minimum spacing between accepted signals per key.
            last_accepted: State mapping owned by the caller; a new empty
                mapping is used when omitted.
        """
        self.cooldown = timedelta(minutes=cooldown_minutes)
        self._last_accepted = last_accepted if last_accepted is not None else {}

    def evaluate(self, signal: Signal) -> tuple[bool, str | None]:
        """Decide whether the signal is new and record it if so.

        Args:
            signal: Parsed signal.

        Returns:
            Tuple of (accepted, rejection_reason).
        """
        key = signal.dedup_key
        previous = self._last_accepted.get(key)
        if previous is not None:
            elapsed = signal.timestamp - previous
            if elapsed < self.cooldown:
                reason = (
                    f"duplicate_within_cooldown "
                    f"(elapsed={elapsed.total_seconds() / 60:.1f}min, "
                    f"cooldown={self.cooldown.total_seconds() / 60:g}min)"
                )
                return False, reason

        self._last_accepted[key] = signal.timestamp
        return True, None

    def last_accepted(self, symbol: str, strategy: str) -> datetime | None:
        """Timestamp of the last accepted signal for the pair, if any."""
        return self._last_accepted.get((symbol, strategy))
