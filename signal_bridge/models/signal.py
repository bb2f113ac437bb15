"""Signal model emitted by the MetaTrader expert advisor."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Signal:
    """A trading setup reported by the platform.

    The timestamp is the platform's local wall-clock time; no timezone
    conversion is applied anywhere in the bridge.
    """

    timestamp: datetime
    symbol: str
    strategy: str
    session: str = ""

    def __post_init__(self) -> None:
        """Validate signal data."""
        if not self.symbol:
            raise ValueError("Signal symbol must not be empty")
        if not self.strategy:
            raise ValueError("Signal strategy must not be empty")

    @property
    def dedup_key(self) -> tuple[str, str]:
        """Key used for duplicate suppression: (symbol, strategy)."""
        return (self.symbol, self.strategy)

    def describe(self) -> str:
        """Short human-readable label used in log lines."""
        return f"{self.symbol} {self.strategy} {self.session}".rstrip()
