"""Signal gates."""

from .duplicate_gate import DuplicateSignalGate

__all__ = ["DuplicateSignalGate"]
