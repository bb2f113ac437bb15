"""Data models for the signal bridge."""

from .signal import Signal

__all__ = ["Signal"]
