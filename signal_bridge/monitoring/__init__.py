"""Monitoring services for the signal bridge."""

from signal_bridge.monitoring.logging_setup import LOG_FORMAT, configure_logging

__all__ = ["LOG_FORMAT", "configure_logging"]
