"""Main entry point for the signal bridge."""

import argparse
import asyncio
import logging
from pathlib import Path

from signal_bridge.alerts.telegram import TelegramNotifier
from signal_bridge.capture.screenshot import ScreenshotService
from signal_bridge.config.loader import load_config
from signal_bridge.config.models import DEFAULT_LOG_FILE, BridgeConfig
from signal_bridge.core.pipeline import Notifier, SignalPipeline, Sleep
from signal_bridge.core.signal_loop import SignalLoop
from signal_bridge.gates.duplicate_gate import DuplicateSignalGate
from signal_bridge.journal.writer import JournalWriter
from signal_bridge.monitoring.logging_setup import configure_logging
from signal_bridge.signals.watcher import SignalFileWatcher

logger = logging.getLogger(__name__)


def build_loop(
    config: BridgeConfig,
    notifier: Notifier,
    capturer: ScreenshotService | None = None,
    sleep: Sleep | None = None,
) -> SignalLoop:
    """Wire watcher, gate, services and pipeline from configuration."""
    watcher = SignalFileWatcher(Path(config.signals_folder) / config.signal_file_name)
    gate = DuplicateSignalGate(cooldown_minutes=config.duplicate_minutes)
    pipeline = SignalPipeline(
        capturer=capturer or ScreenshotService(config),
        journal=JournalWriter(Path(config.journal_folder)),
        notifier=notifier,
        settle_delay_seconds=config.screenshot_delay_seconds,
        sleep=sleep,
    )
    return SignalLoop(
        watcher=watcher,
        gate=gate,
        pipeline=pipeline,
        poll_interval_seconds=config.poll_interval_seconds,
        sleep=sleep,
    )


async def run_bridge(config: BridgeConfig, max_iterations: int | None = None) -> None:
    """Run the poll loop with a shared Telegram HTTP client."""
    async with TelegramNotifier(config.telegram) as notifier:
        loop = build_loop(config, notifier)
        await loop.run(max_iterations=max_iterations)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="signal-bridge",
        description="Capture, journal and announce MetaTrader signals",
    )
    parser.add_argument(
        "config",
        nargs="?",
        default=None,
        help="Path to config.json (default: $SIGNAL_BRIDGE_CONFIG_PATH or ./config.json)",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Stop after N polls (default: run until interrupted)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the signal bridge."""
    args = parse_args(argv)
    try:
        # default log file until the config names its own
        configure_logging(Path(DEFAULT_LOG_FILE).resolve(), "INFO")
    except OSError:
        configure_logging(level="INFO")
    logger.info("🚀 Signal bridge starting...")

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        logger.error(f"❌ Failed to load configuration: {e}")
        return 1

    try:
        configure_logging(Path(config.log_file).expanduser().resolve(), config.log_level)
    except OSError as e:
        logger.error(f"❌ Cannot open log file {config.log_file}: {e}")
        return 1

    logger.info(
        f"✅ Configuration loaded: signals={config.signals_folder}, "
        f"journal={config.journal_folder}, window='{config.mt5_window_title}'"
    )
    if not config.telegram.has_credentials:
        logger.info("⚠️ Telegram not configured (notifications will be skipped)")

    try:
        asyncio.run(run_bridge(config, max_iterations=args.max_iterations))
    except KeyboardInterrupt:
        logger.info("⏸️  Shutdown requested by user")
    except Exception as e:
        logger.error(f"❌ Helper loop error: {e}", exc_info=True)
        return 1
    finally:
        logger.info("🛑 Signal bridge stopped")

    return 0


def cli() -> None:
    """Console script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover
    cli()
