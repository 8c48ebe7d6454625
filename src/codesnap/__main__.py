"""Main entry point for the CodeSnap application."""

import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication

from codesnap.core.history import HistoryStore
from codesnap.core.pipeline import ScanPipeline
from codesnap.core.services import DesktopShareSink, QtClipboard, QtHaptics
from codesnap.core.settings_store import SettingsStore
from codesnap.core.storage import KeyValueStorage
from codesnap.ui.main_window import MainWindow
from codesnap.ui.theme import theme_manager

logger = logging.getLogger(__name__)


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="codesnap",
        description="CodeSnap: barcode scanner with scan history",
    )
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    parser.add_argument(
        "--reset", action="store_true", help="clear saved settings and history before start",
    )
    parser.add_argument("--quiet", action="store_true", help="disable the audible scan feedback")
    return parser.parse_args(argv)


def main() -> int:
    """Run the CodeSnap application.

    Returns:
        Exit code (0 for success).
    """
    # Set app metadata before creating QApplication (required for macOS)
    QApplication.setApplicationName("CodeSnap")
    QApplication.setApplicationDisplayName("CodeSnap")
    QApplication.setOrganizationName("CodeSnap")

    app = QApplication(sys.argv)
    parsed = parse_args(app.arguments()[1:])

    logging.basicConfig(
        level=logging.DEBUG if parsed.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    theme_manager.apply_theme()

    storage = KeyValueStorage()
    if parsed.reset:
        logger.info("Resetting saved settings and history")
        storage.clear()

    settings_store = SettingsStore(storage)
    history = HistoryStore(storage)
    pipeline = ScanPipeline(
        settings_store,
        history,
        QtClipboard(),
        QtHaptics(audible=not parsed.quiet),
    )
    logger.info(
        "Loaded %d scans, %d barcode types enabled",
        len(history),
        settings_store.settings.enabled_count,
    )

    window = MainWindow(settings_store, history, pipeline, DesktopShareSink())
    window.show()

    exit_code = app.exec()

    pipeline.shutdown()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
