"""Shared fixtures for CodeSnap tests."""

import os
from collections.abc import Generator
from unittest.mock import MagicMock

import pytest

# Widgets are created without a display in CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402

from codesnap.core.history import HistoryStore  # noqa: E402
from codesnap.core.pipeline import ScanPipeline  # noqa: E402
from codesnap.core.services import ClipboardService, HapticService, ShareSink  # noqa: E402
from codesnap.core.settings_store import SettingsStore  # noqa: E402
from codesnap.core.storage import KeyValueStorage  # noqa: E402


class FakeClock:
    """Monotonic millisecond clock advanced by hand."""

    def __init__(self, start: float = 10_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def storage() -> Generator[KeyValueStorage, None, None]:
    """Return an empty storage in a test-only QSettings location."""
    storage = KeyValueStorage("CodeSnapTest", "TestStorage")
    storage.clear()
    yield storage
    storage.clear()


@pytest.fixture
def settings_store(storage: KeyValueStorage) -> SettingsStore:
    """Return a SettingsStore with default settings."""
    return SettingsStore(storage)


@pytest.fixture
def history(storage: KeyValueStorage) -> HistoryStore:
    """Return an empty HistoryStore."""
    return HistoryStore(storage)


@pytest.fixture
def clipboard() -> MagicMock:
    """Return a mock clipboard."""
    return MagicMock(spec=ClipboardService)


@pytest.fixture
def haptics() -> MagicMock:
    """Return a mock haptic service."""
    return MagicMock(spec=HapticService)


@pytest.fixture
def share_sink() -> MagicMock:
    """Return a mock share sink that reports itself available."""
    sink = MagicMock(spec=ShareSink)
    sink.is_available.return_value = True
    return sink


@pytest.fixture
def clock() -> FakeClock:
    """Return a hand-driven clock."""
    return FakeClock()


@pytest.fixture
def pipeline(
    qapp: QApplication,
    settings_store: SettingsStore,
    history: HistoryStore,
    clipboard: MagicMock,
    haptics: MagicMock,
    clock: FakeClock,
) -> Generator[ScanPipeline, None, None]:
    """Return a ScanPipeline wired to mocks and the fake clock."""
    pipeline = ScanPipeline(settings_store, history, clipboard, haptics, clock=clock)
    yield pipeline
    pipeline.shutdown()
