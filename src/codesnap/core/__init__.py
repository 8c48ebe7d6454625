"""Core application logic.

Classes:
    KeyValueStorage: QSettings wrapper holding the persisted slots.
    SettingsStore: User settings with change signals.
    HistoryStore: Ordered scan history with change signals.
    ScanPipeline: Decode event filtering and auto-resume state machine.
"""

from codesnap.core.history import HistoryStore
from codesnap.core.pipeline import DecoderConfig, ScanPipeline, ScanState
from codesnap.core.settings_store import SettingsStore
from codesnap.core.storage import KeyValueStorage

__all__ = [
    "DecoderConfig",
    "HistoryStore",
    "KeyValueStorage",
    "ScanPipeline",
    "ScanState",
    "SettingsStore",
]
