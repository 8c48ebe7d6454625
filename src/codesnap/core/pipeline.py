"""Scan event pipeline and auto-resume state machine.

Decode events arrive from an external decoder, possibly many times per
second for the same barcode while it stays in view. The pipeline filters
them, records accepted scans in the history and pauses until the user (or
the auto-resume countdown) resumes scanning.

States:
    SCANNING --accepted scan--> PAUSED
    PAUSED --auto-resume enabled--> COUNTING_DOWN
    COUNTING_DOWN --last tick--> SCANNING
    PAUSED / COUNTING_DOWN --resume()--> SCANNING

All reactions run on the Qt event loop, so no locking is needed.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from PySide6.QtCore import QObject, QTimer, Signal

from codesnap.core.history import HistoryStore
from codesnap.core.services import ClipboardService, HapticKind, HapticService
from codesnap.core.settings_store import SettingsStore
from codesnap.models.barcode import BarcodeType, ScanRecord
from codesnap.models.settings import AppSettings

logger = logging.getLogger(__name__)

# Repeat reads of the same value within this window are dropped
COOLDOWN_MS = 1000
# Gap between the two pulses of the "already scanned" cue
DUPLICATE_PULSE_GAP_MS = 100
TICK_INTERVAL_MS = 1000


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class ScanState(Enum):
    """Scanner screen state."""

    SCANNING = "scanning"
    PAUSED = "paused"
    COUNTING_DOWN = "counting_down"

    @property
    def is_paused(self) -> bool:
        """Return True for PAUSED and its COUNTING_DOWN sub-state."""
        return self is not ScanState.SCANNING


@dataclass(frozen=True, slots=True)
class DecoderConfig:
    """What the decoder should look for.

    Attributes:
        barcode_types: Symbologies to recognize, in declaration order.
        torch: Whether the flashlight should be on.
    """

    barcode_types: tuple[BarcodeType, ...]
    torch: bool = False


class ScanPipeline(QObject):
    """Turns raw decode events into history records.

    Signals:
        state_changed: Emitted with the new ScanState.
        countdown_changed: Emitted with the remaining seconds, or None.
        scan_accepted: Emitted with the new ScanRecord.
        duplicate_rejected: Emitted with the value already in the history.
        expanded_changed: Emitted with the frozenset of expanded record ids.
        decoder_config_changed: Emitted with the new DecoderConfig.

    Example:
        pipeline = ScanPipeline(settings_store, history, QtClipboard(), QtHaptics())
        pipeline.scan_accepted.connect(lambda r: print(r.value))
        pipeline.on_decode_event("4006381333931", BarcodeType.EAN13)
        pipeline.resume()
    """

    state_changed = Signal(object)
    countdown_changed = Signal(object)
    scan_accepted = Signal(object)
    duplicate_rejected = Signal(str)
    expanded_changed = Signal(object)
    decoder_config_changed = Signal(object)

    def __init__(  # noqa: PLR0913
        self,
        settings_store: SettingsStore,
        history: HistoryStore,
        clipboard: ClipboardService,
        haptics: HapticService,
        *,
        clock: Callable[[], float] | None = None,
        tick_interval_ms: int = TICK_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        """Initialize the pipeline in the SCANNING state.

        Args:
            settings_store: Source of the filtering and side-effect settings.
            history: Store receiving accepted scans.
            clipboard: Clipboard used for auto-copy and manual copy.
            haptics: Feedback service for success and duplicate cues.
            clock: Monotonic clock in milliseconds (for tests).
            tick_interval_ms: Countdown tick interval.
            parent: Optional parent QObject.
        """
        super().__init__(parent)
        self._settings_store = settings_store
        self._history = history
        self._clipboard = clipboard
        self._haptics = haptics
        self._clock = clock or _monotonic_ms

        self._state = ScanState.SCANNING
        self._countdown: int | None = None
        self._current: ScanRecord | None = None
        self._expanded: set[str] = set()
        self._torch = False

        self._last_value: str | None = None
        self._last_seen_ms = 0.0

        self._countdown_timer = QTimer(self)
        self._countdown_timer.setInterval(tick_interval_ms)
        self._countdown_timer.timeout.connect(self.tick)

        # One single-shot timer per rejection still waiting for its second pulse
        self._pulse_timers: list[QTimer] = []

        settings_store.settings_changed.connect(self._on_settings_changed)
        history.history_changed.connect(self._on_history_changed)

    # -- State ---------------------------------------------------------------

    @property
    def state(self) -> ScanState:
        """Return the current state."""
        return self._state

    @property
    def is_scanning(self) -> bool:
        """Return True if decode events are being accepted."""
        return self._state is ScanState.SCANNING

    @property
    def countdown(self) -> int | None:
        """Return the seconds left before auto-resume, or None."""
        return self._countdown

    @property
    def is_countdown_active(self) -> bool:
        """Return True if the countdown timer is running."""
        return self._countdown_timer.isActive()

    @property
    def current_record(self) -> ScanRecord | None:
        """Return the record being displayed while paused."""
        return self._current

    @property
    def decoder_config(self) -> DecoderConfig:
        """Return the configuration the decoder should run with."""
        return DecoderConfig(
            barcode_types=tuple(self._settings_store.settings.sorted_types()),
            torch=self._torch,
        )

    # -- Decode events -------------------------------------------------------

    def on_decode_event(self, data: str, symbology: BarcodeType | str) -> None:
        """Handle one decode event from the decoder.

        Args:
            data: Decoded text.
            symbology: Symbology reported by the decoder.
        """
        if self._state.is_paused:
            return

        settings = self._settings_store.settings
        barcode_type = BarcodeType.parse(symbology)
        if barcode_type is None or not settings.is_enabled(barcode_type):
            logger.debug("Ignoring disabled symbology %s", symbology)
            return

        now = self._clock()
        if data == self._last_value and now - self._last_seen_ms < COOLDOWN_MS:
            return
        self._last_value = data
        self._last_seen_ms = now

        if settings.ignore_duplicates and self._history.contains_value(data):
            logger.info("Duplicate scan rejected: %s", data)
            self._haptics.notify(HapticKind.ERROR)
            self._schedule_second_pulse()
            self.duplicate_rejected.emit(data)
            return

        self._accept(data, barcode_type, settings)

    def _accept(self, data: str, barcode_type: BarcodeType, settings: AppSettings) -> None:
        self._set_state(ScanState.PAUSED)
        record = self._history.add(data, barcode_type)
        self._current = record
        self._expanded.add(record.id)
        self.expanded_changed.emit(frozenset(self._expanded))
        logger.info("Scan accepted: %s (%s)", record.value, record.type_label)

        self._haptics.notify(HapticKind.SUCCESS)
        if settings.auto_copy_to_clipboard:
            self._clipboard.set_text(data)

        self.scan_accepted.emit(record)

        if settings.auto_resume:
            self._start_countdown(settings.auto_resume_delay_seconds)

    def _schedule_second_pulse(self) -> None:
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(DUPLICATE_PULSE_GAP_MS)
        timer.timeout.connect(lambda: self._second_error_pulse(timer))
        self._pulse_timers.append(timer)
        timer.start()

    def _second_error_pulse(self, timer: QTimer) -> None:
        self._pulse_timers.remove(timer)
        timer.deleteLater()
        self._haptics.notify(HapticKind.ERROR)

    @property
    def pending_pulses(self) -> int:
        """Return the number of second error pulses not yet emitted."""
        return len(self._pulse_timers)

    # -- Countdown -----------------------------------------------------------

    def _start_countdown(self, seconds: int) -> None:
        self._countdown_timer.stop()
        self._countdown = seconds
        self._set_state(ScanState.COUNTING_DOWN)
        self.countdown_changed.emit(seconds)
        self._countdown_timer.start()

    def tick(self) -> None:
        """Advance the countdown by one second.

        Connected to the countdown timer; tests may call it directly.
        Ticks outside the COUNTING_DOWN state are ignored.
        """
        if self._state is not ScanState.COUNTING_DOWN or self._countdown is None:
            return
        self._countdown -= 1
        if self._countdown <= 0:
            logger.debug("Countdown finished, resuming scan")
            self._return_to_scanning()
            return
        self.countdown_changed.emit(self._countdown)

    def resume(self) -> None:
        """Resume scanning now, cancelling any countdown.

        Also forgets the last seen value so the same barcode can be
        scanned again immediately.
        """
        if not self._state.is_paused:
            return
        self._last_value = None
        self._last_seen_ms = 0.0
        self._return_to_scanning()

    def _return_to_scanning(self) -> None:
        self._countdown_timer.stop()
        self._current = None
        if self._countdown is not None:
            self._countdown = None
            self.countdown_changed.emit(None)
        self._set_state(ScanState.SCANNING)

    def shutdown(self) -> None:
        """Cancel pending timers when the scanner screen goes away."""
        for timer in self._pulse_timers:
            timer.stop()
            timer.deleteLater()
        self._pulse_timers.clear()
        if self._countdown_timer.isActive():
            self._countdown_timer.stop()
            self._countdown = None
            self.countdown_changed.emit(None)
            self._set_state(ScanState.PAUSED)
        logger.debug("Scan pipeline shut down")

    def _set_state(self, state: ScanState) -> None:
        if state is self._state:
            return
        logger.debug("Scan state: %s -> %s", self._state.value, state.value)
        self._state = state
        self.state_changed.emit(state)

    # -- User actions --------------------------------------------------------

    def copy(self, value: str) -> None:
        """Copy a value to the clipboard on user request."""
        self._clipboard.set_text(value)

    def is_expanded(self, record_id: str) -> bool:
        """Return True if the record is shown expanded."""
        return record_id in self._expanded

    @property
    def expanded_ids(self) -> frozenset[str]:
        """Return the ids of expanded records."""
        return frozenset(self._expanded)

    def toggle_expanded(self, record_id: str) -> None:
        """Expand a collapsed record or collapse an expanded one."""
        self._expanded ^= {record_id}
        self.expanded_changed.emit(frozenset(self._expanded))

    @property
    def torch_enabled(self) -> bool:
        """Return True if the flashlight is requested."""
        return self._torch

    def set_torch(self, enabled: bool) -> None:
        """Turn the flashlight on or off."""
        if enabled == self._torch:
            return
        self._torch = enabled
        self.decoder_config_changed.emit(self.decoder_config)

    def toggle_torch(self) -> None:
        """Flip the flashlight."""
        self.set_torch(not self._torch)

    # -- Store notifications -------------------------------------------------

    def _on_settings_changed(self, _settings: object) -> None:
        self.decoder_config_changed.emit(self.decoder_config)

    def _on_history_changed(self, records: object) -> None:
        ids = {r.id for r in records}  # type: ignore[attr-defined]
        stale = self._expanded - ids
        if stale:
            self._expanded -= stale
            self.expanded_changed.emit(frozenset(self._expanded))
