"""User settings model."""

import logging
import math
from dataclasses import dataclass, field, fields, replace

from codesnap.models.barcode import ALL_BARCODE_TYPES, BarcodeType

logger = logging.getLogger(__name__)

MIN_RESUME_DELAY = 1
MAX_RESUME_DELAY = 10
DEFAULT_RESUME_DELAY = 3

# Field name -> persisted key
_PERSISTED_KEYS = {
    "enabled_types": "enabledBarcodeTypes",
    "auto_resume": "autoResume",
    "auto_resume_delay_seconds": "autoResumeDelaySeconds",
    "auto_copy_to_clipboard": "autoCopyToClipboard",
    "ignore_duplicates": "ignoreDuplicates",
}


def clamp_delay(seconds: int) -> int:
    """Clamp an auto-resume delay to the supported 1-10 second range."""
    return max(MIN_RESUME_DELAY, min(MAX_RESUME_DELAY, int(seconds)))


@dataclass(frozen=True, slots=True)
class AppSettings:
    """User configuration for the scanner.

    Attributes:
        enabled_types: Symbologies the decoder should recognize.
        auto_resume: Resume scanning automatically after a delay.
        auto_resume_delay_seconds: Countdown length (1-10). Kept even when
            auto_resume is off.
        auto_copy_to_clipboard: Copy every accepted value to the clipboard.
        ignore_duplicates: Reject values already present in the history.
    """

    enabled_types: frozenset[BarcodeType] = field(
        default_factory=lambda: frozenset(ALL_BARCODE_TYPES)
    )
    auto_resume: bool = False
    auto_resume_delay_seconds: int = DEFAULT_RESUME_DELAY
    auto_copy_to_clipboard: bool = True
    ignore_duplicates: bool = False

    def __post_init__(self) -> None:
        """Normalize enabled types and clamp the delay."""
        object.__setattr__(self, "enabled_types", frozenset(self.enabled_types))
        clamped = clamp_delay(self.auto_resume_delay_seconds)
        if clamped != self.auto_resume_delay_seconds:
            logger.warning(
                "Auto-resume delay %s out of range, clamped to %d",
                self.auto_resume_delay_seconds,
                clamped,
            )
            object.__setattr__(self, "auto_resume_delay_seconds", clamped)

    def is_enabled(self, barcode_type: BarcodeType) -> bool:
        """Return True if the symbology is enabled."""
        return barcode_type in self.enabled_types

    @property
    def enabled_count(self) -> int:
        """Return the number of enabled symbologies."""
        return len(self.enabled_types)

    def sorted_types(self) -> list[BarcodeType]:
        """Return enabled types in declaration order."""
        return [t for t in ALL_BARCODE_TYPES if t in self.enabled_types]

    def merged(self, **partial: object) -> "AppSettings":
        """Return a copy with the given fields replaced.

        Raises:
            TypeError: If a field name is unknown.
        """
        known = {f.name for f in fields(self)}
        unknown = set(partial) - known
        if unknown:
            raise TypeError(f"Unknown settings fields: {', '.join(sorted(unknown))}")
        return replace(self, **partial)  # type: ignore[arg-type]

    def to_dict(self) -> dict[str, object]:
        """Serialize to a JSON-compatible dict."""
        return {
            _PERSISTED_KEYS["enabled_types"]: [t.value for t in self.sorted_types()],
            _PERSISTED_KEYS["auto_resume"]: self.auto_resume,
            _PERSISTED_KEYS["auto_resume_delay_seconds"]: self.auto_resume_delay_seconds,
            _PERSISTED_KEYS["auto_copy_to_clipboard"]: self.auto_copy_to_clipboard,
            _PERSISTED_KEYS["ignore_duplicates"]: self.ignore_duplicates,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "AppSettings":
        """Merge persisted values over the defaults.

        Missing keys keep their default value and unknown symbology codes
        are dropped.
        """
        defaults = cls()
        values: dict[str, object] = {}

        raw_types = data.get(_PERSISTED_KEYS["enabled_types"])
        if isinstance(raw_types, list):
            parsed = (BarcodeType.parse(t) for t in raw_types)
            values["enabled_types"] = frozenset(t for t in parsed if t is not None)

        for name in ("auto_resume", "auto_copy_to_clipboard", "ignore_duplicates"):
            raw = data.get(_PERSISTED_KEYS[name])
            if isinstance(raw, bool):
                values[name] = raw

        raw_delay = data.get(_PERSISTED_KEYS["auto_resume_delay_seconds"])
        if (
            isinstance(raw_delay, (int, float))
            and not isinstance(raw_delay, bool)
            and math.isfinite(raw_delay)
        ):
            values["auto_resume_delay_seconds"] = clamp_delay(int(raw_delay))

        return defaults.merged(**values)


DEFAULT_SETTINGS = AppSettings()
