"""Design tokens for spacing, sizing and typography.

Color tokens live in theme.py (ThemePalette). Layout tokens live here.

Usage:
    from codesnap.ui.tokens import spacing, typography, sizing

    layout.setContentsMargins(spacing.md, spacing.md, spacing.md, spacing.md)
    header.setStyleSheet(f"font-size: {typography.title}pt;")
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SpacingTokens:
    """Spacing scale based on a 4px base unit."""

    xs: int = 2
    sm: int = 4
    md: int = 8
    lg: int = 12
    xl: int = 16


@dataclass(frozen=True)
class TypographyTokens:
    """Font size scale in points."""

    caption: int = 9  # Timestamps
    small: int = 10  # Type labels, hints
    body: int = 11
    subtitle: int = 12  # Section headers
    title: int = 14  # Panel headers
    heading: int = 17  # Scanned value overlay


@dataclass(frozen=True)
class SizingTokens:
    """Widget sizing constants in pixels."""

    border_radius_md: int = 8
    border_radius_lg: int = 12
    scan_frame: int = 240  # Scan-target square
    control_button: int = 40  # Torch button
    history_expanded: int = 200
    history_collapsed: int = 60
    window_min_width: int = 420
    window_min_height: int = 640


# Module-level singletons, import these in widgets
spacing = SpacingTokens()
typography = TypographyTokens()
sizing = SizingTokens()
