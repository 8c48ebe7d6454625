"""Tests for design tokens."""

import pytest

from codesnap.ui.tokens import (
    SizingTokens,
    SpacingTokens,
    TypographyTokens,
    sizing,
    spacing,
    typography,
)


class TestSpacingTokens:
    """Test spacing token values and immutability."""

    def test_scale_is_increasing(self) -> None:
        """Test that spacing scale increases monotonically."""
        values = [spacing.xs, spacing.sm, spacing.md, spacing.lg, spacing.xl]
        assert values == sorted(set(values))

    def test_frozen(self) -> None:
        """Test that spacing tokens are immutable."""
        with pytest.raises(AttributeError):
            spacing.sm = 999  # type: ignore[misc]

    def test_is_singleton_instance(self) -> None:
        """Test that module-level spacing is a SpacingTokens instance."""
        assert isinstance(spacing, SpacingTokens)


class TestTypographyTokens:
    """Test typography token values."""

    def test_scale_is_increasing(self) -> None:
        """Test that font sizes increase from caption to heading."""
        values = [
            typography.caption,
            typography.small,
            typography.body,
            typography.subtitle,
            typography.title,
            typography.heading,
        ]
        assert values == sorted(set(values))
        assert isinstance(typography, TypographyTokens)


class TestSizingTokens:
    """Test sizing token values."""

    def test_history_heights(self) -> None:
        """Test the expanded and collapsed history panel heights."""
        assert sizing.history_expanded == 200
        assert sizing.history_collapsed == 60

    def test_scan_frame(self) -> None:
        """Test the scan target size."""
        assert sizing.scan_frame == 240
        assert isinstance(sizing, SizingTokens)
