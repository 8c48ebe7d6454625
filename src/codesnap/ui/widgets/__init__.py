"""Reusable UI widgets."""

from codesnap.ui.widgets.dialogs import ConfirmDialog
from codesnap.ui.widgets.scan_item import ScanResultItem

__all__ = ["ConfirmDialog", "ScanResultItem"]
