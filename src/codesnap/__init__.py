"""CodeSnap: barcode scanner with scan history."""

__version__ = "0.1.0"
