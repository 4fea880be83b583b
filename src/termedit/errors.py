from __future__ import annotations


class FatalIoError(OSError):
    """Terminal mode, geometry or read failure; the session cannot continue."""


class SaveError(OSError):
    """Open, truncate or write failure while saving; the session continues."""
