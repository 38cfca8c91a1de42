from __future__ import annotations


class PermissionDenied(Exception):
    """The user refused access to the device location."""


class StorageReadFailure(Exception):
    """A persisted blob exists but could not be read or decoded."""

    def __init__(self, key: str, reason: str = "") -> None:
        self.key = key
        super().__init__(f"could not read {key!r}" + (f": {reason}" if reason else ""))
