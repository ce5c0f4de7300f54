"""Exceptions raised by the contact directory."""

from __future__ import annotations


class DirectoryError(Exception):
    """Base class for every directory error."""


class InvalidKeyError(DirectoryError, ValueError):
    """Key is empty, not a string, or holds characters outside a-z."""

    def __init__(self, key, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"invalid key {key!r}: {reason}")


class InvalidContactError(DirectoryError, ValueError):
    """Contact fields are not strings or exceed their bounds."""


class PersistError(DirectoryError, OSError):
    """Export destination could not be opened or written."""

    def __init__(self, destination: str, cause: OSError):
        self.destination = destination
        self.cause = cause
        super().__init__(f"cannot write contacts to {destination!r}: {cause}")
