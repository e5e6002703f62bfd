"""Exception types raised by Classroom HQ services."""

from __future__ import annotations


class ClassHQError(Exception):
    """Base class for application errors surfaced to callers."""

    status_code = 500


class StoreWriteError(ClassHQError):
    """A collection could not be persisted to the key-value store."""

    status_code = 503

    def __init__(self, key: str, message: str = "store write failed"):
        super().__init__(f"{message}: {key}")
        self.key = key


class PermissionDenied(ClassHQError):
    """The current session role may not perform the requested mutation."""

    status_code = 403


class NotAuthenticated(ClassHQError):
    """No user is logged in for the current session."""

    status_code = 401
