"""Domain exceptions for the profile core."""

from __future__ import annotations


class ProfileError(Exception):
    """Base error for profile operations."""


class InvalidArgumentError(ProfileError, ValueError):
    """Raised when a name, emoji, or index is empty or malformed."""


class ProfileNotFoundError(ProfileError, LookupError):
    """Raised when an operation targets a profile id that does not exist."""


class CannotDeleteError(ProfileError):
    """Raised when deleting the default profile or a profile that is gone."""


class InvalidStateError(ProfileError, RuntimeError):
    """Raised when the navigator is asked to move through an empty list."""


class PersistenceError(ProfileError):
    """Raised by persistence adapters when state cannot be read or written."""


class DirectoryError(ProfileError):
    """Raised by directory providers when the snapshot cannot be read."""
