"""Exception hierarchy shared by the data access layer and both front ends."""
from __future__ import annotations


class PastePouchError(Exception):
    """Base exception for PastePouch."""


class ConfigurationError(PastePouchError):
    """Raised when start-up configuration is missing or invalid."""


class StorageError(PastePouchError):
    """Raised when the database rejects or fails a statement."""


class DuplicateEmailError(StorageError):
    """Raised when creating a user whose email is already registered."""


class ProjectionError(PastePouchError):
    """Raised when a column value cannot be decoded to its target type."""


class UnknownOperationError(PastePouchError):
    """Raised when no handler is registered for an operation."""
