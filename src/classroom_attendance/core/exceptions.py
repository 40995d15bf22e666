class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or references a missing document."""


class StoreError(Exception):
    """Raised when the document store fails (transport, permission, unknown document)."""


class SnapshotTimeout(StoreError):
    """Raised when a live query produced no snapshot within the wait limit."""
