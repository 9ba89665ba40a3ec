"""
Custom exception classes for the application.

This module defines domain-specific exceptions that provide better error handling
and clearer error messages throughout the application.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, missing_keys: list[str] | None = None):
        details = {"missing_keys": missing_keys} if missing_keys else {}
        super().__init__(message, details)


class ValidationError(ApplicationError):
    """Raised when validation fails"""

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class RepositoryError(ApplicationError):
    """Base class for failures reported by an aggregate repository"""


class NotFoundError(RepositoryError):
    """Raised when no record exists for the requested key"""

    def __init__(self, key: str, aggregate: str = "Book"):
        self.key = key
        details = {"key": key, "aggregate": aggregate}
        super().__init__(f"{aggregate} '{key}' not found", details)


class ConflictError(RepositoryError):
    """Raised when a save detects that the record was modified concurrently"""

    def __init__(self, key: str, expected_version: int, message: str | None = None):
        self.key = key
        self.expected_version = expected_version
        details = {"key": key, "expected_version": expected_version}
        msg = message or f"Book '{key}' was modified concurrently (expected version {expected_version})"
        super().__init__(msg, details)


class DuplicateKeyError(RepositoryError):
    """Raised by the in-memory store when a record already exists for the key"""

    def __init__(self, key: str, aggregate: str = "Book"):
        self.key = key
        details = {"key": key, "aggregate": aggregate}
        super().__init__(f"{aggregate} '{key}' already exists", details)
