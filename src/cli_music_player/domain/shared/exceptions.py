"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all player errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class CatalogSearchError(DomainError):
    """Raised when the remote catalog cannot be queried."""

    def __init__(self, query: str, message: str | None = None) -> None:
        msg = message or f"Catalog search failed for '{query}'"
        super().__init__(msg, code="CATALOG_SEARCH_FAILED")
        self.query = query


class InvalidOperationError(DomainError):
    """Raised when an operation is invalid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None) -> None:
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(msg, code="INVALID_OPERATION")
        self.operation = operation
        self.current_state = current_state
