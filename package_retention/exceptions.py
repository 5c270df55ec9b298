"""
Exceptions raised by the retention enforcer.
"""

from typing import List, Optional


class RetentionError(Exception):
    """Base exception for all retention enforcer errors."""


class ConfigurationError(RetentionError):
    """Raised when the run cannot be configured (missing token, bad min age)."""


class TransportError(RetentionError):
    """Raised when a request to the registry API fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class QueryError(TransportError):
    """Raised when a query response carries no usable data."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = list(errors or [])
        if self.errors:
            message = f"{message}: {'; '.join(self.errors)}"
        super().__init__(message)
