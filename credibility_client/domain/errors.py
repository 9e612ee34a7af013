"""Exceptions raised by the credibility client."""

from typing import Dict, Optional


class CredibilityClientError(Exception):
    """Base class for all client errors."""


class SubmissionValidationError(CredibilityClientError, ValueError):
    """A submission failed local validation and was not sent."""

    def __init__(self, message: str, field_errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.field_errors: Dict[str, str] = dict(field_errors or {})


class BatchValidationError(SubmissionValidationError):
    """A batch failed its size or per-item preconditions."""


class TransportError(CredibilityClientError, ConnectionError):
    """The scorer or knowledge base could not be reached or answered with a failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PersistenceError(CredibilityClientError, OSError):
    """Reading or writing durable local state failed."""


class ActionInProgressError(CredibilityClientError, RuntimeError):
    """An action was triggered again while its previous request is still in flight."""

    def __init__(self, action: str):
        super().__init__(f"Action '{action}' is already in progress")
        self.action = action
