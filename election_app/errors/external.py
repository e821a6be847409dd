"""
External failure classifications.

These exceptions represent failures in systems the election core depends on
but does not own. They are transient from the caller's point of view; the
core propagates them without retrying.
"""

from typing import Any, Optional


class ExternalServiceError(Exception):
    """Base class for failures of an external collaborator."""

    kind = "external_service_error"

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class OracleUnavailable(ExternalServiceError):
    """The eligibility oracle could not answer a query."""

    kind = "oracle_unavailable"

    def __init__(self, message: str, oracle: Optional[str] = None,
                 query: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.oracle = oracle
        self.query = query


class PersistenceError(ExternalServiceError):
    """Ballot journal storage failure."""

    kind = "persistence_error"

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
