"""
Error classification for the election coordinator.

Election errors are semantic or authorization failures of a single
operation and are never retried. External service errors come from
collaborators outside the core (the eligibility oracle, storage).
"""

from .election import (
    ElectionError,
    Unauthorized,
    PhaseError,
    VotingNotActive,
    InvalidDuration,
    NotFound,
    NoNFTOwnership,
    AlreadyVoted,
)
from .external import (
    ExternalServiceError,
    OracleUnavailable,
    PersistenceError,
)

__all__ = [
    # Election Errors
    "ElectionError",
    "Unauthorized",
    "PhaseError",
    "VotingNotActive",
    "InvalidDuration",
    "NotFound",
    "NoNFTOwnership",
    "AlreadyVoted",
    # External Failures
    "ExternalServiceError",
    "OracleUnavailable",
    "PersistenceError",
]
