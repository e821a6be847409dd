"""
Election error classifications.

Each exception names one error kind a caller can react to precisely,
e.g. "you already voted" versus "voting has ended".
"""

from typing import Any, Optional


class ElectionError(Exception):
    """Base class for terminal failures of an election operation."""

    kind = "election_error"

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class Unauthorized(ElectionError):
    """Caller lacks admin rights for an admin-only operation."""

    kind = "unauthorized"

    def __init__(self, message: str, caller: Optional[str] = None,
                 operation: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.caller = caller
        self.operation = operation


class PhaseError(ElectionError):
    """Operation attempted in the wrong lifecycle phase."""

    kind = "phase_error"

    def __init__(self, message: str, current_phase: Optional[str] = None,
                 operation: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_phase = current_phase
        self.operation = operation


class VotingNotActive(PhaseError):
    """Vote attempted before voting started or after it ended."""

    kind = "voting_not_active"


class InvalidDuration(ElectionError):
    """Voting duration is not a positive number of seconds within limits."""

    kind = "invalid_duration"

    def __init__(self, message: str, duration_seconds: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.duration_seconds = duration_seconds


class NotFound(ElectionError):
    """Candidate index is out of range."""

    kind = "not_found"

    def __init__(self, message: str, index: Any = None,
                 candidate_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.index = index
        self.candidate_count = candidate_count


class NoNFTOwnership(ElectionError):
    """Caller does not hold an eligible token."""

    kind = "no_nft_ownership"

    def __init__(self, message: str, caller: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.caller = caller


class AlreadyVoted(ElectionError):
    """Voter identity already has a ballot record."""

    kind = "already_voted"

    def __init__(self, message: str, voter: Optional[str] = None,
                 candidate_index: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.voter = voter
        self.candidate_index = candidate_index
