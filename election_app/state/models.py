"""
Election data models.

This module defines the immutable records handed out by the registry,
ledger and session, and the phase enumeration that drives the election
lifecycle.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional


class VotingPhase(str, Enum):
    """Election lifecycle phases."""
    SETUP = "setup"
    ACTIVE = "active"
    ENDED = "ended"


@dataclass(frozen=True)
class Candidate:
    """Snapshot of a single candidate."""

    index: int
    name: str
    image_ref: str
    vision: str
    mission: str
    vote_count: int = 0

    def with_details(self, name: str, image_ref: str,
                     vision: str, mission: str) -> 'Candidate':
        """Create new candidate with updated text fields, same index and tally."""
        return replace(self, name=name, image_ref=image_ref,
                       vision=vision, mission=mission)

    def with_vote(self) -> 'Candidate':
        """Create new candidate with one more vote."""
        return replace(self, vote_count=self.vote_count + 1)


@dataclass(frozen=True)
class BallotRecord:
    """Durable fact that a voter cast a ballot."""

    voter: str
    candidate_index: int
    cast_at: datetime


@dataclass(frozen=True)
class TokenHolding:
    """One (holder, token) pair reported by the eligibility oracle."""

    holder: str
    token_id: int


@dataclass(frozen=True)
class SessionSnapshot:
    """Point-in-time view of the voting session."""

    phase: VotingPhase
    started_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    duration_seconds: Optional[int] = None
    remaining_seconds: float = 0.0


@dataclass(frozen=True)
class ElectionResults:
    """Tally report for an election."""

    phase: VotingPhase
    candidates: list[Candidate] = field(default_factory=list)
    total_votes: int = 0

    @property
    def leading_indices(self) -> list[int]:
        """Indices of candidates sharing the highest tally; empty with no votes."""
        if self.total_votes == 0:
            return []
        top = max(c.vote_count for c in self.candidates)
        return [c.index for c in self.candidates if c.vote_count == top]

    @property
    def is_final(self) -> bool:
        """True once voting has ended."""
        return self.phase == VotingPhase.ENDED
