"""
Candidate registry.

Candidates are stored in insertion order; a candidate's index is its
position and is never reused. Writes to the text fields are refused once
the registry is frozen, which happens when voting starts. Tally increments
are serialized per candidate.
"""

import threading
from typing import Any

import structlog

from ..errors import NotFound, PhaseError
from ..state.models import Candidate

logger = structlog.get_logger(__name__)


class CandidateRegistry:
    """Manages the ordered candidate roster for one election."""

    def __init__(self):
        self.logger = logger
        self._candidates: list[Candidate] = []
        self._roster_lock = threading.Lock()
        self._tally_locks: list[threading.Lock] = []
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._candidates)

    def freeze(self) -> None:
        """Make candidate details immutable from now on."""
        with self._roster_lock:
            self._frozen = True

    def add_candidate(self, name: str, image_ref: str,
                      vision: str, mission: str) -> Candidate:
        """Append a candidate with the next sequential index and zero votes."""
        with self._roster_lock:
            self._ensure_writable("add_candidate")
            candidate = Candidate(
                index=len(self._candidates),
                name=name,
                image_ref=image_ref,
                vision=vision,
                mission=mission
            )
            self._candidates.append(candidate)
            self._tally_locks.append(threading.Lock())

        self.logger.info(
            "Candidate added",
            candidate_index=candidate.index,
            candidate_name=name
        )
        return candidate

    def update_candidate(self, index: int, name: str, image_ref: str,
                         vision: str, mission: str) -> Candidate:
        """Overwrite the text fields of the candidate at ``index``."""
        with self._roster_lock:
            self._ensure_writable("update_candidate")
            self._lookup(index)
            with self._tally_locks[index]:
                updated = self._candidates[index].with_details(name, image_ref, vision, mission)
                self._candidates[index] = updated

        self.logger.info(
            "Candidate updated",
            candidate_index=index,
            candidate_name=name
        )
        return updated

    def get_candidate(self, index: int) -> Candidate:
        return self._lookup(index)

    def list_candidates(self) -> list[Candidate]:
        """All candidates ordered by index."""
        return list(self._candidates)

    def ensure_exists(self, index: Any) -> None:
        """Raise NotFound if ``index`` does not name a candidate."""
        self._lookup(index)

    def increment_vote(self, index: int) -> Candidate:
        """Add one vote to the candidate at ``index``."""
        self._lookup(index)
        with self._tally_locks[index]:
            updated = self._candidates[index].with_vote()
            self._candidates[index] = updated
        return updated

    def total_votes(self) -> int:
        return sum(c.vote_count for c in self._candidates)

    def _lookup(self, index: Any) -> Candidate:
        count = len(self._candidates)
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < count:
            raise NotFound(
                f"No candidate at index {index!r} ({count} registered)",
                index=index,
                candidate_count=count
            )
        return self._candidates[index]

    def _ensure_writable(self, operation: str) -> None:
        if self._frozen:
            raise PhaseError(
                "Candidates are frozen once voting has started",
                operation=operation
            )
