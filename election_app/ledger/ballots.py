"""
Ballot ledger.

A voter's ballot is recorded at most once. The has-voted check and the
write happen under a lock scoped to that voter, so concurrent calls for the
same identity cannot both succeed while different voters never wait on
each other.
"""

import threading
from collections import defaultdict
from datetime import datetime
from typing import Callable, Optional

import structlog

from ..errors import AlreadyVoted
from ..state.models import BallotRecord

logger = structlog.get_logger(__name__)


class BallotLedger:
    """Append-only record of who voted and for whom."""

    def __init__(self):
        self.logger = logger
        self._ballots: dict[str, BallotRecord] = {}
        self._order: list[str] = []
        self._registry_lock = threading.Lock()
        self._voter_locks: defaultdict[str, threading.Lock] = defaultdict(threading.Lock)

    def has_voted(self, voter: str) -> bool:
        return voter in self._ballots

    def record_vote(self, voter: str, candidate_index: int, cast_at: datetime,
                    journal: Optional[Callable[[BallotRecord], object]] = None) -> BallotRecord:
        """
        Record a ballot for ``voter``.

        Args:
            voter: Voter identity
            candidate_index: Chosen candidate
            cast_at: Time the ballot was cast
            journal: Optional durable write run under the voter lock before
                the ballot is stored; if it raises, nothing is recorded

        Returns:
            The stored ballot record

        Raises:
            AlreadyVoted: If the voter already has a ballot; nothing changes
        """
        with self._lock_for(voter):
            existing = self._ballots.get(voter)
            if existing is not None:
                raise AlreadyVoted(
                    f"{voter} has already voted",
                    voter=voter,
                    candidate_index=existing.candidate_index
                )

            record = BallotRecord(
                voter=voter,
                candidate_index=candidate_index,
                cast_at=cast_at
            )
            if journal is not None:
                journal(record)

            with self._registry_lock:
                self._ballots[voter] = record
                self._order.append(voter)

        self.logger.debug(
            "Ballot recorded",
            voter=voter,
            candidate_index=candidate_index
        )
        return record

    def get_ballot(self, voter: str) -> Optional[BallotRecord]:
        return self._ballots.get(voter)

    def ballot_count(self) -> int:
        return len(self._order)

    def list_ballots(self) -> list[BallotRecord]:
        """Ballots in the order they were recorded."""
        with self._registry_lock:
            return [self._ballots[voter] for voter in self._order]

    def _lock_for(self, voter: str) -> threading.Lock:
        with self._registry_lock:
            return self._voter_locks[voter]
