"""
Election coordinator.

Composes the candidate registry, voting session and ballot ledger for a
single election, enforces admin authorization, and routes votes through
the phase, candidate, eligibility and double-vote checks before any state
changes.
"""

import threading
from datetime import datetime
from typing import Optional

import structlog

from .config.defaults import ElectionSettings
from .errors import (
    AlreadyVoted,
    ElectionError,
    ExternalServiceError,
    NoNFTOwnership,
    PhaseError,
    Unauthorized,
    VotingNotActive,
)
from .ledger.ballots import BallotLedger
from .logging.config import get_audit_logger, log_phase_transition, log_vote_decision
from .oracle.base import EligibilityOracle
from .persistence.ballot_store import BallotStore
from .registry.candidates import CandidateRegistry
from .state.models import (
    BallotRecord,
    Candidate,
    ElectionResults,
    SessionSnapshot,
    TokenHolding,
    VotingPhase,
)
from .state.session import VotingSession
from .utils.time import format_election_time, get_election_time

logger = structlog.get_logger(__name__)
audit_logger = get_audit_logger(__name__)


class ElectionCoordinator:
    """
    Façade for one token-gated, time-bounded election.

    The admin identity and the eligibility oracle are fixed at construction.
    Every admin operation takes the caller identity explicitly; there is no
    ambient "current user".
    """

    def __init__(
        self,
        admin: str,
        oracle: EligibilityOracle,
        oracle_address: Optional[str] = None,
        settings: Optional[ElectionSettings] = None,
        ballot_store: Optional[BallotStore] = None
    ) -> None:
        """Initialize the coordinator for a fresh election in SETUP."""
        if not admin:
            raise ValueError("Admin identity is required")

        self.logger = logger
        self.audit_logger = audit_logger

        self._admin = admin
        self._oracle = oracle
        self._oracle_address = oracle_address
        self.settings = settings or ElectionSettings()
        self.ballot_store = ballot_store

        self.registry = CandidateRegistry()
        self.session = VotingSession(max_duration_seconds=self.settings.max_duration_seconds)
        self.ledger = BallotLedger()

        # Serializes admin mutations so a roster write cannot race start_voting
        self._admin_lock = threading.Lock()

        self.logger.info(
            "Election coordinator initialized",
            election_id=self.election_id,
            admin=admin,
            oracle=oracle.name,
            oracle_address=oracle_address
        )

    @property
    def admin(self) -> str:
        return self._admin

    @property
    def oracle(self) -> EligibilityOracle:
        return self._oracle

    @property
    def oracle_address(self) -> Optional[str]:
        return self._oracle_address

    @property
    def election_id(self) -> str:
        return self.settings.election_id

    # Candidate management

    def add_candidate(self, caller: str, name: str, image_ref: str,
                      vision: str, mission: str,
                      now: Optional[datetime] = None) -> Candidate:
        """Register a new candidate. Admin only, SETUP only."""
        now = get_election_time(now)
        with self._admin_lock:
            self._require_admin(caller, "add_candidate")
            self._require_setup("add_candidate", now)
            return self.registry.add_candidate(name, image_ref, vision, mission)

    def update_candidate(self, caller: str, index: int, name: str, image_ref: str,
                         vision: str, mission: str,
                         now: Optional[datetime] = None) -> Candidate:
        """Rewrite a candidate's details. Admin only, SETUP only."""
        now = get_election_time(now)
        with self._admin_lock:
            self._require_admin(caller, "update_candidate")
            self._require_setup("update_candidate", now)
            return self.registry.update_candidate(index, name, image_ref, vision, mission)

    def list_candidates(self) -> list[Candidate]:
        return self.registry.list_candidates()

    def get_candidate(self, index: int) -> Candidate:
        return self.registry.get_candidate(index)

    # Lifecycle

    def start_voting(self, caller: str, duration_seconds: Optional[int] = None,
                     now: Optional[datetime] = None) -> datetime:
        """
        Open voting for ``duration_seconds`` starting at ``now``.

        Args:
            caller: Identity requesting the start; must be the admin
            duration_seconds: Voting window length, defaults to the configured duration
            now: Start time, defaults to wall-clock UTC

        Returns:
            The time voting ends

        Raises:
            Unauthorized: Caller is not the admin
            PhaseError: Voting already started, or no candidates registered
            InvalidDuration: Duration is not a positive integer within limits
        """
        now = get_election_time(now)
        if duration_seconds is None:
            duration_seconds = self.settings.default_duration_seconds

        with self._admin_lock:
            self._require_admin(caller, "start_voting")
            self._require_setup("start_voting", now)

            if self.settings.require_candidates and len(self.registry) == 0:
                raise PhaseError(
                    "Cannot start voting without candidates",
                    current_phase=VotingPhase.SETUP.value,
                    operation="start_voting"
                )

            ends_at = self.session.start(duration_seconds, now)
            self.registry.freeze()

        log_phase_transition(
            self.audit_logger,
            election_id=self.election_id,
            from_phase=VotingPhase.SETUP.value,
            to_phase=VotingPhase.ACTIVE.value,
            trigger="start_voting",
            context={
                "started_at": format_election_time(now),
                "ends_at": format_election_time(ends_at),
                "duration_seconds": duration_seconds,
                "candidate_count": len(self.registry)
            }
        )
        return ends_at

    def end_voting(self, caller: str, now: Optional[datetime] = None) -> None:
        """Close voting early. Admin only, ACTIVE only."""
        now = get_election_time(now)
        with self._admin_lock:
            self._require_admin(caller, "end_voting")
            self.session.close(now)

        log_phase_transition(
            self.audit_logger,
            election_id=self.election_id,
            from_phase=VotingPhase.ACTIVE.value,
            to_phase=VotingPhase.ENDED.value,
            trigger="end_voting",
            context={
                "closed_at": format_election_time(now),
                "scheduled_end": format_election_time(self.session.ends_at)
            }
        )

    def current_phase(self, now: Optional[datetime] = None) -> VotingPhase:
        return self.session.current_phase(get_election_time(now))

    def is_active(self, now: Optional[datetime] = None) -> bool:
        return self.session.is_active(get_election_time(now))

    def session_snapshot(self, now: Optional[datetime] = None) -> SessionSnapshot:
        return self.session.snapshot(get_election_time(now))

    # Voting

    def vote(self, caller: str, candidate_index: int,
             now: Optional[datetime] = None) -> BallotRecord:
        """
        Cast ``caller``'s ballot for the candidate at ``candidate_index``.

        Checks run in order and nothing is written until all pass: phase,
        candidate index, token ownership, prior ballot. The optional journal
        row is written under the voter lock before the in-memory ballot, so a
        journal failure leaves the election untouched. The ballot is recorded
        before the tally is incremented, so a failure between the two writes
        can never let a retry count twice.

        Raises:
            VotingNotActive: Voting has not started or has ended
            NotFound: No candidate at ``candidate_index``
            NoNFTOwnership: Caller holds no eligible token
            AlreadyVoted: Caller already has a ballot
            OracleUnavailable: Ownership could not be determined
            PersistenceError: The ballot journal refused the write; nothing applied
        """
        now = get_election_time(now)

        try:
            phase = self.session.current_phase(now)
            if phase != VotingPhase.ACTIVE:
                raise VotingNotActive(
                    f"Voting is not active (phase: {phase.value})",
                    current_phase=phase.value,
                    operation="vote"
                )

            self.registry.ensure_exists(candidate_index)

            # External read; no internal lock is held here
            if not self._oracle.owns_eligible_token(caller):
                raise NoNFTOwnership(
                    f"{caller} holds no eligible token",
                    caller=caller
                )

            if self.ledger.has_voted(caller):
                raise AlreadyVoted(
                    f"{caller} has already voted",
                    voter=caller
                )

            ballot = self.ledger.record_vote(
                caller, candidate_index, now, journal=self._journal_ballot
            )
            self.registry.increment_vote(candidate_index)

        except ElectionError as e:
            log_vote_decision(
                self.audit_logger,
                election_id=self.election_id,
                voter=caller,
                candidate_index=candidate_index,
                accepted=False,
                reason=e.kind
            )
            raise

        except ExternalServiceError as e:
            self.logger.error(
                "Vote aborted by external failure",
                election_id=self.election_id,
                voter=caller,
                error_kind=e.kind,
                error=str(e)
            )
            raise

        log_vote_decision(
            self.audit_logger,
            election_id=self.election_id,
            voter=caller,
            candidate_index=candidate_index,
            accepted=True,
            reason="recorded",
            context={"cast_at": format_election_time(now)}
        )
        return ballot

    def has_voted(self, identity: str) -> bool:
        return self.ledger.has_voted(identity)

    def get_ballot(self, identity: str) -> Optional[BallotRecord]:
        return self.ledger.get_ballot(identity)

    # Reporting

    def list_holders(self) -> list[TokenHolding]:
        """Current token holders straight from the oracle, in its order."""
        return list(self._oracle.enumerate_holders())

    def results(self, now: Optional[datetime] = None) -> ElectionResults:
        candidates = self.registry.list_candidates()
        return ElectionResults(
            phase=self.current_phase(now),
            candidates=candidates,
            total_votes=sum(c.vote_count for c in candidates)
        )

    # Guards

    def _journal_ballot(self, ballot: BallotRecord) -> None:
        if self.ballot_store is not None:
            self.ballot_store.store_ballot(self.election_id, ballot)

    def _require_admin(self, caller: str, operation: str) -> None:
        if caller != self._admin:
            self.audit_logger.warning(
                "Unauthorized admin operation",
                election_id=self.election_id,
                caller=caller,
                operation=operation
            )
            raise Unauthorized(
                f"{caller} is not allowed to {operation}",
                caller=caller,
                operation=operation
            )

    def _require_setup(self, operation: str, now: datetime) -> None:
        phase = self.session.current_phase(now)
        if phase != VotingPhase.SETUP:
            raise PhaseError(
                f"{operation} is only allowed during setup (phase: {phase.value})",
                current_phase=phase.value,
                operation=operation
            )
