"""
Voting session phase machine.

The phase is never stored. It is recomputed from ``started_at``,
``duration_seconds`` and the caller's ``now`` on every query, so expiry
needs no explicit transition call.
"""

import threading
from datetime import datetime
from typing import Optional

import structlog

from ..errors import InvalidDuration, PhaseError
from ..utils.time import add_seconds, ensure_aware, seconds_until
from .models import SessionSnapshot, VotingPhase

logger = structlog.get_logger(__name__)


class VotingSession:
    """Time-bounded voting session: SETUP → ACTIVE → ENDED."""

    def __init__(self, max_duration_seconds: Optional[int] = None):
        self.logger = logger
        self.max_duration_seconds = max_duration_seconds
        self._lock = threading.Lock()
        self._started_at: Optional[datetime] = None
        self._duration_seconds: Optional[int] = None
        self._ends_at: Optional[datetime] = None
        self._closed_at: Optional[datetime] = None

    @property
    def started_at(self) -> Optional[datetime]:
        return self._started_at

    @property
    def duration_seconds(self) -> Optional[int]:
        return self._duration_seconds

    @property
    def ends_at(self) -> Optional[datetime]:
        return self._ends_at

    @property
    def closed_at(self) -> Optional[datetime]:
        return self._closed_at

    def validate_duration(self, duration_seconds: int) -> None:
        """Raise InvalidDuration unless duration is a positive integer within limits."""
        if isinstance(duration_seconds, bool) or not isinstance(duration_seconds, int):
            raise InvalidDuration(
                f"Duration must be an integer number of seconds, got {duration_seconds!r}",
                duration_seconds=duration_seconds
            )

        if duration_seconds <= 0:
            raise InvalidDuration(
                f"Duration must be positive, got {duration_seconds}",
                duration_seconds=duration_seconds
            )

        if self.max_duration_seconds is not None and duration_seconds > self.max_duration_seconds:
            raise InvalidDuration(
                f"Duration {duration_seconds}s exceeds maximum {self.max_duration_seconds}s",
                duration_seconds=duration_seconds,
                context={"max_duration_seconds": self.max_duration_seconds}
            )

    def start(self, duration_seconds: int, now: datetime) -> datetime:
        """
        Open voting at ``now`` for ``duration_seconds``.

        Args:
            duration_seconds: Length of the voting window, > 0
            now: Start time, timezone-aware

        Returns:
            The computed end time

        Raises:
            InvalidDuration: If the duration is not a valid positive integer
            PhaseError: If the session has already left SETUP
        """
        ensure_aware(now)
        self.validate_duration(duration_seconds)

        with self._lock:
            if self._started_at is not None:
                raise PhaseError(
                    "Voting has already been started",
                    current_phase=self.current_phase(now).value,
                    operation="start_voting"
                )

            self._started_at = now
            self._duration_seconds = duration_seconds
            self._ends_at = add_seconds(now, duration_seconds)

        self.logger.debug(
            "Voting session started",
            started_at=now.isoformat(),
            ends_at=self._ends_at.isoformat(),
            duration_seconds=duration_seconds
        )
        return self._ends_at

    def close(self, now: datetime) -> None:
        """
        Force the session to ENDED before its scheduled end.

        Raises:
            PhaseError: If the session is not ACTIVE at ``now``
        """
        ensure_aware(now)

        with self._lock:
            phase = self.current_phase(now)
            if phase != VotingPhase.ACTIVE:
                raise PhaseError(
                    f"Voting can only be ended while active, current phase is {phase.value}",
                    current_phase=phase.value,
                    operation="end_voting"
                )
            self._closed_at = now

    def current_phase(self, now: datetime) -> VotingPhase:
        """Phase at ``now``. Pure: never mutates the session."""
        ensure_aware(now)

        if self._started_at is None:
            return VotingPhase.SETUP

        if self._closed_at is not None:
            return VotingPhase.ENDED

        if now < self._ends_at:
            return VotingPhase.ACTIVE

        return VotingPhase.ENDED

    def is_active(self, now: datetime) -> bool:
        return self.current_phase(now) == VotingPhase.ACTIVE

    def remaining(self, now: datetime) -> float:
        """Seconds left in the voting window, 0 when not active."""
        if not self.is_active(now):
            return 0.0
        return seconds_until(self._ends_at, now)

    def snapshot(self, now: datetime) -> SessionSnapshot:
        return SessionSnapshot(
            phase=self.current_phase(now),
            started_at=self._started_at,
            ends_at=self._ends_at,
            closed_at=self._closed_at,
            duration_seconds=self._duration_seconds,
            remaining_seconds=self.remaining(now)
        )
