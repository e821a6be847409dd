"""Ballot persistence layer for audit trails."""

import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

import structlog

from ..errors import PersistenceError
from ..state.models import BallotRecord


class BallotStore:
    """SQLite-based ballot journal; one row per voter per election."""

    def __init__(self, db_path: str = "ballots.db"):
        self.db_path = Path(db_path)
        self.logger = structlog.get_logger("ballot.store")
        self._lock = threading.Lock()

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS ballots (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    election_id TEXT NOT NULL,
                    voter TEXT NOT NULL,
                    candidate_index INTEGER NOT NULL,
                    cast_at TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    UNIQUE(election_id, voter)
                )
            """)

            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_ballots_election ON ballots(election_id)
            """)

            conn.commit()

    @contextmanager
    def _get_connection(self):
        """Get database connection, translating sqlite errors."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error("Database error", error=str(e), db_path=str(self.db_path))
            raise PersistenceError(
                f"Ballot store error: {e}",
                operation="sqlite",
                target=str(self.db_path)
            ) from e
        finally:
            if conn:
                conn.close()

    def store_ballot(self, election_id: str, ballot: BallotRecord) -> int:
        """
        Append a ballot to the journal.

        Args:
            election_id: Election the ballot belongs to
            ballot: Recorded ballot

        Returns:
            Row ID of the stored ballot

        Raises:
            PersistenceError: If the write fails, including a duplicate voter
        """
        with self._lock:
            with self._get_connection() as conn:
                cursor = conn.execute("""
                    INSERT INTO ballots (
                        election_id, voter, candidate_index, cast_at, created_at
                    ) VALUES (?, ?, ?, ?, ?)
                """, (
                    election_id,
                    ballot.voter,
                    ballot.candidate_index,
                    ballot.cast_at.isoformat(),
                    datetime.now(timezone.utc).isoformat()
                ))
                conn.commit()
                ballot_id = cursor.lastrowid

        self.logger.info(
            "Ballot stored",
            election_id=election_id,
            voter=ballot.voter,
            ballot_id=ballot_id
        )
        return ballot_id

    def get_ballots(self, election_id: str) -> list[BallotRecord]:
        """All ballots for an election in the order they were stored."""
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT voter, candidate_index, cast_at FROM ballots
                WHERE election_id = ? ORDER BY id
            """, (election_id,)).fetchall()

        return [
            BallotRecord(
                voter=row["voter"],
                candidate_index=row["candidate_index"],
                cast_at=datetime.fromisoformat(row["cast_at"])
            )
            for row in rows
        ]

    def count_ballots(self, election_id: str) -> int:
        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT COUNT(*) AS n FROM ballots WHERE election_id = ?
            """, (election_id,)).fetchone()
        return row["n"]
