"""Tests for the election error hierarchy."""

import pytest

from election_app.errors import (
    AlreadyVoted,
    ElectionError,
    ExternalServiceError,
    InvalidDuration,
    NoNFTOwnership,
    NotFound,
    OracleUnavailable,
    PersistenceError,
    PhaseError,
    Unauthorized,
    VotingNotActive,
)


class TestErrorClassification:
    """Test error classification system."""

    def test_election_error_hierarchy(self):
        base_error = ElectionError("base error")
        assert base_error.recoverable is False
        assert base_error.context == {}

        for error in [
            Unauthorized("x", caller="bob", operation="add_candidate"),
            PhaseError("x", current_phase="active"),
            VotingNotActive("x", current_phase="ended"),
            InvalidDuration("x", duration_seconds=0),
            NotFound("x", index=4, candidate_count=1),
            NoNFTOwnership("x", caller="bob"),
            AlreadyVoted("x", voter="bob"),
        ]:
            assert isinstance(error, ElectionError)
            assert error.recoverable is False

    def test_voting_not_active_is_phase_error(self):
        error = VotingNotActive("closed", current_phase="ended", operation="vote")
        assert isinstance(error, PhaseError)
        assert error.current_phase == "ended"
        assert error.operation == "vote"

    def test_kinds_are_distinct(self):
        kinds = [
            Unauthorized.kind, PhaseError.kind, VotingNotActive.kind,
            InvalidDuration.kind, NotFound.kind, NoNFTOwnership.kind,
            AlreadyVoted.kind, OracleUnavailable.kind,
        ]
        assert len(set(kinds)) == len(kinds)

    def test_oracle_unavailable_is_not_an_eligibility_failure(self):
        error = OracleUnavailable("down", oracle="http", query="owns_eligible_token")

        assert isinstance(error, ExternalServiceError)
        assert not isinstance(error, ElectionError)
        assert error.recoverable is True
        assert error.oracle == "http"

    def test_persistence_error(self):
        error = PersistenceError("disk full", operation="sqlite", target="ballots.db")

        assert isinstance(error, ExternalServiceError)
        assert error.target == "ballots.db"

    def test_context_passthrough(self):
        error = InvalidDuration("too long", duration_seconds=10**9,
                                context={"max_duration_seconds": 100})
        assert error.context == {"max_duration_seconds": 100}
        assert str(error) == "too long"

    def test_catchable_as_group(self):
        with pytest.raises(ElectionError):
            raise NoNFTOwnership("no token", caller="carol")
