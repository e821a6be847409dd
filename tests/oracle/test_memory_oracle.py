"""Tests for the in-memory token registry oracle."""

import pytest

from election_app.oracle.base import EligibilityOracle
from election_app.oracle.memory import InMemoryTokenOracle
from election_app.state.models import TokenHolding


class TestInMemoryTokenOracle:
    """Test InMemoryTokenOracle class."""

    def test_is_an_eligibility_oracle(self):
        assert isinstance(InMemoryTokenOracle(), EligibilityOracle)

    def test_empty_registry(self):
        oracle = InMemoryTokenOracle()

        assert oracle.enumerate_holders() == []
        assert not oracle.owns_eligible_token("alice")
        assert oracle.balance_of("alice") == 0

    def test_mint_grants_eligibility(self):
        oracle = InMemoryTokenOracle()

        holding = oracle.mint("alice", 1)

        assert holding == TokenHolding(holder="alice", token_id=1)
        assert oracle.owns_eligible_token("alice")
        assert oracle.owner_of(1) == "alice"

    def test_duplicate_mint_rejected(self):
        oracle = InMemoryTokenOracle()
        oracle.mint("alice", 1)

        with pytest.raises(ValueError):
            oracle.mint("bob", 1)

        assert oracle.owner_of(1) == "alice"

    def test_enumerate_in_mint_order(self):
        oracle = InMemoryTokenOracle()
        oracle.mint("voter1", 1)
        oracle.mint("voter2", 2)
        oracle.mint("voter1", 7)

        holders = oracle.enumerate_holders()

        assert [h.holder for h in holders] == ["voter1", "voter2", "voter1"]
        assert [h.token_id for h in holders] == [1, 2, 7]
        assert oracle.balance_of("voter1") == 2

    def test_transfer_moves_eligibility(self):
        oracle = InMemoryTokenOracle()
        oracle.mint("alice", 1)

        oracle.transfer(1, "bob")

        assert not oracle.owns_eligible_token("alice")
        assert oracle.owns_eligible_token("bob")
        assert oracle.enumerate_holders() == [TokenHolding("bob", 1)]

    def test_burn_removes_token(self):
        oracle = InMemoryTokenOracle()
        oracle.mint("alice", 1)

        oracle.burn(1)

        assert oracle.owner_of(1) is None
        assert not oracle.owns_eligible_token("alice")

    def test_unknown_token_operations(self):
        oracle = InMemoryTokenOracle()

        with pytest.raises(KeyError):
            oracle.transfer(9, "bob")
        with pytest.raises(KeyError):
            oracle.burn(9)
