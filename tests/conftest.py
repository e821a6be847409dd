"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timedelta, timezone

from election_app.coordinator import ElectionCoordinator
from election_app.oracle.memory import InMemoryTokenOracle

ADMIN = "0xAdmin"
VOTER_1 = "0xVoter1"
VOTER_2 = "0xVoter2"
NFT_ADDRESS = "0x40A692f309f854F4Df9f435DBA75Af157f44FcC0"
ONE_DAY = 86400


@pytest.fixture
def start_time() -> datetime:
    """Fixed election start time."""
    return datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def oracle() -> InMemoryTokenOracle:
    """Empty token registry."""
    return InMemoryTokenOracle()


@pytest.fixture
def election(oracle) -> ElectionCoordinator:
    """Fresh election in SETUP with no candidates."""
    return ElectionCoordinator(admin=ADMIN, oracle=oracle, oracle_address=NFT_ADDRESS)


@pytest.fixture
def active_election(election, start_time) -> ElectionCoordinator:
    """Election with one candidate and a one-day voting window already open."""
    election.add_candidate(ADMIN, "Candidate 1", "image1", "vision1", "mission1",
                           now=start_time)
    election.start_voting(ADMIN, ONE_DAY, now=start_time)
    return election


@pytest.fixture
def during_voting(start_time) -> datetime:
    """A time inside the active window."""
    return start_time + timedelta(hours=1)
