"""End-to-end election scenarios mirroring the reference contract suite."""

import pytest
from datetime import timedelta

from election_app.coordinator import ElectionCoordinator
from election_app.errors import AlreadyVoted, NoNFTOwnership, Unauthorized, VotingNotActive
from election_app.oracle.memory import InMemoryTokenOracle
from election_app.state.models import VotingPhase

ADMIN = "0xAdmin"
VOTER_1 = "0xVoter1"
VOTER_2 = "0xVoter2"
NFT_ADDRESS = "0x40A692f309f854F4Df9f435DBA75Af157f44FcC0"
ONE_DAY = 86400


@pytest.fixture
def nft():
    return InMemoryTokenOracle()


@pytest.fixture
def vote(nft):
    return ElectionCoordinator(admin=ADMIN, oracle=nft, oracle_address=NFT_ADDRESS)


@pytest.fixture
def voting_open(vote, start_time):
    vote.add_candidate(ADMIN, "Candidate 1", "image1", "vision1", "mission1", now=start_time)
    vote.start_voting(ADMIN, ONE_DAY, now=start_time)
    return vote


class TestDeployment:

    def test_sets_admin_and_nft_address(self, vote):
        assert vote.admin == ADMIN
        assert vote.oracle_address == NFT_ADDRESS


class TestCandidateManagementScenarios:

    def test_admin_adds_candidate(self, vote, start_time):
        vote.add_candidate(ADMIN, "Candidate 1", "image1", "vision1", "mission1", now=start_time)

        candidates = vote.list_candidates()
        assert len(candidates) == 1
        assert candidates[0].name == "Candidate 1"
        assert candidates[0].index == 0
        assert candidates[0].vote_count == 0

    def test_non_admin_add_rejected(self, vote, start_time):
        with pytest.raises(Unauthorized):
            vote.add_candidate(VOTER_1, "Candidate 1", "image1", "vision1", "mission1",
                               now=start_time)

        assert vote.list_candidates() == []

    def test_admin_updates_candidate(self, vote, start_time):
        vote.add_candidate(ADMIN, "Candidate 1", "image1", "vision1", "mission1", now=start_time)
        vote.update_candidate(ADMIN, 0, "Updated Candidate", "image2", "vision2", "mission2",
                              now=start_time)

        assert vote.list_candidates()[0].name == "Updated Candidate"


class TestVotingScenarios:

    def test_holder_can_vote_once(self, voting_open, nft, start_time):
        nft.mint(VOTER_1, 1)
        now = start_time + timedelta(seconds=10)

        voting_open.vote(VOTER_1, 0, now=now)
        assert voting_open.get_candidate(0).vote_count == 1

        with pytest.raises(AlreadyVoted):
            voting_open.vote(VOTER_1, 0, now=now)
        assert voting_open.get_candidate(0).vote_count == 1

    def test_non_holder_cannot_vote(self, voting_open, start_time):
        with pytest.raises(NoNFTOwnership):
            voting_open.vote(VOTER_1, 0, now=start_time + timedelta(seconds=10))

    def test_no_voting_after_period(self, voting_open, nft, start_time):
        nft.mint(VOTER_1, 1)

        with pytest.raises(VotingNotActive):
            voting_open.vote(VOTER_1, 0, now=start_time + timedelta(seconds=ONE_DAY + 1))

        assert voting_open.current_phase(start_time + timedelta(seconds=ONE_DAY + 1)) \
            == VotingPhase.ENDED

    def test_last_second_vote_accepted(self, voting_open, nft, start_time):
        nft.mint(VOTER_1, 1)

        voting_open.vote(VOTER_1, 0, now=start_time + timedelta(seconds=ONE_DAY - 1))

        assert voting_open.get_candidate(0).vote_count == 1


class TestHolderListing:

    def test_returns_holders_in_mint_order(self, vote, nft):
        nft.mint(VOTER_1, 1)
        nft.mint(VOTER_2, 2)

        holders = vote.list_holders()

        assert len(holders) == 2
        assert holders[0].holder == VOTER_1
        assert holders[1].holder == VOTER_2


class TestFullLifecycle:

    def test_setup_active_ended(self, vote, nft, start_time):
        voters = [f"0xVoter{i}" for i in range(10)]
        for token_id, voter in enumerate(voters, start=1):
            nft.mint(voter, token_id)

        for name in ["Ada", "Grace", "Linus"]:
            vote.add_candidate(ADMIN, name, f"{name}.png", "vision", "mission", now=start_time)
        vote.start_voting(ADMIN, 3600, now=start_time)

        for i, voter in enumerate(voters):
            vote.vote(voter, i % 3, now=start_time + timedelta(seconds=60 + i))

        results = vote.results(now=start_time + timedelta(hours=2))

        assert results.is_final
        assert [c.vote_count for c in results.candidates] == [4, 3, 3]
        assert results.total_votes == len(voters)
        assert results.leading_indices == [0]
        assert [b.voter for b in vote.ledger.list_ballots()] == voters
