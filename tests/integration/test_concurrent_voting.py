"""Concurrency tests for voting under parallel load."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

from election_app.coordinator import ElectionCoordinator
from election_app.errors import AlreadyVoted
from election_app.oracle.memory import InMemoryTokenOracle

ADMIN = "0xAdmin"


class SlowOracle(InMemoryTokenOracle):
    """Token registry whose ownership lookups block until released."""

    def __init__(self):
        super().__init__()
        self.release = threading.Event()
        self.waiting = threading.Semaphore(0)

    def owns_eligible_token(self, identity: str) -> bool:
        self.waiting.release()
        self.release.wait(timeout=5)
        return super().owns_eligible_token(identity)


def _open_election(oracle, start_time, candidates=3):
    election = ElectionCoordinator(admin=ADMIN, oracle=oracle)
    for i in range(candidates):
        election.add_candidate(ADMIN, f"Candidate {i}", "", "", "", now=start_time)
    election.start_voting(ADMIN, 86400, now=start_time)
    return election


class TestConcurrentVoting:

    def test_distinct_voters_no_lost_updates(self, start_time):
        oracle = InMemoryTokenOracle()
        voters = [f"0xVoter{i}" for i in range(300)]
        for token_id, voter in enumerate(voters):
            oracle.mint(voter, token_id)
        election = _open_election(oracle, start_time)
        now = start_time + timedelta(minutes=5)

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(lambda iv: election.vote(iv[1], iv[0] % 3, now=now),
                          enumerate(voters)))

        assert election.results(now).total_votes == 300
        assert [c.vote_count for c in election.list_candidates()] == [100, 100, 100]
        assert election.ledger.ballot_count() == 300

    def test_same_voter_races_single_ballot(self, start_time):
        oracle = InMemoryTokenOracle()
        oracle.mint("0xAlice", 1)
        election = _open_election(oracle, start_time)
        now = start_time + timedelta(minutes=5)
        barrier = threading.Barrier(12)

        def attempt(index):
            barrier.wait()
            try:
                election.vote("0xAlice", index % 3, now=now)
                return "ok"
            except AlreadyVoted:
                return "dup"

        with ThreadPoolExecutor(max_workers=12) as pool:
            outcomes = list(pool.map(attempt, range(12)))

        assert outcomes.count("ok") == 1
        assert election.results(now).total_votes == 1

    def test_slow_oracle_does_not_block_other_operations(self, start_time):
        """No internal lock is held while the oracle is being queried."""
        oracle = SlowOracle()
        oracle.mint("0xAlice", 1)
        election = _open_election(oracle, start_time)
        now = start_time + timedelta(minutes=5)

        voter = threading.Thread(target=election.vote, args=("0xAlice", 0), kwargs={"now": now})
        voter.start()
        assert oracle.waiting.acquire(timeout=5)

        # The vote is parked inside the oracle call; reads and ledger writes still proceed
        started = time.monotonic()
        assert election.list_candidates()[0].vote_count == 0
        assert not election.has_voted("0xAlice")
        election.ledger.record_vote("0xBob", 1, now)
        assert time.monotonic() - started < 1.0

        oracle.release.set()
        voter.join(timeout=5)

        assert election.has_voted("0xAlice")
        assert election.get_candidate(0).vote_count == 1
