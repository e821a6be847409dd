#!/usr/bin/env python3
"""
Basic Usage Example - Token-Gated Election

This script walks one election through its lifecycle with an in-memory
token registry. It shows how to:
- Register candidates as the admin
- Mint eligibility tokens to voters
- Start a time-bounded voting session
- Cast votes and observe rejections
- Read the results after voting ends

Run: python examples/basic_usage.py
"""

from datetime import datetime, timedelta, timezone

from election_app.config.loader import ConfigLoader
from election_app.coordinator import ElectionCoordinator
from election_app.errors import ElectionError
from election_app.logging import configure_logging_from_settings
from election_app.oracle.memory import InMemoryTokenOracle


def main() -> None:
    config = ConfigLoader.create().load()
    configure_logging_from_settings(config.logging)

    admin, alice, bob, carol = "0xadmin", "0xalice", "0xbob", "0xcarol"
    start = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)

    tokens = InMemoryTokenOracle()
    election = ElectionCoordinator(admin=admin, oracle=tokens, oracle_address="0xnft",
                                    settings=config.election)

    print("🗳️  Registering candidates...")
    election.add_candidate(admin, "Ada", "ipfs://ada.png", "Open books", "Publish every budget")
    election.add_candidate(admin, "Grace", "ipfs://grace.png", "Ship it", "Weekly releases")

    tokens.mint(alice, 1)
    tokens.mint(bob, 2)

    ends_at = election.start_voting(admin, 3600, now=start)
    print(f"⏱️  Voting open until {ends_at.isoformat()}")

    attempts = [
        (alice, 0, start + timedelta(minutes=5)),
        (bob, 1, start + timedelta(minutes=10)),
        (alice, 1, start + timedelta(minutes=15)),   # already voted
        (carol, 0, start + timedelta(minutes=20)),   # no token
        (bob, 0, start + timedelta(hours=2)),        # too late
    ]

    for voter, index, at in attempts:
        try:
            election.vote(voter, index, now=at)
            print(f"✅ {voter} voted for candidate {index}")
        except ElectionError as e:
            print(f"❌ {voter}: {e.kind} ({e})")

    results = election.results(now=start + timedelta(hours=2))
    print(f"\n📊 Phase: {results.phase.value}, total votes: {results.total_votes}")
    for candidate in results.candidates:
        print(f"  {candidate.index}: {candidate.name} - {candidate.vote_count}")
    print(f"🏆 Leading: {results.leading_indices}")

    print("\n🪙 Token holders:")
    for holding in election.list_holders():
        print(f"  token {holding.token_id} → {holding.holder}")


if __name__ == "__main__":
    main()
