"""
Ballot ledger module.

Per-voter ballot records with atomic double-vote prevention.
"""
