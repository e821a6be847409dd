"""
Persistence module.

Optional SQLite journal of recorded ballots for audit and replay.
"""
