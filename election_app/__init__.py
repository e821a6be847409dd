"""
Election App - Token-Gated Election Coordinator

A small election engine that manages a candidate roster, gates voting on
external token ownership, prevents double voting, and runs a time-bounded
voting session through Setup → Active → Ended.
"""

__version__ = "0.1.0"
__author__ = "Election App Team"
