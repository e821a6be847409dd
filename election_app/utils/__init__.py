"""
Utility functions module.

Time Semantics:
- Every phase decision is made against an explicit ``now`` supplied by the caller
- Wall-clock UTC is only the fallback when the caller supplies no time
- All timestamps are timezone-aware; naive datetimes are rejected
"""
