"""
Eligibility oracle adapters.

The oracle answers "does this identity hold an eligible token?" and
enumerates current holders. The election core only reads from it.
"""
from .base import EligibilityOracle
from .http_oracle import HttpEligibilityOracle
from .memory import InMemoryTokenOracle

__all__ = ["EligibilityOracle", "HttpEligibilityOracle", "InMemoryTokenOracle"]
