"""
In-memory token registry oracle.

Behaves like a minimal NFT contract: tokens are minted to a holder,
can be transferred or burned, and holders are enumerated per token in
mint order.
"""

import threading
from typing import Optional

import structlog

from ..state.models import TokenHolding
from .base import EligibilityOracle

logger = structlog.get_logger(__name__)


class InMemoryTokenOracle(EligibilityOracle):
    """Thread-safe in-process token registry."""

    name = "memory"

    def __init__(self):
        self.logger = logger
        self._lock = threading.Lock()
        # dicts keep insertion order, which is mint order
        self._owners: dict[int, str] = {}

    def mint(self, holder: str, token_id: int) -> TokenHolding:
        """Create ``token_id`` owned by ``holder``."""
        with self._lock:
            if token_id in self._owners:
                raise ValueError(f"Token {token_id} already minted")
            self._owners[token_id] = holder

        self.logger.debug("Token minted", holder=holder, token_id=token_id)
        return TokenHolding(holder=holder, token_id=token_id)

    def transfer(self, token_id: int, new_holder: str) -> TokenHolding:
        with self._lock:
            if token_id not in self._owners:
                raise KeyError(f"Token {token_id} does not exist")
            previous = self._owners[token_id]
            self._owners[token_id] = new_holder

        self.logger.debug(
            "Token transferred",
            token_id=token_id,
            from_holder=previous,
            to_holder=new_holder
        )
        return TokenHolding(holder=new_holder, token_id=token_id)

    def burn(self, token_id: int) -> None:
        with self._lock:
            if token_id not in self._owners:
                raise KeyError(f"Token {token_id} does not exist")
            del self._owners[token_id]

    def owner_of(self, token_id: int) -> Optional[str]:
        return self._owners.get(token_id)

    def balance_of(self, holder: str) -> int:
        with self._lock:
            return sum(1 for owner in self._owners.values() if owner == holder)

    def owns_eligible_token(self, identity: str) -> bool:
        return self.balance_of(identity) > 0

    def enumerate_holders(self) -> list[TokenHolding]:
        with self._lock:
            return [
                TokenHolding(holder=holder, token_id=token_id)
                for token_id, holder in self._owners.items()
            ]
