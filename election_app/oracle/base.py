"""Base class for eligibility oracles."""

from abc import ABC, abstractmethod

from ..state.models import TokenHolding


class EligibilityOracle(ABC):
    """
    Read-only view of token ownership.

    Implementations may reflect ownership that changes between calls and
    must raise OracleUnavailable when they cannot answer, never report
    "not eligible" for a failed lookup.
    """

    name = "oracle"

    @abstractmethod
    def owns_eligible_token(self, identity: str) -> bool:
        """
        Check whether ``identity`` currently holds at least one eligible token.

        Args:
            identity: Holder identity to check

        Returns:
            True if the identity holds one or more eligible tokens
        """
        pass

    @abstractmethod
    def enumerate_holders(self) -> list[TokenHolding]:
        """
        List every current (holder, token) pair.

        Returns:
            Holdings in the oracle's own enumeration order (mint order
            for token registries)
        """
        pass
