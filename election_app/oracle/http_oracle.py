"""HTTP JSON eligibility oracle."""

import json
import socket
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlparse
from urllib.request import Request, urlopen

import structlog

from ..config.defaults import OracleSettings
from ..errors import OracleUnavailable
from ..state.models import TokenHolding
from .base import EligibilityOracle

logger = structlog.get_logger(__name__)


class HttpEligibilityOracle(EligibilityOracle):
    """
    Oracle backed by a token indexer exposing two JSON endpoints.

    ``GET {base_url}/holders/{identity}`` returns ``{"balance": <int>}``
    and ``GET {base_url}/holders`` returns a list of
    ``{"holder": <str>, "token_id": <int>}`` objects in mint order.
    """

    name = "http"

    def __init__(self, config: OracleSettings):
        self.config = config
        self.logger = logger

        parsed = urlparse(config.base_url or "")
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid oracle URL: {config.base_url}")

        self.base_url = config.base_url.rstrip("/")

    def owns_eligible_token(self, identity: str) -> bool:
        url = f"{self.base_url}/holders/{quote(identity, safe='')}"
        payload = self._get_json(url, query="owns_eligible_token", missing_ok=True)

        if payload is None:
            return False

        balance = payload.get("balance") if isinstance(payload, dict) else None
        if isinstance(balance, bool) or not isinstance(balance, int) or balance < 0:
            raise OracleUnavailable(
                f"Malformed balance response for {identity}",
                oracle=self.name,
                query="owns_eligible_token",
                context={"payload": payload}
            )

        return balance > 0

    def enumerate_holders(self) -> list[TokenHolding]:
        payload = self._get_json(f"{self.base_url}/holders", query="enumerate_holders")

        if not isinstance(payload, list):
            raise OracleUnavailable(
                "Malformed holders response",
                oracle=self.name,
                query="enumerate_holders",
                context={"payload": payload}
            )

        try:
            return [
                TokenHolding(holder=str(item["holder"]), token_id=int(item["token_id"]))
                for item in payload
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise OracleUnavailable(
                f"Malformed holder entry: {e}",
                oracle=self.name,
                query="enumerate_holders"
            ) from e

    def _get_json(self, url: str, query: str, missing_ok: bool = False) -> Any:
        """GET ``url`` and decode JSON; None on 404 when ``missing_ok``."""
        headers = {
            'Accept': 'application/json',
            'User-Agent': self.config.user_agent
        }
        if self.config.headers:
            headers.update(self.config.headers)

        req = Request(url, headers=headers, method='GET')

        try:
            with urlopen(req, timeout=self.config.timeout_seconds) as response:
                body = response.read().decode('utf-8')
            return json.loads(body)

        except HTTPError as e:
            if e.code == 404 and missing_ok:
                return None

            self.logger.warning(
                "Oracle HTTP error",
                url=url,
                query=query,
                error_code=e.code,
                error_reason=e.reason
            )
            raise OracleUnavailable(
                f"HTTP {e.code}: {e.reason}",
                oracle=self.name,
                query=query
            ) from e

        except (OSError, URLError, socket.timeout) as e:
            self.logger.warning(
                "Oracle network error",
                url=url,
                query=query,
                error=str(e)
            )
            raise OracleUnavailable(
                f"Network error: {e}",
                oracle=self.name,
                query=query
            ) from e

        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self.logger.warning(
                "Oracle returned invalid JSON",
                url=url,
                query=query,
                error=str(e)
            )
            raise OracleUnavailable(
                f"Invalid JSON from oracle: {e}",
                oracle=self.name,
                query=query
            ) from e
