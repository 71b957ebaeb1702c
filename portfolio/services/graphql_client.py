import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from portfolio.errors import ConfigurationMissing, UpstreamError
from portfolio.settings import Settings

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


class GraphQLClient:
    """Server-side client for the upstream GraphQL API.

    The API key never leaves the server: it is injected here on every
    outbound request, both for proxied browser requests and for the
    content repository's own queries.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        *,
        http_client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.http = http_client or httpx.Client(timeout=timeout)

    @classmethod
    def from_settings(cls, settings_obj: Settings) -> "GraphQLClient":
        return cls(
            settings_obj.GRAPHQL_API_URL,
            settings_obj.GRAPHQL_API_KEY,
            timeout=settings_obj.GRAPHQL_TIMEOUT,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_url and self.api_key)

    def forward(self, payload: Dict[str, Any]) -> Tuple[int, Any]:
        """POST ``payload`` upstream and return the status and decoded JSON as-is."""
        if not self.is_configured:
            raise ConfigurationMissing()

        response = self.http.post(
            self.api_url,
            json=payload,
            headers={"Content-Type": "application/json", API_KEY_HEADER: self.api_key},
        )
        return response.status_code, response.json()

    def execute(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Run an operation and return its ``data``, raising on any failure."""
        if not self.is_configured:
            logger.error("GraphQL configuration missing (GRAPHQL_API_URL or GRAPHQL_API_KEY)")
            raise ConfigurationMissing()

        try:
            status, result = self.forward({"query": query, "variables": variables or {}})
        except httpx.HTTPError as e:
            logger.error(f"GraphQL transport error: {e}")
            raise UpstreamError(f"Failed to reach GraphQL API: {e}") from e
        except ValueError as e:
            logger.error(f"GraphQL API returned invalid JSON: {e}")
            raise UpstreamError("GraphQL API returned invalid JSON") from e

        if status < 200 or status >= 300:
            logger.error(f"GraphQL API error response ({status}): {result}")
            raise UpstreamError(f"GraphQL API responded with status {status}")

        errors = result.get("errors") if isinstance(result, dict) else None
        if errors:
            logger.error(f"GraphQL errors: {errors}")
            raise UpstreamError("GraphQL operation failed", errors=errors)

        data = result.get("data") if isinstance(result, dict) else None
        return data or {}

    def close(self) -> None:
        self.http.close()
