"""
GraphQL client for the GitHub Packages API.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .exceptions import TransportError


logger = logging.getLogger(__name__)


class GraphQLClient:
    """Send authenticated GraphQL requests with the packages preview headers."""

    GRAPHQL_URL = "https://api.github.com/graphql"
    PREVIEW_ACCEPT = (
        "application/vnd.github.packages-preview+json,"
        "application/vnd.github.package-deletes-preview+json"
    )

    def __init__(
        self,
        token: str,
        url: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            token: GitHub token sent as a bearer token
            url: GraphQL endpoint (default: api.github.com)
            timeout: Request timeout in seconds
            session: Session to reuse; a new one is created if omitted
        """
        self.url = url or self.GRAPHQL_URL
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Accept": self.PREVIEW_ACCEPT,
        })

    def __enter__(self) -> GraphQLClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def execute(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Execute a query or mutation and return the decoded response body.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            The JSON response, including its ``data`` and ``errors`` sections

        Raises:
            TransportError: On network failure, non-2xx status or a body
                that is not a JSON object
        """
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        logger.debug("POST %s", self.url)
        try:
            with self.session.post(self.url, json=payload, timeout=self.timeout) as response:
                response.raise_for_status()
                body = response.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise TransportError(f"GraphQL request failed: {e}", status_code=status) from e
        except ValueError as e:
            raise TransportError(f"GraphQL response is not valid JSON: {e}") from e
        except requests.RequestException as e:
            raise TransportError(f"GraphQL request failed: {e}") from e

        if not isinstance(body, dict):
            raise TransportError("GraphQL response is not a JSON object")
        return body
