"""
Interfaces for registry API access.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class QueryExecutor(Protocol):
    """Execute a GraphQL query or mutation against the registry."""

    def execute(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        ...
