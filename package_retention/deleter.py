"""
Batched deletion of package versions and reconciliation of the results.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .interfaces import QueryExecutor
from .models import DeletionOutcome, PackageNode, VersionNode


logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Failed"


def build_delete_mutation(version_ids: Iterable[str]) -> Tuple[str, Dict[str, str]]:
    """Build one mutation deleting all given versions.

    Each sub-operation is aliased ``v0``, ``v1``, ... so that ids never have
    to be valid GraphQL names.

    Returns:
        Tuple of (mutation text, alias -> version id)
    """
    alias_map: Dict[str, str] = {}
    operations = []
    for index, version_id in enumerate(version_ids):
        alias = f"v{index}"
        alias_map[alias] = version_id
        operations.append(
            f"  {alias}: deletePackageVersion(input: {{packageVersionId: "
            f"{json.dumps(version_id)}}}) {{ success }}"
        )
    query = "mutation deletePackageVersions {\n%s\n}\n" % "\n".join(operations)
    return query, alias_map


def _error_path_head(error: Mapping[str, Any]) -> Optional[str]:
    path = error.get("path") or []
    return str(path[0]) if path else None


def reconcile(
    response: Mapping[str, Any],
    alias_map: Mapping[str, str],
    versions: Optional[Mapping[str, VersionNode]] = None,
) -> List[DeletionOutcome]:
    """Turn a mutation response into one outcome per deleted version.

    A sub-operation that did not report success is matched to the first
    error whose path starts with its alias; "Failed" is used otherwise.

    Args:
        response: Decoded mutation response
        alias_map: Alias -> version id, as built by build_delete_mutation
        versions: Version id -> VersionNode, used for display names

    Returns:
        Outcomes in alias order
    """
    data = response.get("data") or {}
    errors = [e for e in response.get("errors") or [] if isinstance(e, Mapping)]
    versions = versions or {}

    outcomes = []
    for alias, version_id in alias_map.items():
        node = versions.get(version_id)
        display = node.version if node is not None else ""
        result = data.get(alias)
        if result and result.get("success"):
            outcomes.append(DeletionOutcome(version_id, display, True))
            continue

        related = next((e for e in errors if _error_path_head(e) == alias), None)
        message = related.get("message") if related else None
        outcomes.append(
            DeletionOutcome(version_id, display, False, message or DEFAULT_FAILURE_MESSAGE)
        )
    return outcomes


def delete_package_versions(
    executor: QueryExecutor, package: PackageNode
) -> List[DeletionOutcome]:
    """Delete every version held by ``package`` in a single mutation.

    No request is made when the package holds no versions. Transport
    failures propagate to the caller.
    """
    if not package.versions:
        return []

    versions = {v.id: v for v in package.versions}
    query, alias_map = build_delete_mutation(list(versions))
    logger.debug("Deleting %d versions of %s", len(alias_map), package.name)
    response = executor.execute(query)
    return reconcile(response, alias_map, versions)
