"""
Fetch packages and their versions for a repository.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from .exceptions import QueryError
from .interfaces import QueryExecutor
from .models import PackageNode, RegistrySnapshot, VersionNode
from .time_utils import parse_timestamp


logger = logging.getLogger(__name__)

# Only the first page of packages and of versions is read.
PAGE_SIZE = 100

FETCH_PACKAGE_VERSIONS_QUERY = """
query fetchPackageVersions($owner: String!, $repo: String!) {
  repository(owner: $owner, name: $repo) {
    packages(first: %(page)d) {
      totalCount
      nodes {
        id
        name
        versions(first: %(page)d, orderBy: {field: CREATED_AT, direction: ASC}) {
          totalCount
          nodes {
            id
            version
            package {
              packageType
            }
            files(first: 1) {
              nodes {
                updatedAt
              }
            }
            statistics {
              downloadsTotalCount
            }
          }
        }
      }
    }
  }
}
""" % {"page": PAGE_SIZE}


def fetch_package_versions(
    executor: QueryExecutor, owner: str, repo: str
) -> RegistrySnapshot:
    """Fetch every package of a repository with its versions, oldest first.

    Args:
        executor: Query executor used to reach the registry
        owner: Repository owner
        repo: Repository name

    Returns:
        Snapshot of the packages and versions

    Raises:
        TransportError: If the request fails
        QueryError: If the response has no repository data
    """
    logger.debug("Fetching package versions for %s/%s", owner, repo)
    response = executor.execute(
        FETCH_PACKAGE_VERSIONS_QUERY, {"owner": owner, "repo": repo}
    )
    return parse_package_versions(response, owner, repo)


def parse_package_versions(
    response: Dict[str, Any], owner: str = "", repo: str = ""
) -> RegistrySnapshot:
    """Convert a fetch query response into a RegistrySnapshot."""
    repository = (response.get("data") or {}).get("repository")
    if repository is None:
        raise QueryError(
            f"Unable to fetch packages for {owner}/{repo}",
            _error_messages(response),
        )

    packages_conn = repository.get("packages") or {}
    package_nodes = packages_conn.get("nodes") or []
    total_packages = packages_conn.get("totalCount") or len(package_nodes)
    if total_packages > len(package_nodes):
        logger.warning(
            "Repository has %d packages, only the first %d are processed",
            total_packages,
            len(package_nodes),
        )

    packages = tuple(_parse_package(node) for node in package_nodes)
    logger.debug(
        "Fetched %d packages with %d versions",
        len(packages),
        sum(len(p.versions) for p in packages),
    )
    return RegistrySnapshot(packages=packages, total_packages=total_packages)


def _parse_package(node: Dict[str, Any]) -> PackageNode:
    versions_conn = node.get("versions") or {}
    version_nodes = versions_conn.get("nodes") or []
    total_versions = versions_conn.get("totalCount") or len(version_nodes)
    if total_versions > len(version_nodes):
        logger.warning(
            "Package %s has %d versions, only the oldest %d are processed",
            node.get("name"),
            total_versions,
            len(version_nodes),
        )
    return PackageNode(
        id=node["id"],
        name=node["name"],
        versions=tuple(_parse_version(v) for v in version_nodes),
        total_versions=total_versions,
    )


def _parse_version(node: Dict[str, Any]) -> VersionNode:
    files = (node.get("files") or {}).get("nodes") or []
    raw_updated_at = files[0].get("updatedAt") if files else None
    updated_at = parse_timestamp(raw_updated_at)
    if raw_updated_at and updated_at is None:
        logger.warning(
            "Version %s has an unparsable file timestamp %r, it will not be deleted",
            node.get("id"),
            raw_updated_at,
        )
    statistics = node.get("statistics") or {}
    return VersionNode(
        id=node["id"],
        version=node.get("version") or "",
        package_type=(node.get("package") or {}).get("packageType") or "",
        last_file_updated_at=updated_at,
        downloads_total_count=int(statistics.get("downloadsTotalCount") or 0),
    )


def _error_messages(response: Dict[str, Any]) -> List[str]:
    return [
        e.get("message", "")
        for e in response.get("errors") or []
        if isinstance(e, dict)
    ]
