"""
Core data models for the retention enforcer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple


class PackageType(str, Enum):
    """Package types known to the GitHub Packages registry."""

    NPM = "NPM"
    MAVEN = "MAVEN"
    RUBYGEMS = "RUBYGEMS"
    DOCKER = "DOCKER"
    DEBIAN = "DEBIAN"
    NUGET = "NUGET"
    PYPI = "PYPI"


@dataclass(frozen=True)
class VersionNode:
    """A published package version as returned by the registry."""

    id: str
    version: str
    package_type: str
    last_file_updated_at: Optional[datetime]
    downloads_total_count: int


@dataclass(frozen=True)
class PackageNode:
    """A registry package with the versions fetched for it."""

    id: str
    name: str
    versions: Tuple[VersionNode, ...] = ()
    total_versions: int = 0

    def with_versions(self, versions) -> PackageNode:
        return replace(self, versions=tuple(versions))


@dataclass(frozen=True)
class RegistrySnapshot:
    """Packages fetched for one repository, with the registry-reported total."""

    packages: Tuple[PackageNode, ...]
    total_packages: int


@dataclass(frozen=True)
class DeletionOutcome:
    """Result of deleting a single package version."""

    version_id: str
    version: str
    success: bool
    message: Optional[str] = None


@dataclass
class PackageReport:
    """Outcomes recorded for one package during a run."""

    package: PackageNode
    outcomes: List[DeletionOutcome] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return not self.package.versions

    @property
    def failed(self) -> List[DeletionOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]
