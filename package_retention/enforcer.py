"""
Retention enforcer: fetch, filter and delete package versions.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from .config import ActionSettings
from .deleter import delete_package_versions
from .fetcher import fetch_package_versions
from .filters import filter_versions
from .interfaces import QueryExecutor
from .models import PackageReport
from .reporting import log_package_header, log_package_outcomes


logger = logging.getLogger(__name__)


class RetentionEnforcer:
    """Apply a retention policy to the packages of one repository."""

    def __init__(self, executor: QueryExecutor, settings: ActionSettings):
        """Initialize the enforcer.

        Args:
            executor: Query executor used for all registry requests
            settings: Retention thresholds for the run
        """
        self.executor = executor
        self.settings = settings

    def run(self, now: Optional[datetime] = None) -> List[PackageReport]:
        """Run the retention policy.

        Packages are processed one at a time in fetched order. The first
        transport failure aborts the run; per-version deletion failures are
        recorded in the reports.

        Args:
            now: Reference time for the age threshold (default: now)

        Returns:
            One report per fetched package
        """
        settings = self.settings
        logger.debug(
            "Enforcing retention on %s/%s: type=%s min_age=%s max_downloads=%d",
            settings.owner,
            settings.repo,
            settings.package_type,
            settings.min_age,
            settings.max_downloads,
        )

        snapshot = fetch_package_versions(self.executor, settings.owner, settings.repo)
        packages = filter_versions(snapshot.packages, settings, now)

        reports = []
        for package in packages:
            report = PackageReport(package=package)
            log_package_header(report)
            if package.versions and not settings.dry_run:
                report.outcomes = delete_package_versions(self.executor, package)
            log_package_outcomes(report, dry_run=settings.dry_run)
            reports.append(report)
        return reports
