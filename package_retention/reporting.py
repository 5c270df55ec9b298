"""
Outcome reporting and export utilities.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List

import pandas as pd

from .config import ActionSettings
from .models import PackageReport


logger = logging.getLogger(__name__)

OUTCOME_COLUMNS = [
    "package",
    "version_id",
    "version",
    "success",
    "message",
]


def log_package_header(report: PackageReport) -> None:
    logger.info("Package: %s", report.package.name)


def log_package_outcomes(report: PackageReport, dry_run: bool = False) -> None:
    """Write the outcome lines of one package, then a blank separator."""
    if report.skipped:
        logger.info("-> No versions found that match deletion criteria")
    elif dry_run:
        for version in report.package.versions:
            logger.info("-> Would delete %s (%s)", version.id, version.version)
    else:
        for outcome in report.outcomes:
            if outcome.success:
                logger.info("✅ %s (%s)", outcome.version_id, outcome.version)
            else:
                logger.error(
                    "❌ %s (%s): %s",
                    outcome.version_id,
                    outcome.version,
                    outcome.message,
                )

    logger.info("")


def log_package_report(report: PackageReport, dry_run: bool = False) -> None:
    """Write the full report of one package to the log."""
    log_package_header(report)
    log_package_outcomes(report, dry_run=dry_run)


def summarize(reports: Iterable[PackageReport], settings: ActionSettings) -> Dict:
    """Collect run totals into a JSON-serialisable dictionary."""
    reports = list(reports)
    outcomes = [o for r in reports for o in r.outcomes]
    return {
        "owner": settings.owner,
        "repo": settings.repo,
        "package_type": settings.package_type,
        "min_age_ms": settings.min_age_ms,
        "max_downloads": settings.max_downloads,
        "dry_run": settings.dry_run,
        "num_packages": len(reports),
        "num_eligible": sum(len(r.package.versions) for r in reports),
        "num_deleted": sum(1 for o in outcomes if o.success),
        "num_failed": sum(1 for o in outcomes if not o.success),
    }


def outcomes_frame(reports: Iterable[PackageReport]) -> pd.DataFrame:
    rows: List[Dict] = []
    for report in reports:
        for outcome in report.outcomes:
            rows.append({
                "package": report.package.name,
                "version_id": outcome.version_id,
                "version": outcome.version,
                "success": outcome.success,
                "message": outcome.message,
            })
    return pd.DataFrame(rows, columns=OUTCOME_COLUMNS)


def save_results_json(summary: Dict, output_dir: Path, prefix: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    results_file = output_dir / f"{prefix}_results.json"
    with open(results_file, 'w') as f:
        json.dump(summary, f, indent=2, default=str)
    return results_file


def export_outcomes_csv(
    reports: Iterable[PackageReport], output_dir: Path, prefix: str
) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    outcomes_file = output_dir / f"{prefix}_deletions.csv"
    outcomes_frame(reports).to_csv(outcomes_file, index=False)
    return outcomes_file
