"""
Select package versions eligible for deletion.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from .config import ActionSettings
from .models import PackageNode, VersionNode
from .time_utils import ensure_utc, utc_now


def type_matches(version: VersionNode, settings: ActionSettings) -> bool:
    return version.package_type == settings.package_type.upper()


def downloads_match(version: VersionNode, settings: ActionSettings) -> bool:
    return version.downloads_total_count <= settings.max_downloads


def age_matches(version: VersionNode, settings: ActionSettings, now: datetime) -> bool:
    """True if the version's newest file is at least ``min_age`` old.

    Versions without files are never old enough.
    """
    if version.last_file_updated_at is None:
        return False
    before_date = ensure_utc(now) - settings.min_age
    return version.last_file_updated_at <= before_date


def is_eligible(version: VersionNode, settings: ActionSettings, now: datetime) -> bool:
    return (
        type_matches(version, settings)
        and downloads_match(version, settings)
        and age_matches(version, settings, now)
    )


def filter_versions(
    packages: Iterable[PackageNode],
    settings: ActionSettings,
    now: Optional[datetime] = None,
) -> List[PackageNode]:
    """Narrow each package's versions to those eligible for deletion.

    Packages with no eligible versions are kept with an empty version list.

    Args:
        packages: Packages as fetched from the registry
        settings: Retention thresholds
        now: Reference time (default: current UTC time)

    Returns:
        The packages, in the same order, holding only eligible versions
    """
    now = now or utc_now()
    return [
        package.with_versions(
            v for v in package.versions if is_eligible(v, settings, now)
        )
        for package in packages
    ]
