"""
Run settings and GitHub Actions input handling.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping, Optional, Tuple

from .exceptions import ConfigurationError
from .time_utils import parse_duration


logger = logging.getLogger(__name__)

DEFAULT_PACKAGE_TYPE = "DOCKER"
_LEADING_INT_RE = re.compile(r"\s*[-+]?\d+")


@dataclass(frozen=True)
class ActionSettings:
    """Retention thresholds for a single run."""

    owner: str
    repo: str
    min_age: timedelta
    package_type: str = DEFAULT_PACKAGE_TYPE
    max_downloads: int = 0
    dry_run: bool = False

    def __post_init__(self) -> None:
        # Frozen dataclass: normalise through object.__setattr__.
        object.__setattr__(self, "package_type", self.package_type.upper())

    @property
    def min_age_ms(self) -> int:
        return int(self.min_age.total_seconds() * 1000)


def get_input(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Read an Action input the way the runner exposes it (``INPUT_<NAME>``)."""
    env = os.environ if environ is None else environ
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return env.get(key, "").strip()


def parse_max_downloads(value: Optional[str]) -> int:
    """Parse the leading integer of the download threshold.

    ``"5.0"`` and ``"5abc"`` read as 5; anything without a leading integer
    falls back to 0.
    """
    match = _LEADING_INT_RE.match(value or "")
    if match is None:
        if value:
            logger.warning("Invalid maxDownloads %r, using 0", value)
        return 0
    return int(match.group(0))


def parse_min_age(value: Optional[str]) -> timedelta:
    if not value:
        raise ConfigurationError("Input required and not supplied: minAge")
    min_age = parse_duration(value)
    if min_age is None:
        raise ConfigurationError(f"Invalid minAge duration: {value!r}")
    return min_age


def split_repository(value: Optional[str]) -> Tuple[str, str]:
    """Split ``owner/name`` as found in ``GITHUB_REPOSITORY``."""
    if not value or "/" not in value:
        return "", ""
    owner, _, name = value.partition("/")
    return owner, name


def build_settings(
    owner: Optional[str],
    repo: Optional[str],
    min_age: Optional[str],
    package_type: Optional[str] = None,
    max_downloads: Optional[str] = None,
    dry_run: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> ActionSettings:
    """Build ActionSettings from raw input strings.

    Args:
        owner: Repository owner; defaults to the owner in GITHUB_REPOSITORY
        repo: Repository name; defaults to the name in GITHUB_REPOSITORY
        min_age: Duration string such as ``30d``
        package_type: Package type, case-insensitive (default docker)
        max_downloads: Highest download count still eligible for deletion
        dry_run: Report eligible versions without deleting them
        environ: Environment to read fallbacks from (default os.environ)

    Returns:
        Settings for the run

    Raises:
        ConfigurationError: If owner, repo or min age are missing or invalid
    """
    env = os.environ if environ is None else environ
    default_owner, default_repo = split_repository(env.get("GITHUB_REPOSITORY"))
    owner = owner or default_owner
    repo = repo or default_repo
    if not owner or not repo:
        raise ConfigurationError(
            "Repository not set. Pass --owner and --repo or set GITHUB_REPOSITORY."
        )

    return ActionSettings(
        owner=owner,
        repo=repo,
        min_age=parse_min_age(min_age),
        package_type=package_type or DEFAULT_PACKAGE_TYPE,
        max_downloads=parse_max_downloads(max_downloads),
        dry_run=dry_run,
    )


def require_token(token: Optional[str]) -> str:
    if not token:
        raise ConfigurationError(
            'Input "token" not set. Is this running in a "GitHub Actions" environment?'
        )
    return token
