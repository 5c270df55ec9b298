"""Tests for the version filter pipeline."""

from datetime import timedelta

from package_retention.fetcher import parse_package_versions
from package_retention.filters import (
    age_matches,
    downloads_match,
    filter_versions,
    is_eligible,
    type_matches,
)
from package_retention.models import PackageNode, VersionNode

from conftest import NOW, fetch_response, version_node


def _version(id="V1", package_type="DOCKER", downloads=0, days_ago=40):
    updated = NOW - timedelta(days=days_ago) if days_ago is not None else None
    return VersionNode(
        id=id,
        version="1.0.0",
        package_type=package_type,
        last_file_updated_at=updated,
        downloads_total_count=downloads,
    )


def test_scenario_excludes_recent_version_by_age(settings):
    snapshot = parse_package_versions(fetch_response(
        ("app", [
            version_node("A", downloads=2, updated_days_ago=40),
            version_node("B", downloads=2, updated_days_ago=5),
        ]),
    ))

    filtered = filter_versions(snapshot.packages, settings, now=NOW)

    assert [v.id for v in filtered[0].versions] == ["A"]
    version_b = snapshot.packages[0].versions[1]
    assert type_matches(version_b, settings)
    assert downloads_match(version_b, settings)
    assert not age_matches(version_b, settings, NOW)


def test_other_package_type_is_excluded(settings):
    version = _version(package_type="NPM", downloads=0, days_ago=400)

    assert downloads_match(version, settings)
    assert age_matches(version, settings, NOW)
    assert not is_eligible(version, settings, NOW)


def test_version_without_files_is_never_eligible(settings):
    version = _version(downloads=0, days_ago=None)

    assert not age_matches(version, settings, NOW)
    assert not is_eligible(version, settings, NOW)


def test_downloads_threshold_is_inclusive(settings):
    assert is_eligible(_version(downloads=5), settings, NOW)
    assert not is_eligible(_version(downloads=6), settings, NOW)


def test_age_threshold_is_inclusive(settings):
    assert is_eligible(_version(days_ago=30), settings, NOW)
    assert not is_eligible(_version(days_ago=29), settings, NOW)


def test_eligibility_is_conjunction_of_predicates(settings):
    cases = [
        (t, d, a, _version(id=f"{t}-{d}-{a}", package_type=t, downloads=d, days_ago=a))
        for t in ("DOCKER", "NPM")
        for d in (0, 5, 6)
        for a in (None, 10, 30, 90)
    ]
    versions = [v for _, _, _, v in cases]

    for t, d, a, v in cases:
        expected = t == "DOCKER" and d <= 5 and a is not None and a >= 30
        assert is_eligible(v, settings, NOW) == expected, v.id

    eligible = filter_versions(
        [PackageNode(id="P1", name="app", versions=tuple(versions))], settings, now=NOW
    )[0].versions
    assert sorted(v.id for v in eligible) == [
        "DOCKER-0-30", "DOCKER-0-90", "DOCKER-5-30", "DOCKER-5-90",
    ]


def test_packages_without_matches_are_kept(settings):
    packages = [
        PackageNode(id="P1", name="empty", versions=(_version(days_ago=1),)),
        PackageNode(id="P2", name="old", versions=(_version(id="V2"),)),
    ]

    filtered = filter_versions(packages, settings, now=NOW)

    assert [p.name for p in filtered] == ["empty", "old"]
    assert filtered[0].versions == ()
    assert [v.id for v in filtered[1].versions] == ["V2"]


def test_filter_is_idempotent(settings):
    packages = [
        PackageNode(
            id="P1",
            name="app",
            versions=(_version(id="V1"), _version(id="V2", downloads=9)),
        ),
    ]

    first = filter_versions(packages, settings, now=NOW)
    second = filter_versions(packages, settings, now=NOW)

    assert first == second
    assert filter_versions(first, settings, now=NOW) == first
    assert len(packages[0].versions) == 2
