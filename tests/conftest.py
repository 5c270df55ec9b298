from datetime import datetime, timedelta, timezone

import pytest

from package_retention.config import ActionSettings


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeExecutor:
    """Query executor returning canned responses in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def execute(self, query, variables=None):
        self.calls.append((query, variables))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def version_node(
    id, version="1.0.0", package_type="DOCKER", downloads=0, updated_days_ago=None
):
    files = []
    if updated_days_ago is not None:
        updated = NOW - timedelta(days=updated_days_ago)
        files.append({"updatedAt": updated.strftime("%Y-%m-%dT%H:%M:%SZ")})
    return {
        "id": id,
        "version": version,
        "package": {"packageType": package_type},
        "files": {"nodes": files},
        "statistics": {"downloadsTotalCount": downloads},
    }


def fetch_response(*packages, total_count=None):
    nodes = [
        {
            "id": f"P_{name}",
            "name": name,
            "versions": {"totalCount": len(versions), "nodes": list(versions)},
        }
        for name, versions in packages
    ]
    return {
        "data": {
            "repository": {
                "packages": {
                    "totalCount": len(nodes) if total_count is None else total_count,
                    "nodes": nodes,
                }
            }
        }
    }


@pytest.fixture
def settings():
    return ActionSettings(
        owner="octo",
        repo="demo",
        min_age=timedelta(days=30),
        package_type="docker",
        max_downloads=5,
    )
