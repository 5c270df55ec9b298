import pytest

from package_retention import cli
from package_retention.models import PackageNode, PackageReport


class FakeEnforcer:
    runs = []

    def __init__(self, executor, settings):
        self.executor = executor
        self.settings = settings

    def run(self):
        FakeEnforcer.runs.append(self.settings)
        return [PackageReport(package=PackageNode(id="P1", name="app"))]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("INPUT_TOKEN", "INPUT_OWNER", "INPUT_REPO", "INPUT_MINAGE", "GITHUB_ACTIONS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GITHUB_REPOSITORY", "octo/demo")
    FakeEnforcer.runs = []


def test_missing_token_exits_before_any_request(monkeypatch, capsys):
    monkeypatch.setattr(cli, "RetentionEnforcer", FakeEnforcer)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--min-age", "30d"])

    assert excinfo.value.code == 1
    assert FakeEnforcer.runs == []
    assert 'Input "token" not set' in capsys.readouterr().err


def test_failure_is_annotated_inside_actions(monkeypatch, capsys):
    monkeypatch.setenv("GITHUB_ACTIONS", "true")

    with pytest.raises(SystemExit):
        cli.main(["--token", "tok"])

    assert capsys.readouterr().out.startswith("::error::Input required and not supplied: minAge")


def test_main_runs_enforcer_and_exports(monkeypatch, tmp_path):
    monkeypatch.setattr(cli, "RetentionEnforcer", FakeEnforcer)

    cli.main([
        "--token", "tok",
        "--min-age", "30d",
        "--package-type", "npm",
        "--max-downloads", "3",
        "--output-dir", str(tmp_path),
    ])

    settings = FakeEnforcer.runs[0]
    assert (settings.owner, settings.repo) == ("octo", "demo")
    assert settings.package_type == "NPM"
    assert settings.max_downloads == 3
    assert (tmp_path / "octo_demo_results.json").exists()
    assert (tmp_path / "octo_demo_deletions.csv").exists()


def test_multiline_failure_is_escaped_in_annotation(monkeypatch, capsys):
    monkeypatch.setenv("GITHUB_ACTIONS", "true")

    cli.report_failure("100% failed\r\nsecond line")

    out = capsys.readouterr().out
    assert out == "::error::100%25 failed%0D%0Asecond line\n"
