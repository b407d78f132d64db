import json
from pathlib import Path

import pytest

from aver import cli
from aver.errors import GitHubAPIError, ProjectRootNotFound


WORKFLOW = """\
jobs:
  build:
    steps:
      - uses: actions/checkout@v3
      - uses: actions/setup-go@v5
"""


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    workflows = tmp_path / ".github" / "workflows"
    workflows.mkdir(parents=True)
    (workflows / "ci.yml").write_text(WORKFLOW, encoding="utf-8")
    monkeypatch.delenv("AVER_TIMEOUT", raising=False)
    return tmp_path


@pytest.fixture
def use_host(monkeypatch):
    captured = {}

    def install(host):
        def fake_client(settings):
            captured["settings"] = settings
            return host
        monkeypatch.setattr(cli, "GitHubClient", fake_client)
        return captured

    return install


def test_outdated_exit_status_and_table(project, use_host, make_host, capsys):
    use_host(make_host(tags={
        "actions/checkout": ["v4", "v3"],
        "actions/setup-go": ["v5"],
    }))

    status = cli.run([str(project), "--no-progress"])

    out = capsys.readouterr().out
    assert status == cli.EXIT_OUTDATED
    assert "Outdated actions:" in out
    assert "actions/checkout" in out
    assert "actions/setup-go" not in out


def test_up_to_date_prints_nothing(project, use_host, make_host, capsys):
    use_host(make_host(tags={"actions/checkout": ["v3"], "actions/setup-go": ["v5"]}))

    status = cli.run([str(project)])

    assert status == cli.EXIT_UP_TO_DATE
    assert capsys.readouterr().out == ""


def test_json_output(project, use_host, make_host, capsys):
    use_host(make_host(tags={"actions/checkout": ["v3"], "actions/setup-go": ["v5"]}))

    status = cli.run([str(project), "--json"])

    assert status == cli.EXIT_UP_TO_DATE
    assert json.loads(capsys.readouterr().out) == {"outdated": [], "sha_pinned": []}


def test_warnings_go_to_stderr(project, use_host, make_host, capsys):
    use_host(make_host(tags={"actions/checkout": ["v3"]}, inaccessible={"actions/setup-go": 404}))

    status = cli.run([str(project)])

    err = capsys.readouterr().err
    assert status == cli.EXIT_UP_TO_DATE
    assert "warning: skipping actions/setup-go: repository not accessible" in err


def test_fatal_error_exit_status(project, use_host, make_host, capsys):
    use_host(make_host(failures={"actions/checkout": GitHubAPIError("GitHub API returned status 502")}))

    status = cli.run([str(project)])

    captured = capsys.readouterr()
    assert status == cli.EXIT_ERROR
    assert "error: failed to check actions/checkout" in captured.err
    assert captured.out == ""


def test_token_flag_overrides_environment(project, use_host, make_host, monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "from-env")
    captured = use_host(make_host(tags={"actions/checkout": ["v3"], "actions/setup-go": ["v5"]}))

    cli.run([str(project), "--token", "from-flag"])

    assert captured["settings"].token == "from-flag"


def test_major_only_flag(project, use_host, make_host):
    use_host(make_host(tags={"actions/checkout": ["v3", "v4.0.0"], "actions/setup-go": ["v5"]}))

    assert cli.run([str(project), "--major-only"]) == cli.EXIT_UP_TO_DATE
    assert cli.run([str(project)]) == cli.EXIT_OUTDATED


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.run(["--version"])

    assert excinfo.value.code == 0
    assert "aver version 0.1.0" in capsys.readouterr().out


def test_missing_project_root(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli, "find_action_references", _raise_not_found)

    assert cli.run([str(tmp_path)]) == cli.EXIT_ERROR
    assert "could not find project root" in capsys.readouterr().err


def _raise_not_found(path):
    raise ProjectRootNotFound(f"could not find project root above {path}")


def test_undecodable_workflow_exit_status(tmp_path, capsys):
    workflows = tmp_path / ".github" / "workflows"
    workflows.mkdir(parents=True)
    (workflows / "ci.yml").write_bytes(b"jobs:\n  build:\n    steps: []\n\xff\xfe\x00\n")

    assert cli.run([str(tmp_path), "--no-progress"]) == cli.EXIT_ERROR
    assert "ci.yml" in capsys.readouterr().err


def test_missing_path_is_usage_error(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.run([str(tmp_path / "help")])

    assert excinfo.value.code == 2
    assert "not a directory" in capsys.readouterr().err
