"""Tests for the root git-next command."""

import json

import pytest
from typer.testing import CliRunner

from git_next import __version__
from git_next.cli import app
from git_next.exceptions import NotAGitRepositoryError
from git_next.snapshot.models import Snapshot

runner = CliRunner()


@pytest.fixture
def use_snapshot(monkeypatch):
    """Replace repository inspection with a fixed snapshot."""

    def _use(snapshot=None, error=None):
        class FakeCollector:
            def __init__(self, repo_path, config):
                self.repo_path = repo_path
                self.config = config

            def collect(self):
                if error is not None:
                    raise error
                return snapshot

        monkeypatch.setattr("git_next.cli.main.SnapshotCollector", FakeCollector)

    return _use


class TestMainCommand:
    def test_clean_repository(self, tmp_path, use_snapshot):
        use_snapshot(Snapshot())
        result = runner.invoke(app, ["-C", str(tmp_path)])
        assert result.exit_code == 0
        assert "Repository is clean" in result.output

    def test_active_advice_exits_1(self, tmp_path, use_snapshot):
        use_snapshot(Snapshot(ahead=1))
        result = runner.invoke(app, ["-C", str(tmp_path)])
        assert result.exit_code == 1
        assert "[R004]" in result.output
        assert "git push" in result.output

    def test_suppressed_hidden_unless_all(self, tmp_path, use_snapshot):
        use_snapshot(Snapshot(merge_in_progress=True, ahead=1))
        hidden = runner.invoke(app, ["-C", str(tmp_path)])
        assert "R004" not in hidden.output
        shown = runner.invoke(app, ["-C", str(tmp_path), "--all"])
        assert "[R004] (suppressed)" in shown.output

    def test_json(self, tmp_path, use_snapshot):
        use_snapshot(Snapshot(merge_in_progress=True, ahead=1))
        result = runner.invoke(app, ["-C", str(tmp_path), "--json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert [a["rule_id"] for a in data["advice"]] == ["R009", "R004"]
        assert data["stats"] == {"total": 2, "active": 1, "suppressed": 1}

    def test_compact(self, tmp_path, use_snapshot):
        use_snapshot(Snapshot(merge_in_progress=True, ahead=1))
        result = runner.invoke(app, ["-C", str(tmp_path), "--compact"])
        assert result.output.strip() == "→ R009"

    def test_compact_clean(self, tmp_path, use_snapshot):
        use_snapshot(Snapshot())
        result = runner.invoke(app, ["-C", str(tmp_path), "--compact"])
        assert result.exit_code == 0
        assert result.output.strip() == "✓ clean"

    def test_debug_shows_state(self, tmp_path, use_snapshot):
        use_snapshot(Snapshot(ahead=3))
        result = runner.invoke(app, ["-C", str(tmp_path), "--debug"])
        assert "Repository State" in result.output
        assert "ahead" in result.output

    def test_config_disables_rules(self, tmp_path, use_snapshot):
        use_snapshot(Snapshot(ahead=1))
        config_file = tmp_path / "git-next.toml"
        config_file.write_text('[rules]\ndisabled = ["R004"]\n')
        result = runner.invoke(app, ["-C", str(tmp_path), "--config", str(config_file)])
        assert result.exit_code == 0
        assert "Repository is clean" in result.output

    def test_invalid_config_file(self, tmp_path, use_snapshot):
        use_snapshot(Snapshot())
        config_file = tmp_path / "broken.toml"
        config_file.write_text("not = [valid\n")
        result = runner.invoke(app, ["-C", str(tmp_path), "--config", str(config_file)])
        assert result.exit_code == 2
        assert "Invalid config file" in result.output

    def test_not_a_repository(self, tmp_path, use_snapshot):
        use_snapshot(error=NotAGitRepositoryError(str(tmp_path)))
        result = runner.invoke(app, ["-C", str(tmp_path)])
        assert result.exit_code == 2
        assert "Not a git repository" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_action_mode(self, tmp_path, use_snapshot, monkeypatch):
        seen = {}

        class FakeExecutor:
            def __init__(self, console, repo_path):
                seen["repo_path"] = repo_path

            def execute(self, advice):
                seen["advice"] = [a.rule_id for a in advice]
                return True

        monkeypatch.setattr("git_next.cli.main.ActionExecutor", FakeExecutor)
        use_snapshot(Snapshot(ahead=1))
        result = runner.invoke(app, ["-C", str(tmp_path), "--action"])
        assert result.exit_code == 0
        assert seen["advice"] == ["R004"]
        assert seen["repo_path"] == tmp_path
