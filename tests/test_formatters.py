"""Tests for the formatters package."""

import json

import pytest

from git_next.formatters import (
    CompactFormatter,
    HumanFormatter,
    JsonFormatter,
    ReportContext,
    get_formatter,
)


@pytest.fixture
def mixed_advice(make_advice):
    return [
        make_advice("R009", "git merge --continue OR git merge --abort", 98, "Merge in progress - complete or abort"),
        make_advice(
            "R035",
            "git branch -d <branch>",
            65,
            "Merged branches ready for cleanup",
            evidence={"branches": ["done-1", "done-2"]},
        ),
        make_advice(
            "R004",
            "git push",
            50,
            "Local commits ready to push",
            suppressed=True,
            reason="Suppressed by merge --continue (priority 98)",
        ),
    ]


class TestGetFormatter:
    def test_known_formatters(self):
        assert isinstance(get_formatter("human"), HumanFormatter)
        assert isinstance(get_formatter("json"), JsonFormatter)
        assert isinstance(get_formatter("compact"), CompactFormatter)

    def test_unknown_formatter(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")


class TestHumanFormatter:
    def test_clean(self):
        out = HumanFormatter().format([], ReportContext())
        assert out.strip() == "✓ Repository is clean. No actions needed."

    def test_active_items(self, mixed_advice):
        out = HumanFormatter().format(mixed_advice, ReportContext())
        assert "Git Next - Suggested Actions" in out
        assert "→ [R009] Merge in progress - complete or abort" in out
        assert "Command: git merge --continue OR git merge --abort" in out
        assert "Branches: done-1, done-2" in out

    def test_suppressed_hidden_by_default(self, mixed_advice):
        out = HumanFormatter().format(mixed_advice, ReportContext())
        assert "[R004]" not in out
        assert "Active: 2  Suppressed: 1" in out
        assert "(Use --all to show suppressed advice)" in out

    def test_suppressed_shown_with_reason(self, mixed_advice):
        out = HumanFormatter().format(mixed_advice, ReportContext(show_suppressed=True))
        assert "[R004] (suppressed)" in out
        assert "Reason: Suppressed by merge --continue (priority 98)" in out
        assert "Use --all" not in out

    def test_total_without_suppression(self, make_advice):
        out = HumanFormatter().format([make_advice("R007", "git add <files>", 20)], ReportContext())
        assert "Total: 1 action(s)" in out
        assert "Command: git add <files>" in out

    def test_warning_text_is_not_markup(self, make_advice):
        advice = [make_advice("R042", "# Remove conflict markers", 89, "if <<<<<<< is in the diff [stop]")]
        out = HumanFormatter().format(advice, ReportContext())
        assert "if <<<<<<< is in the diff [stop]" in out


class TestJsonFormatter:
    def test_format_returns_valid_json(self, mixed_advice):
        data = json.loads(JsonFormatter().format(mixed_advice, ReportContext()))
        assert [a["rule_id"] for a in data["advice"]] == ["R009", "R035", "R004"]
        assert data["stats"] == {"total": 3, "active": 2, "suppressed": 1}
        assert data["advice"][2]["reason"].startswith("Suppressed by")
        assert data["advice"][1]["evidence"] == {"branches": ["done-1", "done-2"]}

    def test_empty(self):
        data = json.loads(JsonFormatter().format([], ReportContext()))
        assert data == {"advice": [], "stats": {"total": 0, "active": 0, "suppressed": 0}}


class TestCompactFormatter:
    def test_active_ids(self, mixed_advice):
        assert CompactFormatter().format(mixed_advice, ReportContext()) == "→ R009, R035"

    def test_clean(self, make_advice):
        suppressed = [make_advice("R004", "git push", 50, suppressed=True)]
        assert CompactFormatter().format(suppressed, ReportContext()) == "✓ clean"
        assert CompactFormatter().format([], ReportContext()) == "✓ clean"

    def test_render_prints(self, mixed_advice, capsys):
        CompactFormatter().render(mixed_advice, ReportContext())
        assert capsys.readouterr().out == "→ R009, R035\n"
