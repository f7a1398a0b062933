"""Tests for the Advice record and the engine facade."""

from git_next.config import GitNextConfig
from git_next.engine import AdviceEngine, has_active_advice
from git_next.rules import Tier
from git_next.snapshot.models import Snapshot


class TestAdvice:
    def test_suppress(self, make_advice):
        advice = make_advice("R004", "git push", 50)
        assert advice.active
        advice.suppress("Suppressed by merge --continue (priority 98)")
        assert advice.suppressed
        assert not advice.active
        assert advice.reason.startswith("Suppressed by")

    def test_tier(self, make_advice):
        assert make_advice("R037", "# warning", 100).tier is Tier.DANGEROUS
        assert make_advice("R058", "git checkout <branch>", 5).tier is Tier.INFORMATIONAL

    def test_to_dict(self, make_advice):
        d = make_advice("R004", "git push", 50, description="Local commits ready to push").to_dict()
        assert d == {
            "rule_id": "R004",
            "command": "git push",
            "description": "Local commits ready to push",
            "priority": 50,
            "tier": "workflow",
            "suppressed": False,
            "reason": "",
        }

    def test_to_dict_includes_evidence(self, make_advice):
        d = make_advice("R035", "git branch -d <branch>", 65, evidence={"branches": ["old"]}).to_dict()
        assert d["evidence"] == {"branches": ["old"]}


class TestAdviceEngine:
    def test_reusable(self, engine):
        snapshot = Snapshot(merge_in_progress=True, ahead=1)
        first = [a.to_dict() for a in engine.advise(snapshot)]
        second = [a.to_dict() for a in engine.advise(snapshot)]
        assert first == second

    def test_fresh_advice_objects(self, engine):
        snapshot = Snapshot(ahead=1)
        assert engine.advise(snapshot)[0] is not engine.advise(snapshot)[0]

    def test_disabled_rule_cannot_suppress(self):
        engine = AdviceEngine(GitNextConfig(disabled_rules=["R009"]))
        advice = engine.advise(Snapshot(merge_in_progress=True, ahead=1))
        assert [(a.rule_id, a.suppressed) for a in advice] == [("R004", False)]

    def test_soft_reset_suppresses_commit(self, engine):
        advice = engine.advise(Snapshot(commit_count_since_push=2, staged_files=1, dirty=True))
        by_id = {a.rule_id: a for a in advice}
        assert by_id["R020"].active
        assert by_id["R003"].suppressed
        assert by_id["R003"].reason == "Suppressed by reset (priority 45)"


class TestHasActiveAdvice:
    def test_empty(self):
        assert not has_active_advice([])

    def test_all_suppressed(self, make_advice):
        assert not has_active_advice([make_advice("R004", "git push", 50, suppressed=True)])

    def test_some_active(self, make_advice):
        advice = [make_advice("R004", "git push", 50, suppressed=True), make_advice("R007", "git add <files>", 20)]
        assert has_active_advice(advice)
