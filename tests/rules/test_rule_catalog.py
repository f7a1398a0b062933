"""Tests for the rule catalog."""

import pytest

from git_next.config import GitNextConfig
from git_next.exceptions import CatalogError
from git_next.rules import RuleCatalog, RuleDefinition, Tier, tier_for_priority
from git_next.rules.dangerous import DETACHED_HEAD


def _never(snapshot):
    return False


class TestTierForPriority:
    @pytest.mark.parametrize(
        "priority, tier",
        [
            (100, Tier.DANGEROUS),
            (90, Tier.DANGEROUS),
            (89, Tier.INTEGRITY),
            (60, Tier.INTEGRITY),
            (59, Tier.WORKFLOW),
            (30, Tier.WORKFLOW),
            (29, Tier.SUGGESTION),
            (10, Tier.SUGGESTION),
            (9, Tier.INFORMATIONAL),
            (0, Tier.INFORMATIONAL),
        ],
    )
    def test_band_boundaries(self, priority, tier):
        assert tier_for_priority(priority) is tier


class TestCatalogContents:
    def test_rule_count(self, catalog):
        assert len(catalog) == 43

    def test_ids_unique(self, catalog):
        ids = [rule.id for rule in catalog]
        assert len(ids) == len(set(ids))

    def test_tiers_in_order(self, catalog):
        order = list(Tier)
        indices = [order.index(rule.tier) for rule in catalog]
        assert indices == sorted(indices)

    def test_first_and_last(self, catalog):
        rules = catalog.rules()
        assert rules[0].id == "R037"
        assert rules[-1].id == "R058"

    def test_priority_matches_tier(self, catalog):
        for rule in catalog:
            assert rule.tier is tier_for_priority(rule.priority)

    def test_by_tier_groups(self, catalog):
        grouped = catalog.by_tier()
        assert list(grouped) == list(Tier)
        assert [r.id for r in grouped[Tier.INFORMATIONAL]] == ["R056", "R057", "R058"]
        assert sum(len(rules) for rules in grouped.values()) == len(catalog)

    def test_get_and_contains(self, catalog):
        assert catalog.get("R001") is DETACHED_HEAD
        assert catalog.get("R999") is None
        assert "R004" in catalog
        assert "R999" not in catalog


class TestDisabledRules:
    def test_disabled_rules_excluded_from_enabled(self):
        catalog = RuleCatalog(GitNextConfig(disabled_rules=["R001", "R004"]))
        enabled = {rule.id for rule in catalog.enabled_rules()}
        assert "R001" not in enabled
        assert "R004" not in enabled
        assert len(enabled) == len(catalog) - 2

    def test_disabled_rules_still_listed(self):
        catalog = RuleCatalog(GitNextConfig(disabled_rules=["R001"]))
        assert catalog.get("R001") is not None
        assert catalog.is_disabled("R001")

    def test_unknown_ids_are_ignored(self):
        catalog = RuleCatalog(GitNextConfig(disabled_rules=["R999"]))
        assert len(catalog.enabled_rules()) == len(catalog)


class TestParameterisedRules:
    def test_soft_reset_threshold(self):
        catalog = RuleCatalog(GitNextConfig(rule_parameters={"R020": {"max_commits": 5}}))
        rule = catalog.get("R020")
        assert "≤5" in rule.description
        assert rule.condition.endswith("<= 5")

    def test_branch_prefix(self):
        catalog = RuleCatalog(GitNextConfig(rule_parameters={"R047": {"branch_prefix": "topic/"}}))
        assert catalog.get("R047").command == "git checkout -b topic/<name>"

    def test_default_branch_prefix(self, catalog):
        assert catalog.get("R047").command == "git checkout -b feature/<name>"


class TestCatalogWiring:
    def test_duplicate_ids_rejected(self, monkeypatch):
        rule = RuleDefinition("R001", "one", _never, "git status", "dup", 95)
        monkeypatch.setattr(
            "git_next.rules.catalog.TIER_BUILDERS",
            ((Tier.DANGEROUS, lambda params: [rule, rule]),),
        )
        with pytest.raises(CatalogError) as exc_info:
            RuleCatalog()
        assert exc_info.value.rule_id == "R001"

    def test_priority_outside_tier_rejected(self, monkeypatch):
        rule = RuleDefinition("R900", "misplaced", _never, "git status", "wrong tier", 50)
        monkeypatch.setattr(
            "git_next.rules.catalog.TIER_BUILDERS",
            ((Tier.DANGEROUS, lambda params: [rule]),),
        )
        with pytest.raises(CatalogError, match="dangerous"):
            RuleCatalog()
