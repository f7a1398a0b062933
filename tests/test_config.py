"""Tests for configuration loading and validation."""

import pytest

from git_next.config import (
    DEFAULT_PROTECTED_BRANCHES,
    GitNextConfig,
    RuleParameters,
    load_config,
)
from git_next.exceptions import ConfigFileError, InvalidConfigError
from git_next.rules import RuleCatalog


class TestGitNextConfigDefaults:
    def test_protected_branches(self):
        config = GitNextConfig()
        assert config.protected_branches == ("main", "master", "develop", "production")
        assert config.is_protected("main")
        assert not config.is_protected("feature/x")

    def test_default_rule_parameters(self):
        params = GitNextConfig().rule_parameters
        assert params.get_int("R020", "max_commits", 0) == 3
        assert params.get_int("R022", "min_commits", 0) == 4

    def test_nothing_disabled(self):
        config = GitNextConfig()
        assert config.disabled_rules == frozenset()
        assert not config.is_rule_disabled("R001")


class TestGitNextConfigValidation:
    def test_string_protected_branches_rejected(self):
        with pytest.raises(InvalidConfigError):
            GitNextConfig(protected_branches="main")

    def test_empty_branch_name_rejected(self):
        with pytest.raises(InvalidConfigError):
            GitNextConfig(protected_branches=["main", ""])

    def test_string_disabled_rules_rejected(self):
        with pytest.raises(InvalidConfigError):
            GitNextConfig(disabled_rules="R001")

    def test_rule_parameters_must_be_tables(self):
        with pytest.raises(InvalidConfigError):
            GitNextConfig(rule_parameters={"R020": 5})

    def test_custom_suppressions_must_be_lists(self):
        with pytest.raises(InvalidConfigError):
            GitNextConfig(custom_suppressions={"push": "pull"})

    def test_dict_rule_parameters_merge_over_defaults(self):
        config = GitNextConfig(rule_parameters={"R020": {"max_commits": 5}})
        assert config.rule_parameters.get_int("R020", "max_commits", 0) == 5
        assert config.rule_parameters.get_int("R022", "min_commits", 0) == 4

    def test_lists_normalised(self):
        config = GitNextConfig(protected_branches=["trunk"], disabled_rules=["R057", "R057"])
        assert config.protected_branches == ("trunk",)
        assert config.disabled_rules == frozenset({"R057"})


class TestRuleParameters:
    def test_missing_value_uses_default(self):
        assert RuleParameters().get_int("R020", "max_commits", 7) == 7

    def test_wrong_type_uses_default(self):
        params = RuleParameters({"R020": {"max_commits": "lots"}})
        assert params.get_int("R020", "max_commits", 3) == 3

    def test_bool_is_not_a_count(self):
        params = RuleParameters({"R020": {"max_commits": True}})
        assert params.get_int("R020", "max_commits", 3) == 3

    def test_float_truncated(self):
        params = RuleParameters({"R048": {"max_days": 20.9}})
        assert params.get_int("R048", "max_days", 14) == 20

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_float_uses_default(self, value):
        params = RuleParameters({"R020": {"max_commits": value}})
        assert params.get_int("R020", "max_commits", 3) == 3

    def test_catalog_builds_with_non_finite_parameter(self):
        config = GitNextConfig(rule_parameters={"R020": {"max_commits": float("nan")}})
        assert RuleCatalog(config).get("R020") is not None

    def test_get_str(self):
        params = RuleParameters({"R047": {"branch_prefix": "topic/"}})
        assert params.get_str("R047", "branch_prefix", "feature/") == "topic/"
        assert params.get_str("R047", "missing", "feature/") == "feature/"

    def test_merged_layers_per_rule(self):
        base = RuleParameters({"R055": {"max_stashes": 3, "max_age_days": 7}})
        merged = base.merged({"R055": {"max_stashes": 10}})
        assert merged.to_dict() == {"R055": {"max_stashes": 10, "max_age_days": 7}}
        assert base.get_int("R055", "max_stashes", 0) == 3


class TestLoadConfig:
    def test_defaults_without_files(self, tmp_path):
        config = load_config(cwd=tmp_path)
        assert config.protected_branches == DEFAULT_PROTECTED_BRANCHES

    def test_project_file(self, tmp_path):
        (tmp_path / ".git-next.toml").write_text(
            'protected_branches = ["trunk"]\n'
            "[rules]\n"
            'disabled = ["R057"]\n'
            "[rules.parameters.R020]\n"
            "max_commits = 6\n"
        )
        config = load_config(cwd=tmp_path)
        assert config.protected_branches == ("trunk",)
        assert config.is_rule_disabled("R057")
        assert config.rule_parameters.get_int("R020", "max_commits", 0) == 6
        assert config.rule_parameters.get_int("R022", "min_commits", 0) == 4

    def test_invalid_project_file_is_skipped(self, tmp_path):
        (tmp_path / ".git-next.toml").write_text("this is not toml [")
        config = load_config(cwd=tmp_path)
        assert config == GitNextConfig()

    def test_explicit_file_overrides_project_file(self, tmp_path):
        (tmp_path / ".git-next.toml").write_text('protected_branches = ["trunk"]\n')
        explicit = tmp_path / "custom.toml"
        explicit.write_text('protected_branches = ["release"]\n')
        config = load_config(config_file=explicit, cwd=tmp_path)
        assert config.protected_branches == ("release",)

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigFileError):
            load_config(config_file=tmp_path / "nope.toml", cwd=tmp_path)

    def test_unknown_key_in_explicit_file(self, tmp_path):
        explicit = tmp_path / "custom.toml"
        explicit.write_text("colour = true\n")
        with pytest.raises(ConfigFileError, match="Invalid config file"):
            load_config(config_file=explicit, cwd=tmp_path)

    def test_custom_suppressions(self, tmp_path):
        explicit = tmp_path / "custom.toml"
        explicit.write_text('[suppression.custom]\npush = ["add"]\n')
        config = load_config(config_file=explicit, cwd=tmp_path)
        assert dict(config.custom_suppressions) == {"push": ("add",)}

    def test_nan_parameter_in_file_falls_back(self, tmp_path):
        explicit = tmp_path / "custom.toml"
        explicit.write_text("[rules.parameters.R020]\nmax_commits = nan\n")
        config = load_config(config_file=explicit, cwd=tmp_path)
        assert config.rule_parameters.get_int("R020", "max_commits", 3) == 3

    def test_env_vars(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GIT_NEXT_PROTECTED_BRANCHES", "trunk, release")
        monkeypatch.setenv("GIT_NEXT_DISABLED_RULES", "R056,R057")
        config = load_config(cwd=tmp_path)
        assert config.protected_branches == ("trunk", "release")
        assert config.disabled_rules == frozenset({"R056", "R057"})

    def test_overrides_win(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GIT_NEXT_DISABLED_RULES", "R056")
        config = load_config(cwd=tmp_path, disabled_rules=["R001"])
        assert config.disabled_rules == frozenset({"R001"})

    def test_rule_parameter_override_merges(self, tmp_path):
        config = load_config(cwd=tmp_path, rule_parameters={"R048": {"max_days": 30}})
        assert config.rule_parameters.get_int("R048", "max_days", 14) == 30
        assert config.rule_parameters.get_int("R020", "max_commits", 0) == 3

    def test_unknown_override_rejected(self, tmp_path):
        with pytest.raises(InvalidConfigError):
            load_config(cwd=tmp_path, colour=True)
