"""Shared test fixtures for git-next tests."""

import pytest

from git_next.config import GitNextConfig
from git_next.engine import AdviceEngine
from git_next.engine.models import Advice
from git_next.rules import RuleCatalog


@pytest.fixture
def config():
    """Default configuration, independent of the environment."""
    return GitNextConfig()


@pytest.fixture
def catalog(config):
    return RuleCatalog(config)


@pytest.fixture
def engine(config):
    return AdviceEngine(config)


@pytest.fixture
def make_advice():
    """Factory for hand-built advice items."""

    def _make(rule_id, command, priority, description="", suppressed=False, reason="", evidence=None):
        return Advice(
            rule_id=rule_id,
            command=command,
            description=description or f"advice {rule_id}",
            priority=priority,
            suppressed=suppressed,
            reason=reason,
            evidence=evidence or {},
        )

    return _make


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep user config files and GIT_NEXT_* variables out of tests."""
    monkeypatch.delenv("GIT_NEXT_PROTECTED_BRANCHES", raising=False)
    monkeypatch.delenv("GIT_NEXT_DISABLED_RULES", raising=False)
    monkeypatch.setattr("git_next.config.GLOBAL_CONFIG_PATH", tmp_path / "no-such-global.toml")
