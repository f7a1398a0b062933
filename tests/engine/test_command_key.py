"""Tests for command template helpers."""

import pytest

from git_next.engine.commands import alternatives, command_key, is_executable, placeholders


class TestCommandKey:
    @pytest.mark.parametrize(
        "command, key",
        [
            ("git push", "push"),
            ("git pull --ff-only", "pull"),
            ("git reset --soft HEAD~N", "reset"),
            ("git merge --continue OR git merge --abort", "merge --continue"),
            ("git rebase --abort", "rebase --abort"),
            ("git cherry-pick --continue OR git cherry-pick --abort", "cherry-pick --continue"),
            ("git add <files> && git commit", "commit"),
            ("git lfs track <pattern> && git add .gitattributes", "add"),
            ("cd <submodule> && git checkout <branch>", "checkout"),
            ("git rebase origin/<branch> OR git merge origin/<branch>", "rebase"),
            ("git stash pop OR git stash clear", "stash"),
            ("git merge main (or rebase)", "merge"),
        ],
    )
    def test_keys(self, command, key):
        assert command_key(command) == key

    @pytest.mark.parametrize(
        "command",
        [
            "# DO NOT git push --force on shared branches!",
            "git",
            "",
            "make test",
        ],
    )
    def test_no_key(self, command):
        assert command_key(command) == ""


class TestAlternatives:
    def test_single(self):
        assert alternatives("git push") == ["git push"]

    def test_split(self):
        assert alternatives("git stash pop OR git stash clear") == ["git stash pop", "git stash clear"]


class TestIsExecutable:
    def test_warning(self):
        assert not is_executable("# DO NOT rewrite published tags!")

    def test_command(self):
        assert is_executable("git push --tags")


class TestPlaceholders:
    def test_in_order_without_duplicates(self):
        command = "git rebase origin/<branch> OR git merge origin/<branch>"
        assert placeholders(command) == ["<branch>"]

    def test_head_n(self):
        assert placeholders("git reset --soft HEAD~N") == ["HEAD~N"]

    def test_none(self):
        assert placeholders("git push") == []
