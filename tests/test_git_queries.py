"""Tests for the git command layer and read-only queries"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from git_repo_keeper.exceptions import GitOperationError, OperationCancelledError
from git_repo_keeper.services.git import (
    GitCommands,
    RepoQueries,
    build_branch_delete_args,
    build_fetch_args,
    build_pull_args,
    build_submodule_args,
    format_git_command,
    is_no_upstream_error,
)
from git_repo_keeper.utils.context import OperationContext


class TestCommandBuilders:
    """Test construction of git arguments."""

    def test_fetch_args(self):
        assert build_fetch_args(True) == ["fetch", "--all", "--prune"]
        assert build_fetch_args(False) == ["fetch", "--all"]

    def test_pull_args(self):
        assert build_pull_args(True) == ["pull", "--rebase", "--autostash"]
        assert build_pull_args(False) == ["pull", "--rebase"]

    def test_submodule_args(self):
        assert build_submodule_args() == ["submodule", "update", "--init", "--recursive", "--remote"]

    def test_branch_delete_args(self):
        assert build_branch_delete_args("feature") == ["branch", "-d", "feature"]

    def test_format_git_command(self):
        assert format_git_command("/tmp/repo", ["fetch", "--all", "--prune"]) == (
            "git -C /tmp/repo fetch --all --prune"
        )

    def test_no_upstream_error_shapes(self):
        assert is_no_upstream_error("fatal: no upstream configured for branch 'main'")
        assert is_no_upstream_error("fatal: No upstream branch found for ''")
        assert not is_no_upstream_error("fatal: not a git repository")


class TestGitCommands:
    """Test running git."""

    def test_run_returns_stdout(self, local_repo):
        commands = GitCommands(local_repo.working_dir)
        assert commands.run("rev-parse", "--abbrev-ref", "HEAD") == "main"

    def test_run_failure_includes_output(self, local_repo):
        commands = GitCommands(local_repo.working_dir)

        with pytest.raises(GitOperationError) as exc_info:
            commands.run("rev-parse", "--verify", "refs/heads/does-not-exist")

        assert exc_info.value.repo_path == commands.repo_path
        assert "exit status" in str(exc_info.value)

    def test_cancelled_context_stops_before_running(self, local_repo):
        context = OperationContext()
        context.cancel()
        commands = GitCommands(local_repo.working_dir, context)

        with patch.object(commands, "_get_git") as mock_get_git:
            with pytest.raises(OperationCancelledError):
                commands.run("status")

        mock_get_git.assert_not_called()

    def test_expired_deadline_stops_before_running(self, local_repo):
        context = OperationContext(timeout=0.0001)
        context.deadline = 0  # already in the past
        commands = GitCommands(local_repo.working_dir, context)

        with pytest.raises(OperationCancelledError, match="deadline"):
            commands.run("status")

    def test_start_failure_is_wrapped(self, local_repo):
        """An OSError raised while starting git becomes a GitOperationError."""
        commands = GitCommands(local_repo.working_dir)
        broken_git = MagicMock()
        broken_git.execute.side_effect = PermissionError("permission denied")

        with patch.object(commands, "_get_git", return_value=broken_git):
            with pytest.raises(GitOperationError) as exc_info:
                commands.execute("status")

        assert exc_info.value.operation == "git status"
        assert exc_info.value.repo_path == commands.repo_path
        assert isinstance(exc_info.value.__cause__, PermissionError)


class TestRepoQueries:
    """Test observations of working copy state."""

    def test_clean_repo_is_not_dirty(self, local_repo):
        assert RepoQueries(local_repo.working_dir).is_dirty() is False

    def test_untracked_file_is_dirty(self, local_repo):
        (Path(local_repo.working_dir) / "new.txt").write_text("new\n")
        assert RepoQueries(local_repo.working_dir).is_dirty() is True

    def test_modified_file_is_dirty(self, local_repo):
        (Path(local_repo.working_dir) / "README.md").write_text("changed\n")
        assert RepoQueries(local_repo.working_dir).is_dirty() is True

    def test_stash_detection(self, local_repo):
        queries = RepoQueries(local_repo.working_dir)
        assert queries.has_stash() is False

        (Path(local_repo.working_dir) / "README.md").write_text("stash me\n")
        local_repo.git.stash()

        assert queries.has_stash() is True
        assert queries.is_dirty() is False

    def test_detached_head(self, local_repo):
        queries = RepoQueries(local_repo.working_dir)
        assert queries.is_detached_head() is False
        assert queries.get_current_branch() == "main"

        local_repo.git.checkout(local_repo.head.commit.hexsha)

        assert queries.is_detached_head() is True

    def test_upstream_ref_of_clone(self, cloned_repo):
        assert RepoQueries(cloned_repo.working_dir).get_upstream_ref() == "origin/main"

    def test_no_upstream_is_none(self, local_repo):
        assert RepoQueries(local_repo.working_dir).get_upstream_ref() is None

    def test_remote_default_ref(self, cloned_repo):
        assert RepoQueries(cloned_repo.working_dir).get_remote_default_ref("origin") == "origin/main"

    def test_remote_default_ref_missing(self, cloned_repo):
        cloned_repo.git.remote("set-head", "origin", "-d")

        with pytest.raises(GitOperationError, match="symbolic-ref"):
            RepoQueries(cloned_repo.working_dir).get_remote_default_ref("origin")

    def test_ahead_count(self, cloned_repo, make_commit):
        queries = RepoQueries(cloned_repo.working_dir)
        assert queries.get_ahead_count() == (True, 0)

        make_commit(cloned_repo, "local.txt", "local\n", "Local commit")

        assert queries.get_ahead_count() == (True, 1)

    def test_ahead_count_without_upstream(self, local_repo):
        assert RepoQueries(local_repo.working_dir).get_ahead_count() == (False, 0)

    def test_upstream_lookup_fails_on_detached_head(self, cloned_repo):
        """Detached HEAD is not a "no upstream" answer, it is an error."""
        cloned_repo.git.checkout(cloned_repo.head.commit.hexsha)

        with pytest.raises(GitOperationError):
            RepoQueries(cloned_repo.working_dir).get_upstream_ref()

    def test_merged_branches(self, cloned_repo, make_commit):
        cloned_repo.git.branch("merged-feature")
        cloned_repo.git.checkout("-b", "open-feature")
        make_commit(cloned_repo, "open.txt", "open\n", "Unmerged work")
        cloned_repo.git.checkout("main")

        merged = RepoQueries(cloned_repo.working_dir).list_merged_branches("origin/main")

        assert sorted(merged) == ["main", "merged-feature"]

    def test_local_branch_exists(self, local_repo):
        queries = RepoQueries(local_repo.working_dir)

        assert queries.local_branch_exists("main") is True
        assert queries.local_branch_exists("nope") is False

    def test_local_branch_lookup_outside_repository_fails(self, temp_dir):
        plain = temp_dir / "plain"
        plain.mkdir()

        with pytest.raises(GitOperationError, match="show-ref"):
            RepoQueries(str(plain)).local_branch_exists("main")
