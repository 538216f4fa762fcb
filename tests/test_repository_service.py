"""Tests for repository inspection and listing"""

from pathlib import Path
from unittest.mock import patch

import pytest

from git_repo_keeper.exceptions import GitOperationError, OperationCancelledError
from git_repo_keeper.models.repository import Status
from git_repo_keeper.services.git.queries import RepoQueries
from git_repo_keeper.services.repository_service import inspect, list_repositories


class TestInspect:
    """Test classification of a single repository."""

    def test_clean_clone(self, cloned_repo):
        info = inspect(cloned_repo.working_dir)

        assert info.name == "cloned"
        assert info.path == cloned_repo.working_dir
        assert info.status == Status.CLEAN
        assert info.has_upstream is True
        assert info.ahead == 0

    def test_no_upstream(self, local_repo):
        info = inspect(local_repo.working_dir)

        assert info.status == Status.NO_UPSTREAM
        assert info.has_upstream is False

    def test_unpushed(self, cloned_repo, make_commit):
        make_commit(cloned_repo, "local.txt", "local\n", "Local commit")

        info = inspect(cloned_repo.working_dir)

        assert info.status == Status.UNPUSHED
        assert info.ahead == 1

    def test_dirty_wins(self, cloned_repo, make_commit):
        make_commit(cloned_repo, "local.txt", "local\n", "Local commit")
        (Path(cloned_repo.working_dir) / "wip.txt").write_text("wip\n")

        info = inspect(cloned_repo.working_dir)

        assert info.status == Status.DIRTY
        assert info.dirty is True

    def test_dirty_read_failure(self, local_repo):
        error = GitOperationError("git status --porcelain", local_repo.working_dir, "boom")

        with patch.object(RepoQueries, "is_dirty", side_effect=error):
            with pytest.raises(GitOperationError, match="read working tree state"):
                inspect(local_repo.working_dir)

    def test_tracking_read_failure(self, local_repo):
        error = GitOperationError("git rev-list", local_repo.working_dir, "boom")

        with patch.object(RepoQueries, "get_ahead_count", side_effect=error):
            with pytest.raises(GitOperationError, match="read tracking state"):
                inspect(local_repo.working_dir)

    def test_cancellation_is_not_wrapped(self, local_repo):
        with patch.object(RepoQueries, "is_dirty", side_effect=OperationCancelledError()):
            with pytest.raises(OperationCancelledError):
                inspect(local_repo.working_dir)


class TestListRepositories:
    """Test listing every repository under a root."""

    def test_sorted_by_name(self, temp_dir, local_repo, cloned_repo):
        """Repositories from the root's children come back ordered by name."""
        root = temp_dir / "workspace"
        local_repo.git.clone(local_repo.working_dir, str(root / "another"))

        infos = list_repositories(str(root))

        assert [info.name for info in infos] == ["another", "cloned"]
        assert infos[0].status == Status.CLEAN
        assert infos[1].status == Status.CLEAN

    def test_empty_root(self, temp_dir):
        assert list_repositories(str(temp_dir)) == []
