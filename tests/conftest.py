"""Pytest fixtures for git-repo-keeper tests"""

import tempfile
from pathlib import Path

import git
import pytest


def configure_user(repo: git.Repo) -> None:
    """Set a commit identity so tests do not depend on the global git config."""
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")


def commit_file(repo: git.Repo, name: str, content: str, message: str) -> None:
    """Write a file in the working tree and commit it."""
    path = Path(repo.working_dir) / name
    path.write_text(content)
    repo.index.add([name])
    repo.index.commit(message)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_config(temp_dir):
    """Create a configuration dictionary pointing at the temp directory."""
    return {
        "root": str(temp_dir),
        "jobs": 2,
        "prune": True,
        "autostash": False,
        "submodule_update": False,
        "dry_run": True,
        "exclude_branches": [],
        "timeout": 60.0,
        "log_file": None,
        "verbose": False,
        "debug": False,
    }


@pytest.fixture
def local_repo(temp_dir):
    """Create a repository with one commit on main and no remote."""
    repo_path = temp_dir / "local_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)
    configure_user(repo)
    commit_file(repo, "README.md", "# Local\n", "Initial commit")
    repo.git.branch("-M", "main")

    yield repo
    repo.close()


@pytest.fixture
def remote_repo(temp_dir):
    """Create a bare remote whose default branch is main with one commit."""
    bare_path = temp_dir / "remote.git"
    bare = git.Repo.init(bare_path, bare=True)
    bare.git.symbolic_ref("HEAD", "refs/heads/main")

    seed_path = temp_dir / "scratch" / "seed"
    seed = git.Repo.init(seed_path)
    configure_user(seed)
    commit_file(seed, "README.md", "# Remote\n", "Initial commit")
    seed.git.branch("-M", "main")
    seed.create_remote("origin", str(bare_path))
    seed.git.push("origin", "main")
    seed.close()

    yield bare
    bare.close()


@pytest.fixture
def cloned_repo(temp_dir, remote_repo):
    """Clone the remote: main tracks origin/main and origin/HEAD is set."""
    clone_path = temp_dir / "workspace" / "cloned"
    repo = git.Repo.clone_from(remote_repo.git_dir, clone_path)
    configure_user(repo)

    yield repo
    repo.close()


@pytest.fixture
def push_remote_commit(temp_dir, remote_repo):
    """Return a helper that lands a new commit on the remote's main branch."""
    counter = {"n": 0}

    def _push(name: str = "remote_change.txt") -> str:
        counter["n"] += 1
        other_path = temp_dir / "scratch" / f"other_clone_{counter['n']}"
        other = git.Repo.clone_from(remote_repo.git_dir, other_path)
        configure_user(other)
        commit_file(other, name, f"change {counter['n']}\n", f"Remote change {counter['n']}")
        other.git.push("origin", "main")
        sha = other.head.commit.hexsha
        other.close()
        return sha

    return _push


@pytest.fixture
def make_commit():
    """Return the commit helper for tests that add commits."""
    return commit_file
