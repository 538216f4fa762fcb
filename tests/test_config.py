"""Tests for configuration validation"""

import pytest

from git_repo_keeper.config import Config
from git_repo_keeper.models.repository import CleanupOptions, UpdateOptions


class TestConfigValidation:
    """Test Config field validation."""

    def test_defaults(self):
        config = Config()

        assert config.root == "~/src"
        assert config.prune is True
        assert config.jobs == 0
        assert config.timeout == 600.0

    def test_root_is_stripped(self):
        assert Config(root="  /srv/code  ").root == "/srv/code"

    @pytest.mark.parametrize("root", ["", "   "])
    def test_blank_root_rejected(self, root):
        with pytest.raises(ValueError, match="root cannot be empty"):
            Config(root=root)

    def test_negative_jobs_rejected(self):
        with pytest.raises(ValueError, match="jobs"):
            Config(jobs=-1)

    @pytest.mark.parametrize("timeout", [0, -5.0])
    def test_non_positive_timeout_rejected(self, timeout):
        with pytest.raises(ValueError, match="timeout"):
            Config(timeout=timeout)

    def test_no_timeout_allowed(self):
        assert Config(timeout=None).timeout is None


class TestConfigConversion:
    """Test dict conversion and derived options."""

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"root": "/srv", "jobs": 4, "colour": "blue"})

        assert config.root == "/srv"
        assert config.jobs == 4
        assert not hasattr(config, "colour")

    def test_to_dict_round_trip(self, mock_config):
        config = Config.from_dict(mock_config)
        assert config.to_dict() == mock_config

    def test_get(self):
        config = Config(jobs=3)

        assert config.get("jobs") == 3
        assert config.get("missing", "fallback") == "fallback"

    def test_update_options(self):
        config = Config(prune=False, autostash=True, submodule_update=True, dry_run=True)

        assert config.update_options() == UpdateOptions(
            prune=False, autostash=True, submodule_update=True, dry_run=True
        )

    def test_cleanup_options(self):
        config = Config(prune=True, dry_run=True, exclude_branches=["develop", "release"])

        assert config.cleanup_options() == CleanupOptions(
            prune=True, dry_run=True, exclude_branches=("develop", "release")
        )

    def test_defaults_have_no_log_file_or_exclusions(self):
        config = Config()

        assert config.log_file is None
        assert config.exclude_branches == []
