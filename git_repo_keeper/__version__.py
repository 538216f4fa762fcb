"""Version information for git-repo-keeper."""

__version__ = "0.3.0"
