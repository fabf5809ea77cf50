"""leakgate — keep credentials out of git, now and in history."""

__version__ = "1.0.0"
