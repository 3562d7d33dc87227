"""Release version resolution for npm packages tracked in git and GitHub."""

__version__ = "0.1.0"
