"""cogbump: run cog.toml bump hooks around a version bump."""

__version__ = "0.1.0"
