"""Showcase: anonymous project reviews and leaderboards."""

__version__ = "0.1.0"
