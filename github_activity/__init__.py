"""Fetch and display a GitHub user's public activity."""

__version__ = "0.1.0"
