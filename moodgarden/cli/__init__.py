"""CLI commands for MoodGarden.

This package provides the command-line interface for MoodGarden,
including planting moods, viewing the garden, history and stats, and
chatting with the garden's guardian.
"""

from moodgarden.cli.main import cli, main

__all__ = ["cli", "main"]
