"""Scavenger hunt backend: teams, questions, answer checks and clue hand-out."""

__version__ = "0.1.0"
