"""Diary mood classification and summary pipeline."""

__version__ = "0.1.0"
