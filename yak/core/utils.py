"""Shared utility functions for yak."""

from pathlib import PurePath


def format_time(seconds: float) -> str:
    """Format a playback offset as ``m:ss`` (minutes are not wrapped into hours)."""
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"


def file_extension(filename: str) -> str:
    """Return the lower-cased extension of ``filename`` including the dot."""
    return PurePath(filename).suffix.lower()
