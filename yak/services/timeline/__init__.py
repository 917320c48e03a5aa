"""
Timeline module - Segment binning and playback synchronization.
"""

from .binner import bin_segments, choose_window
from .locator import find_segment_index, segment_at
from .sync import PlaybackTracker

__all__ = [
    "PlaybackTracker",
    "bin_segments",
    "choose_window",
    "find_segment_index",
    "segment_at",
]
