"""Map a playback timestamp to the transcript segment being spoken."""

from bisect import bisect_right
from collections.abc import Sequence
from operator import attrgetter

from yak.core.models import Segment

_end = attrgetter("end")


def find_segment_index(segments: Sequence[Segment], time: float) -> int:
    """Return the index of the first segment whose ``end`` is after ``time``.

    Binary search over the non-decreasing ``end`` values; among equal ends the
    leftmost match wins. Returns ``len(segments)`` when ``time`` is at or past
    every end, so callers must bounds-check the result (see ``segment_at``).
    """
    return bisect_right(segments, time, key=_end)


def segment_at(segments: Sequence[Segment], time: float) -> Segment | None:
    """Return the segment covering or following ``time``, or None past the end."""
    idx = find_segment_index(segments, time)
    if idx >= len(segments):
        return None
    return segments[idx]
