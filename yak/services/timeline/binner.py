"""Group transcript segments into fixed-width display windows.

The window width adapts to the transcript length so that long recordings
produce fewer, wider bins. Only windows that contain at least one segment
are emitted; a silent stretch simply produces a jump in ``Bin.index``.
"""

import math
from collections import defaultdict
from collections.abc import Sequence

from yak.core.exceptions import EmptyTranscriptError
from yak.core.models import Bin, Segment

SHORT_WINDOW = 15
MEDIUM_WINDOW = 30
LONG_WINDOW = 60

SHORT_THRESHOLD = 2 * 60  # seconds; at or below -> SHORT_WINDOW
LONG_THRESHOLD = 15 * 60  # seconds; at or above -> LONG_WINDOW


def choose_window(total_duration: float) -> int:
    """Return the bin width in seconds for a transcript of ``total_duration``."""
    if total_duration >= LONG_THRESHOLD:
        return LONG_WINDOW
    if total_duration > SHORT_THRESHOLD:
        return MEDIUM_WINDOW
    return SHORT_WINDOW


def bin_segments(segments: Sequence[Segment]) -> list[Bin]:
    """Partition time-ordered segments into ascending, non-empty bins.

    Each segment lands in the window containing its ``start``; its ``end``
    may spill into a later window.

    Args:
        segments: Segments sorted ascending by start/end.

    Returns:
        Bins ordered by window index.

    Raises:
        EmptyTranscriptError: If ``segments`` is empty.
    """
    if not segments:
        raise EmptyTranscriptError()

    window = choose_window(segments[-1].end)

    grouped: dict[int, list[Segment]] = defaultdict(list)
    for segment in segments:
        grouped[math.floor(segment.start / window)].append(segment)

    return [
        Bin(index=idx, start=float(idx * window), segments=grouped[idx])
        for idx in sorted(grouped)
    ]
