"""Keep the active transcript segment in step with audio playback."""

import logging
from collections.abc import Sequence

from yak.core.models import Segment
from yak.services.timeline.locator import segment_at

logger = logging.getLogger(__name__)

# Seeking exactly to ``start`` can land on the previous segment's end frame.
SEEK_OFFSET = 0.01


class PlaybackTracker:
    """Tracks which segment is active for the current playback position.

    Args:
        segments: Transcript segments sorted ascending by ``end``.
    """

    def __init__(self, segments: Sequence[Segment]) -> None:
        self._segments = segments
        self.current: Segment | None = None

    @property
    def current_id(self) -> int | None:
        return self.current.id if self.current is not None else None

    def update(self, time: float) -> Segment | None:
        """Handle a playback time update and return the active segment.

        The binary search only runs when ``time`` has left the current
        segment's ``[start, end)`` span.
        """
        curr = self.current
        if curr is not None and curr.start <= time < curr.end:
            return curr

        self.current = segment_at(self._segments, time)
        logger.debug("Active segment at %.2fs: %s", time, self.current_id)
        return self.current

    def select(self, segment: Segment) -> float:
        """Make ``segment`` active and return the position the player should seek to."""
        self.current = segment
        return segment.start + SEEK_OFFSET
