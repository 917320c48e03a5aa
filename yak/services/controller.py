"""Session controller that owns all transcript/playback/recording state.

UI callbacks (player time updates, recorder chunks, upload completions) are
turned into typed events and handled one at a time. Each handler runs to
completion before the next event is looked at, so no locking is needed.

Usage::

    session = TranscriptSession()
    session.handle(UploadComplete(transcript))
    session.handle(TimeUpdate(12.5))
    session.current_id  # -> id of the segment being spoken
"""

import logging
from collections import deque
from dataclasses import dataclass

from yak.core.exceptions import EmptyTranscriptError, RecordingAlreadyActiveError
from yak.core.models import AudioClip, Bin, Segment, Transcript
from yak.services.audio.recorder import ChunkRecorder
from yak.services.timeline import PlaybackTracker, bin_segments

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TimeUpdate:
    """The player reported a new playback position (seconds)."""

    time: float


@dataclass(frozen=True)
class SegmentSelected:
    """The user clicked a segment in the rendered transcript."""

    segment: Segment


@dataclass(frozen=True)
class RecordingStarted:
    """The capture device started producing audio."""


@dataclass(frozen=True)
class ChunkAvailable:
    """The capture device emitted an encoded audio chunk."""

    data: bytes


@dataclass(frozen=True)
class RecordingStopped:
    """The user stopped the recording."""


@dataclass(frozen=True)
class UploadComplete:
    """The transcription service returned a transcript."""

    transcript: Transcript


@dataclass(frozen=True)
class UploadFailed:
    """The transcription request failed."""

    error: str


Event = (
    TimeUpdate
    | SegmentSelected
    | RecordingStarted
    | ChunkAvailable
    | RecordingStopped
    | UploadComplete
    | UploadFailed
)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class TranscriptSession:
    """Single owner of the UI state for one playback/recording session.

    Args:
        recorder: Chunk buffer used while recording (a fresh one by default).
    """

    def __init__(self, recorder: ChunkRecorder | None = None) -> None:
        self._recorder = recorder or ChunkRecorder()
        self._pending: deque[Event] = deque()

        self.transcript: Transcript | None = None
        self.bins: list[Bin] = []
        self.tracker: PlaybackTracker | None = None
        self.seek_to: float | None = None

        self.recording = False
        self.clip: AudioClip | None = None
        self.error: str | None = None

    # -- read-only views --

    @property
    def current_segment(self) -> Segment | None:
        return self.tracker.current if self.tracker is not None else None

    @property
    def current_id(self) -> int | None:
        return self.tracker.current_id if self.tracker is not None else None

    @property
    def recorder(self) -> ChunkRecorder:
        return self._recorder

    # -- event loop --

    def post(self, event: Event) -> None:
        """Queue an event for the next ``process_pending()`` call."""
        self._pending.append(event)

    def process_pending(self) -> int:
        """Handle every queued event in arrival order. Returns the count handled."""
        handled = 0
        while self._pending:
            self.handle(self._pending.popleft())
            handled += 1
        return handled

    def handle(self, event: Event) -> None:
        """Apply one event to the session state."""
        if isinstance(event, TimeUpdate):
            self._on_time_update(event)
        elif isinstance(event, SegmentSelected):
            self._on_segment_selected(event)
        elif isinstance(event, RecordingStarted):
            self._on_recording_started()
        elif isinstance(event, ChunkAvailable):
            self._on_chunk(event)
        elif isinstance(event, RecordingStopped):
            self._on_recording_stopped()
        elif isinstance(event, UploadComplete):
            self._on_upload_complete(event)
        elif isinstance(event, UploadFailed):
            self._on_upload_failed(event)
        else:
            raise TypeError(f"Unknown session event: {event!r}")

    def take_seek(self) -> float | None:
        """Return the pending seek target once, then clear it."""
        seek, self.seek_to = self.seek_to, None
        return seek

    def reset(self) -> None:
        """Return to the idle state, dropping transcript, clip and buffered audio."""
        self._recorder.reset()
        self._pending.clear()
        self.transcript = None
        self.bins = []
        self.tracker = None
        self.seek_to = None
        self.recording = False
        self.clip = None
        self.error = None

    # -- handlers --

    def _on_time_update(self, event: TimeUpdate) -> None:
        if self.tracker is None:
            return
        self.tracker.update(event.time)

    def _on_segment_selected(self, event: SegmentSelected) -> None:
        if self.tracker is None:
            return
        self.seek_to = self.tracker.select(event.segment)

    def _on_recording_started(self) -> None:
        if self.recording:
            raise RecordingAlreadyActiveError()
        self._recorder.reset()
        self.clip = None
        self.recording = True
        logger.info("Recording started (chunk interval %.1fs)", self._recorder.chunk_interval)

    def _on_chunk(self, event: ChunkAvailable) -> None:
        if not self.recording:
            logger.warning("Dropping %d-byte chunk: no active recording", len(event.data))
            return
        self._recorder.add_chunk(event.data)

    def _on_recording_stopped(self) -> None:
        if not self.recording:
            return
        self.recording = False
        self.clip = self._recorder.assemble()
        logger.info(
            "Recording stopped: %d chunks, %d bytes",
            self._recorder.chunk_count,
            self.clip.size,
        )

    def _on_upload_complete(self, event: UploadComplete) -> None:
        transcript = event.transcript
        try:
            bins = bin_segments(transcript.segments)
        except EmptyTranscriptError as exc:
            logger.warning("Ignoring transcript without segments")
            self.error = exc.detail
            return

        self.transcript = transcript
        self.bins = bins
        self.tracker = PlaybackTracker(transcript.segments)
        self.seek_to = None
        self.error = None
        logger.info(
            "Loaded transcript: %d segments in %d bins (language=%s)",
            len(transcript.segments),
            len(bins),
            transcript.language,
        )

    def _on_upload_failed(self, event: UploadFailed) -> None:
        logger.error("Transcription failed: %s", event.error)
        self.error = event.error
