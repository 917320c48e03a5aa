"""Audio chunk buffering for recordings.

The capture side emits encoded audio chunks on a fixed interval. They are
kept in arrival order until the recording stops, then joined into a single
clip for upload.
"""

import logging

from yak.core.config import get_settings
from yak.core.models import AudioClip

logger = logging.getLogger(__name__)


class ChunkRecorder:
    """Append-only buffer of encoded audio chunks.

    Args:
        chunk_interval: Seconds between chunks emitted by the capture device.
        content_type: MIME type of the encoded chunks.
        filename: Name given to the assembled clip.
    """

    def __init__(
        self,
        chunk_interval: float | None = None,
        content_type: str | None = None,
        filename: str | None = None,
    ) -> None:
        settings = get_settings()
        self.chunk_interval = chunk_interval or settings.recorder_chunk_seconds
        self._content_type = content_type or settings.recorder_mime_type
        self._filename = filename or settings.recorder_filename
        self._chunks: list[bytes] = []

    @property
    def chunk_count(self) -> int:
        return len(self._chunks)

    @property
    def size_bytes(self) -> int:
        """Total bytes buffered across all chunks."""
        return sum(len(c) for c in self._chunks)

    @property
    def approx_duration(self) -> float:
        """Recorded duration estimated from the chunk count."""
        return self.chunk_count * self.chunk_interval

    def add_chunk(self, data: bytes) -> bool:
        """Append a chunk. Zero-size chunks are dropped.

        Returns:
            True if the chunk was buffered.
        """
        if not data:
            return False
        self._chunks.append(data)
        return True

    def snapshot(self) -> AudioClip:
        """Return the audio captured so far without clearing the buffer."""
        return self.assemble()

    def assemble(self, filename: str | None = None, content_type: str | None = None) -> AudioClip:
        """Join all buffered chunks into one clip."""
        clip = AudioClip(
            data=b"".join(self._chunks),
            filename=filename or self._filename,
            content_type=content_type or self._content_type,
        )
        logger.debug("Assembled %d chunks (%d bytes)", self.chunk_count, clip.size)
        return clip

    def reset(self) -> None:
        """Clear the buffer."""
        self._chunks.clear()
