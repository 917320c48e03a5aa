"""
Pydantic v2 models shared by the API, the timeline core, and the UI.

Transcript shapes mirror the hosted Whisper ``verbose_json`` response so the
service body can be validated directly.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime


# ---------------------------------------------------------------------------
# Transcript
# ---------------------------------------------------------------------------


class Segment(BaseModel):
    """One timestamped span of recognized speech.

    Recognizer metadata is carried through untouched; unknown keys from the
    service are kept as extra fields.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int
    start: float = Field(ge=0.0)
    end: float
    text: str

    seek: int | None = None
    tokens: list[int] = Field(default_factory=list)
    avg_logprob: float | None = None
    temperature: float | None = None
    no_speech_prob: float | None = None
    compression_ratio: float | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> "Segment":
        # Zero-length segments are allowed: hosted Whisper emits them at the
        # tail of a clip, and the locator never selects them.
        if self.end < self.start:
            raise ValueError(f"segment {self.id} ends before it starts ({self.start} > {self.end})")
        return self


class Transcript(BaseModel):
    """Complete transcription result: ordered segments plus aggregate metadata."""

    model_config = ConfigDict(extra="allow")

    text: str = ""
    language: str = "unknown"
    duration: float = 0.0
    task: str = "transcribe"
    segments: list[Segment] = Field(default_factory=list)


class Bin(BaseModel):
    """A fixed-width display window and the segments that start inside it."""

    model_config = ConfigDict(frozen=True)

    index: int
    start: float
    segments: list[Segment]


class TranscribeResponse(BaseModel):
    """POST /api/transcribe response."""

    results: Transcript


# ---------------------------------------------------------------------------
# Audio
# ---------------------------------------------------------------------------


class AudioClip(BaseModel):
    """A single assembled audio blob ready for upload."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    filename: str
    content_type: str

    @property
    def size(self) -> int:
        return len(self.data)


# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Standard error envelope returned by every error handler."""

    detail: str
    code: str
    timestamp: str
