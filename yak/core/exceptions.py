"""
yak exception hierarchy.

All application-specific exceptions inherit from YakError,
enabling centralized error handling in the API middleware layer.
"""

from datetime import UTC, datetime


class YakError(Exception):
    """Base exception for all yak errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "YAK_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class NoFileError(YakError):
    """Raised when a transcription request carries no audio file."""

    def __init__(self) -> None:
        super().__init__(detail="no file found", code="NO_FILE", status_code=400)


class EmptyFileError(YakError):
    """Raised when the uploaded audio file has zero bytes."""

    def __init__(self, filename: str) -> None:
        super().__init__(
            detail=f"Uploaded file is empty: {filename}",
            code="EMPTY_FILE",
            status_code=400,
        )


class UnsupportedMediaError(YakError):
    """Raised when the uploaded file extension is not an accepted audio format."""

    def __init__(self, filename: str, accepted: list[str]) -> None:
        super().__init__(
            detail=f"Unsupported audio format: {filename} (accepted: {', '.join(accepted)})",
            code="UNSUPPORTED_MEDIA",
            status_code=415,
        )


class FileTooLargeError(YakError):
    """Raised when the uploaded file exceeds the configured size limit."""

    def __init__(self, size_bytes: int, limit_mb: int) -> None:
        super().__init__(
            detail=f"File too large: {size_bytes / (1024 * 1024):.1f} MB (limit {limit_mb} MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
        )


class TranscriptionError(YakError):
    """Raised when the hosted STT service fails or returns an unusable body."""

    def __init__(self, detail: str = "Transcription failed") -> None:
        super().__init__(
            detail=detail,
            code="TRANSCRIPTION_ERROR",
            status_code=502,
        )


class EmptyTranscriptError(YakError):
    """Raised when a transcript with no segments reaches binning or rendering."""

    def __init__(self, detail: str = "Transcript has no segments") -> None:
        super().__init__(detail=detail, code="EMPTY_TRANSCRIPT", status_code=422)


class RecordingAlreadyActiveError(YakError):
    """Raised when trying to start a recording while one is already active."""

    def __init__(self) -> None:
        super().__init__(
            detail="A recording is already active",
            code="RECORDING_ALREADY_ACTIVE",
            status_code=409,
        )
