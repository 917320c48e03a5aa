"""
Transcription REST endpoint.

Accepts a multipart audio upload and forwards it to the configured STT
provider. Nothing is stored: the transcript is returned and forgotten.
"""

import logging
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends, File, UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from yak.core.config import get_settings
from yak.core.exceptions import (
    EmptyFileError,
    FileTooLargeError,
    NoFileError,
    UnsupportedMediaError,
)
from yak.core.models import TranscribeResponse
from yak.core.utils import file_extension
from yak.services.transcription import BaseSTT, create_stt

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transcription"])


async def get_stt() -> AsyncIterator[BaseSTT]:
    """Yield a per-request STT provider and close its HTTP client afterwards."""
    settings = get_settings()
    stt = create_stt(provider=settings.transcription_provider)
    try:
        yield stt
    finally:
        await stt.aclose()


async def _read_upload(file: UploadFile | str | None) -> bytes:
    """Validate the uploaded file and return its bytes.

    Raises:
        NoFileError: No ``file`` part, a plain text field named ``file``, or
            a part without a filename.
        UnsupportedMediaError: Extension outside ``accepted_extensions``.
        EmptyFileError: Zero-byte upload.
        FileTooLargeError: Upload above ``max_upload_mb``.
    """
    if not isinstance(file, StarletteUploadFile) or not file.filename:
        raise NoFileError()

    settings = get_settings()
    accepted = [ext.lower() for ext in settings.accepted_extensions]
    if file_extension(file.filename) not in accepted:
        raise UnsupportedMediaError(file.filename, accepted)

    data = await file.read()
    if not data:
        raise EmptyFileError(file.filename)
    if len(data) > settings.max_upload_mb * 1024 * 1024:
        raise FileTooLargeError(len(data), settings.max_upload_mb)
    return data


@router.post("/transcribe", response_model=TranscribeResponse)
async def transcribe(
    # A form part without a filename arrives as ``str``; accept it so the
    # handler can answer NO_FILE instead of a validation error.
    file: UploadFile | str | None = File(None),
    stt: BaseSTT = Depends(get_stt),
):
    """Transcribe an uploaded audio file into timestamped segments."""
    data = await _read_upload(file)
    logger.info("Received upload %s (%s, %d bytes)", file.filename, file.content_type, len(data))

    transcript = await stt.transcribe(data, filename=file.filename, content_type=file.content_type)
    return TranscribeResponse(results=transcript)
