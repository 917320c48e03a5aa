"""Hosted Whisper STT over the OpenAI-compatible REST API.

Uploads the audio as ``multipart/form-data`` to ``/audio/transcriptions``
with ``response_format=verbose_json`` so the service returns segment-level
timestamps, then validates the body into a ``Transcript``.
"""

import logging

import httpx
from pydantic import ValidationError

from yak.core.config import get_settings
from yak.core.exceptions import TranscriptionError
from yak.core.models import Transcript
from yak.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


class OpenAIWhisperSTT(BaseSTT):
    """Speech-to-text provider backed by the hosted Whisper API.

    Args:
        api_key: Bearer token (falls back to settings if not provided).
        base_url: API root, e.g. ``https://api.openai.com/v1``.
        model: Transcription model name (e.g. "whisper-1").
        timeout: Request timeout in seconds.
        client: Optional pre-built ``httpx.AsyncClient`` (used by tests).
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.openai_api_key
        self._base_url = (base_url or settings.transcription_base_url).rstrip("/")
        self._model = model or settings.transcription_model
        self._default_language = settings.transcription_language or None
        self._client = client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout or settings.transcription_timeout,
        )

    def _build_form(self, **kwargs) -> dict[str, str]:
        """Assemble the non-file form fields for the request."""
        data = {"model": self._model, "response_format": "verbose_json"}
        language = kwargs.get("language") or self._default_language
        if language:
            data["language"] = language
        if kwargs.get("prompt"):
            data["prompt"] = kwargs["prompt"]
        return data

    async def transcribe(
        self,
        audio: bytes,
        filename: str,
        content_type: str | None = None,
        **kwargs,
    ) -> Transcript:
        """Send ``audio`` to the service and return the parsed transcript.

        Raises:
            TranscriptionError: On network failure, non-2xx status, or a body
                that is not a valid verbose transcript.
        """
        logger.info(
            "Transcribing %s (%.1f KB, model=%s)", filename, len(audio) / 1024, self._model
        )
        files = {"file": (filename, audio, content_type or "application/octet-stream")}

        try:
            resp = await self._client.post(
                f"{self._base_url}/audio/transcriptions",
                data=self._build_form(**kwargs),
                files=files,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Transcription service returned %s: %s",
                exc.response.status_code,
                exc.response.text[:200],
            )
            raise TranscriptionError(
                detail=f"Transcription service returned {exc.response.status_code}"
            ) from exc
        except httpx.TimeoutException as exc:
            logger.warning("Transcription request timed out: %s", exc)
            raise TranscriptionError(detail="Transcription service timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("Transcription request failed: %s", exc)
            raise TranscriptionError(detail=f"Transcription request failed: {exc}") from exc

        try:
            transcript = Transcript.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            logger.error("Malformed transcription response: %s", exc)
            raise TranscriptionError(
                detail="Transcription service returned a malformed response"
            ) from exc

        logger.info(
            "Transcription complete: language=%s, segments=%d, duration=%.1fs",
            transcript.language,
            len(transcript.segments),
            transcript.duration,
        )
        return transcript

    async def aclose(self) -> None:
        await self._client.aclose()
