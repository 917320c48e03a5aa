"""
Abstract base class for Speech-to-Text providers.

All STT implementations must implement this interface, enabling
provider-agnostic transcription in the API layer.
"""

from abc import ABC, abstractmethod

from yak.core.models import Transcript


class BaseSTT(ABC):
    """Interface that every STT provider must implement."""

    @abstractmethod
    async def transcribe(
        self,
        audio: bytes,
        filename: str,
        content_type: str | None = None,
        **kwargs,
    ) -> Transcript:
        """Transcribe an encoded audio file to timestamped segments.

        Args:
            audio: Raw bytes of the uploaded file (any accepted container).
            filename: Original file name; the service sniffs the format from it.
            content_type: MIME type of ``audio``, if known.
            **kwargs: Provider-specific options (language, prompt, etc.).

        Returns:
            Transcript with ordered segments and aggregate metadata.
        """

    async def aclose(self) -> None:
        """Release network resources held by the provider."""
