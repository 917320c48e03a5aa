"""Shared pytest fixtures for the yak test suite.

Provides settings isolation, transcript fixtures, a realistic ``verbose_json`` service body,
and a mock STT provider used across unit and integration tests.
"""

from unittest.mock import AsyncMock

import pytest

from tests.factories import make_transcript
from yak.core.config import get_settings
from yak.core.models import Transcript


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop the cached Settings so env overrides in one test don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Transcript fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def short_transcript():
    """Four segments spread over ~40 seconds (15 s bins)."""
    return make_transcript([(0.0, 4.2), (4.2, 9.8), (16.0, 22.5), (31.0, 40.0)])


@pytest.fixture
def verbose_json():
    """A trimmed hosted-Whisper ``verbose_json`` response body."""
    return {
        "task": "transcribe",
        "language": "english",
        "duration": 12.48,
        "text": " Hello there. This is a short test clip.",
        "segments": [
            {
                "id": 0,
                "seek": 0,
                "start": 0.0,
                "end": 2.5,
                "text": " Hello there.",
                "tokens": [50364, 2425, 456, 13, 50489],
                "temperature": 0.0,
                "avg_logprob": -0.21,
                "compression_ratio": 0.82,
                "no_speech_prob": 0.01,
            },
            {
                "id": 1,
                "seek": 0,
                "start": 2.5,
                "end": 12.48,
                "text": " This is a short test clip.",
                "tokens": [50489, 639, 307, 257, 2099, 1500, 7353, 13, 50989],
                "temperature": 0.0,
                "avg_logprob": -0.35,
                "compression_ratio": 0.82,
                "no_speech_prob": 0.02,
            },
        ],
    }


# ---------------------------------------------------------------------------
# Audio / STT fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_audio_bytes():
    """Opaque bytes standing in for an encoded audio file."""
    return b"ID3\x04\x00\x00" + b"\x00" * 2048


@pytest.fixture
def mock_stt(verbose_json):
    """Create a mock STT provider returning the ``verbose_json`` transcript.

    Returns:
        AsyncMock: A mock implementing the BaseSTT interface.
    """
    from yak.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.transcribe.return_value = Transcript.model_validate(verbose_json)
    return stt
