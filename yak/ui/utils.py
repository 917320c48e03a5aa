"""UI utility functions."""

import mimetypes

import streamlit as st

from yak.services.audio.recorder import ChunkRecorder
from yak.services.controller import TranscriptSession


def get_session(key: str, recorder: ChunkRecorder | None = None) -> TranscriptSession:
    """Return the ``TranscriptSession`` stored under ``key``, creating it on first use."""
    if key not in st.session_state:
        st.session_state[key] = TranscriptSession(recorder=recorder)
    return st.session_state[key]


def guess_audio_type(filename: str, fallback: str = "audio/mpeg") -> str:
    """Best-effort MIME type for an audio file name."""
    mime, _ = mimetypes.guess_type(filename)
    return mime or fallback
