"""
Recorder component: capture audio, upload it, show the transcript.

States: idle -> processing -> completed
Uses ``st.audio_input()`` which hands back one finished clip, so a capture is
replayed into the session as start, fixed-interval chunks, stop. A live
preview transcribes the audio buffered so far while the chunks are fed in.
"""

import hashlib
import io
import logging
import wave
from collections.abc import Callable

import streamlit as st

from yak.core.config import get_settings
from yak.core.models import Transcript
from yak.services.audio.recorder import ChunkRecorder
from yak.services.controller import (
    ChunkAvailable,
    RecordingStarted,
    RecordingStopped,
    TranscriptSession,
    UploadComplete,
    UploadFailed,
)
from yak.ui.api_client import APIClient, APIError, get_api_client
from yak.ui.components.transcript import render_transcript
from yak.ui.utils import get_session

logger = logging.getLogger(__name__)

SESSION_KEY = "record_session"


def _get_record_session() -> TranscriptSession:
    settings = get_settings()
    recorder = ChunkRecorder(
        chunk_interval=settings.recorder_chunk_seconds,
        content_type="audio/wav",
        filename="recording.wav",
    )
    return get_session(SESSION_KEY, recorder=recorder)


def _chunk_size(audio_bytes: bytes, interval: float) -> int:
    """Bytes covering ``interval`` seconds of a WAV clip (the whole clip otherwise)."""
    try:
        with wave.open(io.BytesIO(audio_bytes)) as wav:
            byte_rate = wav.getframerate() * wav.getsampwidth() * wav.getnchannels()
    except (wave.Error, EOFError):
        return max(1, len(audio_bytes))
    return max(1, int(byte_rate * interval))


def _process_audio(
    session: TranscriptSession,
    audio_bytes: bytes,
    client: APIClient,
    on_preview: Callable[[Transcript], None] | None = None,
) -> None:
    """Feed the captured clip through the session and transcribe it.

    The clip is replayed as ``chunk_interval``-sized chunks. After every chunk
    but the last, the audio buffered so far is transcribed and handed to
    ``on_preview``. The finished clip is then uploaded for the real transcript.
    """
    size = _chunk_size(audio_bytes, session.recorder.chunk_interval)
    chunks = [audio_bytes[i : i + size] for i in range(0, len(audio_bytes), size)] or [b""]

    session.handle(RecordingStarted())
    for n, chunk in enumerate(chunks, start=1):
        session.handle(ChunkAvailable(chunk))
        if on_preview is not None and n < len(chunks):
            _preview(session, client, on_preview)
    session.handle(RecordingStopped())

    clip = session.clip
    if clip is None or not clip.data:
        session.handle(UploadFailed("No audio was captured"))
        return

    try:
        transcript = client.transcribe(clip.data, clip.filename, clip.content_type)
    except APIError as exc:
        session.handle(UploadFailed(exc.message))
        return
    session.handle(UploadComplete(transcript))


def _preview(
    session: TranscriptSession,
    client: APIClient,
    on_preview: Callable[[Transcript], None],
) -> None:
    snapshot = session.recorder.snapshot()
    try:
        transcript = client.transcribe(snapshot.data, snapshot.filename, snapshot.content_type)
    except APIError as exc:
        # Only the final upload decides success; a missed preview is not shown.
        logger.warning(
            "Live preview failed after %d chunks: %s", session.recorder.chunk_count, exc.message
        )
        return
    on_preview(transcript)


def render_recorder() -> None:
    """Render the full recording UI based on current session state."""
    session = _get_record_session()
    status = st.session_state.recording_status

    if status == "idle":
        _render_idle()
    elif status == "processing":
        _render_processing(session)
    elif status == "completed":
        _render_completed(session)


def _render_idle() -> None:
    """Show the audio recorder."""
    audio = st.audio_input("Record audio")
    if audio is None:
        return

    audio_bytes = audio.getvalue()
    digest = hashlib.sha1(audio_bytes).hexdigest()  # noqa: S324
    if digest == st.session_state.get("_last_recording_digest"):
        return

    st.session_state._last_recording_digest = digest
    st.session_state._pending_audio = audio_bytes
    st.session_state.recording_status = "processing"
    st.rerun()


def _render_processing(session: TranscriptSession) -> None:
    """Upload the captured audio with a spinner."""
    audio_bytes = st.session_state.pop("_pending_audio", None)
    if audio_bytes is None:
        st.session_state.recording_status = "idle"
        st.rerun()
        return

    client = get_api_client(st.session_state.api_base_url)
    preview = st.empty()

    def _show_preview(transcript: Transcript) -> None:
        preview.markdown(f"*{transcript.text.strip()}*")

    with st.spinner("Transcribing..."):
        _process_audio(session, audio_bytes, client, on_preview=_show_preview)
    preview.empty()

    st.session_state.recording_status = "completed"
    st.rerun()


def _render_completed(session: TranscriptSession) -> None:
    """Show the recorded clip and its transcript."""
    if session.clip is not None:
        st.audio(session.clip.data, format=session.clip.content_type)

    if session.error:
        st.error(f"Transcription failed: {session.error}")
    elif session.transcript is not None:
        st.subheader("Transcript")
        st.markdown(f"**Detected language**: {session.transcript.language}")
        render_transcript(session.bins, session.current_id)

    if st.button("New Recording"):
        session.reset()
        st.session_state.recording_status = "idle"
        st.rerun()
