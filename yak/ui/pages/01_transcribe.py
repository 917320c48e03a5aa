"""
Transcribe page: upload an audio file and read along with playback.

UX flow: upload -> transcribe -> play with synced, clickable transcript.
"""

# Ensure project root is on sys.path (Streamlit page files need this).
import sys as _sys; from pathlib import Path as _Path; _r = str(_Path(__file__).resolve().parents[3]); _r in _sys.path or _sys.path.insert(0, _r)  # noqa: E702,I001

import streamlit as st  # noqa: E402

from yak.core.config import get_settings  # noqa: E402
from yak.services.controller import UploadComplete, UploadFailed  # noqa: E402
from yak.ui.api_client import APIError, get_api_client  # noqa: E402
from yak.ui.components.player import render_player, select_segment  # noqa: E402
from yak.ui.components.transcript import render_transcript  # noqa: E402
from yak.ui.utils import get_session, guess_audio_type  # noqa: E402

SESSION_KEY = "upload_session"

st.header("Transcribe")

session = get_session(SESSION_KEY)
accepted = [ext.lstrip(".") for ext in get_settings().accepted_extensions]
upload = st.file_uploader("Audio file", type=accepted)

if upload is not None and upload.file_id != st.session_state.get("_upload_file_id"):
    st.session_state._upload_file_id = upload.file_id
    session.reset()
    st.session_state.pop(f"{SESSION_KEY}_position", None)
    client = get_api_client(st.session_state.api_base_url)
    with st.spinner("Transcribing..."):
        try:
            transcript = client.transcribe(
                upload.getvalue(),
                upload.name,
                upload.type or guess_audio_type(upload.name),
            )
        except APIError as exc:
            session.handle(UploadFailed(exc.message))
        else:
            session.handle(UploadComplete(transcript))

if upload is not None:
    if session.error:
        st.error(f"Transcription failed: {session.error}")

    render_player(
        session,
        upload.getvalue(),
        upload.type or guess_audio_type(upload.name),
        key=SESSION_KEY,
    )

    if session.transcript is not None:
        render_transcript(
            session.bins,
            session.current_id,
            on_select=lambda segment: select_segment(session, segment, SESSION_KEY),
        )
