"""
Synced audio player component.

Streamlit's audio element does not report its position back to Python, so
the playhead is mirrored by a slider: moving it (or clicking a segment)
feeds the session the same events a live player would.
"""

import streamlit as st

from yak.core.models import Segment
from yak.core.utils import format_time
from yak.services.controller import SegmentSelected, TimeUpdate, TranscriptSession


def render_player(session: TranscriptSession, audio: bytes, mime_type: str, key: str) -> None:
    """Render the audio element and the playback-position control."""
    # A segment click seeks once; every other rerun starts from the slider.
    seek = session.take_seek()
    if seek is None:
        start = st.session_state.get(f"{key}_position", 0.0)
    else:
        start = seek
    st.audio(audio, format=mime_type, start_time=int(start), autoplay=seek is not None)

    if session.transcript is None:
        return

    duration = max(session.transcript.duration, session.transcript.segments[-1].end)

    def _on_position_change() -> None:
        session.handle(TimeUpdate(st.session_state[f"{key}_position"]))

    st.session_state.setdefault(f"{key}_position", 0.0)
    st.slider(
        "Playback position",
        min_value=0.0,
        max_value=float(duration),
        step=0.5,
        key=f"{key}_position",
        format="%.1f s",
        on_change=_on_position_change,
    )

    current = session.current_segment
    if current is not None:
        st.caption(f"Now at {format_time(current.start)}: {current.text.strip()}")


def select_segment(session: TranscriptSession, segment: Segment, key: str) -> None:
    """Click handler: seek the player to ``segment`` and sync the slider."""
    session.handle(SegmentSelected(segment))
    st.session_state[f"{key}_position"] = float(session.seek_to or 0.0)
