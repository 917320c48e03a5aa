"""
Transcript display component.

Renders bins as time-labelled paragraphs of clickable segments. The active
segment is highlighted; clicking any segment hands it to ``on_select``.
"""

from collections.abc import Callable
from dataclasses import dataclass

import streamlit as st

from yak.core.models import Bin, Segment
from yak.core.utils import format_time


@dataclass(frozen=True)
class SegmentView:
    """Display-ready view of one segment."""

    segment: Segment
    text: str
    active: bool


@dataclass(frozen=True)
class BinView:
    """Display-ready view of one bin."""

    label: str
    segments: list[SegmentView]


def build_views(bins: list[Bin], current_id: int | None = None) -> list[BinView]:
    """Turn bins into label/text/highlight tuples, trimming segment text."""
    return [
        BinView(
            label=format_time(b.start),
            segments=[
                SegmentView(segment=s, text=s.text.strip(), active=s.id == current_id)
                for s in b.segments
            ],
        )
        for b in bins
    ]


def render_transcript(
    bins: list[Bin],
    current_id: int | None = None,
    on_select: Callable[[Segment], None] | None = None,
) -> None:
    """Render the transcript bins.

    Args:
        bins: Ordered, non-empty bins from ``bin_segments``.
        current_id: Id of the segment under the playhead, if any.
        on_select: Called with the clicked segment.
    """
    for view in build_views(bins, current_id):
        col_time, col_text = st.columns([1, 9])
        with col_time:
            st.caption(view.label)
        with col_text:
            for seg in view.segments:
                st.button(
                    seg.text,
                    key=f"segment_{seg.segment.id}",
                    type="primary" if seg.active else "secondary",
                    on_click=on_select,
                    args=(seg.segment,) if on_select else None,
                    disabled=on_select is None,
                )
