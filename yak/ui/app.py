"""
yak Streamlit UI: main entry point.

Run with: ``streamlit run yak/ui/app.py``
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from yak.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (yak/ui/),
# which removes the project root needed for absolute ``yak.*`` imports.
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

from yak.core.config import get_settings  # noqa: E402
from yak.ui.api_client import get_api_client  # noqa: E402

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="yak",
    page_icon="\U0001f399️",
    layout="centered",
)

# ---------------------------------------------------------------------------
# Session state defaults
# ---------------------------------------------------------------------------
_DEFAULTS = {
    "api_base_url": get_settings().api_base_url,
    "recording_status": "idle",
}

for key, value in _DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = value

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("\U0001f399️ yak")
    st.caption("Upload or record audio, then read along")
    st.divider()
    st.session_state.api_base_url = st.text_input(
        "Backend API URL",
        value=st.session_state.api_base_url,
        help="URL of the yak FastAPI backend server",
    )

    _client = get_api_client(st.session_state.api_base_url)
    _conn_ok, _conn_msg = _client.check_connection()
    if _conn_ok:
        st.success(f"Backend: {_conn_msg}")
    else:
        st.error(f"Backend: {_conn_msg}")

# ---------------------------------------------------------------------------
# Navigation (multipage)
# ---------------------------------------------------------------------------
transcribe_page = st.Page(
    "pages/01_transcribe.py",
    title="Transcribe",
    icon="\U0001f4c4",
    default=True,
)
record_page = st.Page(
    "pages/02_record.py",
    title="Record",
    icon="\U0001f3a4",
)

nav = st.navigation([transcribe_page, record_page])
nav.run()
