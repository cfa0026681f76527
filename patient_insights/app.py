"""
Patient Insights - Dashboard Entry Point
========================================

Streamlit page shell for the Patient Insights dashboard.

On the first run of a browser session a ``SnapshotLoader`` is created and
stored in ``st.session_state``; it starts the single background fetch of the
snapshot.  While the fetch is in flight the page paints only the loading
placeholder, then blocks (bounded by ``FETCH_TIMEOUT``) until the fetch
resolves and reruns itself so the next pass renders the loaded view or the
error card.

Usage:
    streamlit run patient_insights/app.py --server.port 8501
"""

import sys
from pathlib import Path

# Make ``patient_insights`` importable when Streamlit runs this file directly
# from a source checkout.
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st

from patient_insights.utils.config import configure_logging
from patient_insights.utils.data_loader import Loading, SnapshotLoader
from patient_insights.utils.styles import inject_css
from patient_insights.view import render

# Page config must be the first Streamlit call.
inject_css()
configure_logging()

DEFAULTS = {
    'loader': None,    # SnapshotLoader for this session (created below)
}
for key, default in DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = default

if st.session_state.loader is None:
    st.session_state.loader = SnapshotLoader()

loader = st.session_state.loader
loader.start()
state = loader.state

render(state, on_retry=loader.retry)

if isinstance(state, Loading):
    loader.wait()
    st.rerun()
