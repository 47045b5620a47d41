"""debug_tools.py

Lookup trail for support: with `?debug=1` in the URL, every county/state
selection the app makes is kept in session state and listed in a sidebar
expander next to the current selection.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import streamlit as st

from state import SESSION_DEFAULTS

logger = logging.getLogger(__name__)

EVENTS_KEY = "lookup_events"
MAX_EVENTS = 50


def debug_enabled() -> bool:
    return str(st.query_params.get("debug", "")).strip().lower() in ("1", "true")


def debug_event(name: str, **fields: Any) -> None:
    """Log a lookup event; keep the last MAX_EVENTS in session when debugging."""
    logger.debug("%s %s", name, fields)
    if not debug_enabled():
        return

    events = st.session_state.setdefault(EVENTS_KEY, [])
    events.append(
        {
            "at": datetime.now(timezone.utc).strftime("%H:%M:%S"),
            "event": name,
            "region": fields.get("fips", ""),
            "details": fields,
        }
    )
    del events[:-MAX_EVENTS]


def render_debug_panel() -> None:
    if not debug_enabled():
        return

    with st.sidebar.expander("Lookup trail", expanded=False):
        current = {k: st.session_state.get(k) for k in SESSION_DEFAULTS if not k.startswith("_")}
        st.json(current, expanded=False)

        events = st.session_state.get(EVENTS_KEY, [])
        if not events:
            st.caption("No lookups yet.")
            return
        for e in reversed(events[-15:]):
            st.write(f"`{e['at']}` {e['event']} {e['region']}")
