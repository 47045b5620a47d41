# state.py
import streamlit as st

from filters import MAX
from routes import COUNTY_PARAM, STATE_PARAM

SESSION_DEFAULTS = {
    "region_kind": "County",  # "County" | "State"
    "selected_county": "",
    "selected_state": "",
    "selection_source": "",  # "search" | "link" | ""
    "time_frame": MAX,
    "trending_days": 7,
    "search_by": "Name",  # "Name" | "Zip"
    # Last ?county= / ?state= values acted on, so a link is applied once.
    "_applied_county_param": "",
    "_applied_state_param": "",
}


def init_state():
    """
    Central place for Streamlit session-state defaults.
    Keeps state keys consistent and prevents regressions when the app grows.
    """
    for k, v in SESSION_DEFAULTS.items():
        st.session_state.setdefault(k, v)


def apply_query_params() -> None:
    """
    Links produced by routes.py land here: ?county=<fips> or ?state=<fips>.

    A param only moves the selection when its value changes; later picks from
    search stick even though the URL still carries the old link.
    """
    qp = st.query_params
    county = str(qp.get(COUNTY_PARAM, "")).strip()
    state = str(qp.get(STATE_PARAM, "")).strip()

    if county and county != st.session_state.get("_applied_county_param"):
        st.session_state["_applied_county_param"] = county
        st.session_state["region_kind"] = "County"
        st.session_state["selected_county"] = county
        st.session_state["selection_source"] = "link"
    elif state and state != st.session_state.get("_applied_state_param"):
        st.session_state["_applied_state_param"] = state
        st.session_state["region_kind"] = "State"
        st.session_state["selected_state"] = state
        st.session_state["selection_source"] = "link"
