from streamlit.testing.v1 import AppTest

from debug_tools import EVENTS_KEY, MAX_EVENTS


def _link_then_search_app():
    import streamlit as st

    from state import apply_query_params, init_state

    init_state()
    apply_query_params()

    if st.button("Pick Alameda"):
        st.session_state["selected_county"] = "06001"
        st.session_state["selection_source"] = "search"
        st.rerun()


def _debug_app():
    import streamlit as st

    from debug_tools import debug_event, render_debug_panel
    from state import init_state

    init_state()
    if st.button("Many lookups"):
        for i in range(60):
            debug_event("county_view", fips=f"{i:05d}")
    render_debug_panel()


def test_link_selects_county_once_and_search_pick_sticks():
    at = AppTest.from_function(_link_then_search_app)
    at.query_params["county"] = "36061"
    at.run()

    assert at.session_state["selected_county"] == "36061"
    assert at.session_state["selection_source"] == "link"

    at.button[0].click().run()

    assert at.session_state["selected_county"] == "06001"
    assert at.session_state["selection_source"] == "search"


def test_state_link_switches_region_kind():
    at = AppTest.from_function(_link_then_search_app)
    at.query_params["state"] = "06"
    at.run()

    assert at.session_state["region_kind"] == "State"
    assert at.session_state["selected_state"] == "06"


def test_debug_events_are_recorded_and_capped():
    at = AppTest.from_function(_debug_app)
    at.query_params["debug"] = "1"
    at.run()
    at.button[0].click().run()

    events = at.session_state[EVENTS_KEY]
    assert len(events) == MAX_EVENTS
    assert events[0]["region"] == "00010"
    assert events[-1]["region"] == "00059"
    assert events[-1]["event"] == "county_view"


def test_debug_events_off_without_query_param():
    at = AppTest.from_function(_debug_app)
    at.run()
    at.button[0].click().run()

    assert EVENTS_KEY not in at.session_state
