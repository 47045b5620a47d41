import logging

import requests
import streamlit as st

from config import DEFAULT_PAGE, CACHE_TTL_SECONDS
from data import (
    build_county_names,
    build_state_names,
    load_county_data,
    load_state_data,
    load_zip_rows,
)
from debug_tools import debug_event, render_debug_panel
from engine import CovidDataEngine
from state import apply_query_params, init_state
from ui_panels import render_counties_table, render_results_display
from ui_sidebar import (
    render_region_kind_toggle,
    render_search_by_toggle,
    render_suggestions,
    render_trending,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@st.cache_resource(ttl=CACHE_TTL_SECONDS, show_spinner="Loading COVID data…")
def get_engine() -> CovidDataEngine:
    county_df = load_county_data()
    state_df = load_state_data()
    return CovidDataEngine(
        county_records=county_df,
        state_records=state_df,
        county_names=build_county_names(county_df),
        state_names=build_state_names(state_df),
        zip_rows=load_zip_rows(),
    )


st.set_page_config(**DEFAULT_PAGE)
init_state()
apply_query_params()
render_debug_panel()
st.title("COVID-19 County & State Tracker")

try:
    engine = get_engine()
except (requests.RequestException, ValueError) as e:
    st.error(f"Could not load COVID data: {e}")
    st.stop()

# -----------------------------
# Sidebar: lookup
# -----------------------------
region_kind = render_region_kind_toggle(default=st.session_state.get("region_kind", "County"))
st.session_state["region_kind"] = region_kind

if region_kind == "County":
    search_by = render_search_by_toggle(default=st.session_state.get("search_by", "Name"))
    st.session_state["search_by"] = search_by
    if search_by == "Zip" and not engine.zip_rows:
        st.sidebar.caption("Zip search is unavailable (no zip crosswalk file).")

    if search_by == "Zip":
        picked = render_suggestions(
            label="Zip code",
            placeholder="e.g. 10001",
            suggest_fn=engine.county_suggestions_by_zip,
            key="county_zip",
        )
        picked_fips = picked.value["fips"] if picked else ""
    else:
        picked = render_suggestions(
            label="County",
            placeholder="e.g. Alameda",
            suggest_fn=engine.county_suggestions_by_name,
            key="county_name",
        )
        picked_fips = picked.value if picked else ""

    if picked_fips and picked_fips != st.session_state["selected_county"]:
        st.session_state["selected_county"] = picked_fips
        st.session_state["selection_source"] = "search"
        debug_event("county_selected", fips=picked_fips, search_by=search_by)
        st.rerun()
else:
    picked = render_suggestions(
        label="State",
        placeholder="e.g. New York",
        suggest_fn=engine.state_suggestions,
        key="state_name",
    )
    if picked and picked.value["fips"] != st.session_state["selected_state"]:
        st.session_state["selected_state"] = picked.value["fips"]
        st.session_state["selection_source"] = "search"
        debug_event("state_selected", **picked.value)
        st.rerun()

st.sidebar.markdown("---")

# -----------------------------
# Sidebar: trending
# -----------------------------
if region_kind == "County":
    days = render_trending(
        title="Trending counties",
        trend_fn=engine.trending_counties,
        default_days=st.session_state.get("trending_days", 7),
        key="trending_counties",
    )
else:
    days = render_trending(
        title="Trending states",
        trend_fn=engine.trending_states,
        default_days=st.session_state.get("trending_days", 7),
        key="trending_states",
    )
st.session_state["trending_days"] = days

# -----------------------------
# Main panel
# -----------------------------
if region_kind == "County":
    fips = st.session_state.get("selected_county", "")
    if not fips:
        st.info("Search for a county in the sidebar, or open one from the trending list.")
    else:
        view = engine.county_data_by_fips(fips)
        debug_event("county_view", fips=fips, rows=len(view.records))
        st.session_state["time_frame"] = render_results_display(
            view, key="county", default_frame=st.session_state.get("time_frame")
        )
else:
    fips = st.session_state.get("selected_state", "")
    if not fips:
        st.info("Search for a state in the sidebar, or open one from the trending list.")
    else:
        view = engine.state_data_by_fips(fips)
        debug_event("state_view", fips=fips, rows=len(view.records))
        st.session_state["time_frame"] = render_results_display(
            view, key="state", default_frame=st.session_state.get("time_frame")
        )
        render_counties_table(engine.counties_by_state(fips), state_name=view.display_name)
