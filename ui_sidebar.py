# ui_sidebar.py
from typing import List, Optional

import pandas as pd
import streamlit as st

from config import TRENDING_TIME_FRAMES
from search import SearchSuggestion
from trends import TrendEntry, format_trend


def render_region_kind_toggle(default: str = "County") -> str:
    """Sidebar toggle between County and State lookups."""
    st.sidebar.markdown("## Look up")
    options = ["County", "State"]
    index = 0 if default not in options else options.index(default)
    return st.sidebar.radio(
        "Region type",
        options,
        index=index,
        horizontal=True,
        label_visibility="collapsed",
    )


def render_search_by_toggle(default: str = "Name") -> str:
    options = ["Name", "Zip"]
    index = 0 if default not in options else options.index(default)
    return st.sidebar.radio("Search by", options, index=index, horizontal=True)


def render_suggestions(
    *,
    label: str,
    placeholder: str,
    suggest_fn,
    key: str,
) -> Optional[SearchSuggestion]:
    """
    Search box + up to 5 suggestion buttons.

    Returns the clicked suggestion (or None).
    """
    term = st.sidebar.text_input(label, placeholder=placeholder, key=f"{key}_term")
    if not term.strip():
        st.sidebar.caption("Start typing to see suggestions.")
        return None

    suggestions: List[SearchSuggestion] = suggest_fn(term.strip())
    if not suggestions:
        st.sidebar.info("No matches.")
        return None

    for i, s in enumerate(suggestions):
        if st.sidebar.button(s.display_text, key=f"{key}_suggestion_{i}", use_container_width=True):
            return s
    return None


def render_trending(
    *,
    title: str,
    trend_fn,
    default_days: int = 7,
    top_n: int = 10,
    key: str,
) -> int:
    """
    Sidebar "trending" list. Shows the fastest risers (end of the ascending
    ranking), undefined trends excluded from the top list.

    Returns the chosen number of days.
    """
    st.sidebar.markdown(f"## {title}")

    index = TRENDING_TIME_FRAMES.index(default_days) if default_days in TRENDING_TIME_FRAMES else 0
    days = st.sidebar.selectbox(
        "Time frame",
        TRENDING_TIME_FRAMES,
        index=index,
        format_func=lambda d: f"Last {d} days",
        key=f"{key}_days",
    )

    entries: List[TrendEntry] = trend_fn(days)
    defined = [e for e in entries if e.is_defined]
    if not defined:
        st.sidebar.info("Not enough data to rank yet.")
        return days

    top = list(reversed(defined[-top_n:]))
    rows = pd.DataFrame(
        [
            {
                "Region": e.name,
                "Trend": format_trend(e),
                "Cases (start)": e.baseline,
                "Cases (peak)": e.peak,
                "Link": e.href,
            }
            for e in top
        ]
    )

    st.sidebar.dataframe(
        rows,
        use_container_width=True,
        hide_index=True,
        column_config={"Link": st.column_config.LinkColumn("Link", display_text="Open")},
    )

    undefined = len(entries) - len(defined)
    if undefined:
        st.sidebar.caption(f"{undefined} region(s) started at 0 cases and have no % trend.")

    st.sidebar.markdown("---")
    return days
