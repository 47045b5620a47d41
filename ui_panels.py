import altair as alt
import pandas as pd
import streamlit as st

from config import C
from filters import MAX, TIME_FRAMES, compute_overall_stats, slice_time_frame
from regions import RegionView

NYT_ATTRIBUTION = (
    "Data from [The New York Times](https://github.com/nytimes/covid-19-data), "
    "based on reports from state and local health agencies."
)


def render_attribution() -> None:
    st.caption(NYT_ATTRIBUTION)


def _bar_chart(records: pd.DataFrame) -> alt.Chart:
    chart_df = records[[C.date, C.cases, C.deaths]].copy()
    chart_df[C.date] = pd.to_datetime(chart_df[C.date], errors="coerce")

    return (
        alt.Chart(chart_df)
        .mark_bar()
        .encode(
            x=alt.X(f"{C.date}:T", title="Date"),
            y=alt.Y(f"{C.cases}:Q", title="Cases"),
            tooltip=[
                alt.Tooltip(f"{C.date}:T", title="Date"),
                alt.Tooltip(f"{C.cases}:Q", title="Cases", format=","),
                alt.Tooltip(f"{C.deaths}:Q", title="Deaths", format=","),
            ],
        )
        .properties(height=360)
    )


def render_results_display(view: RegionView, *, key: str, default_frame: str = MAX) -> str:
    """
    Region panel:
      - Title + latest totals
      - Time frame selector (7 days / 30 days / Max)
      - Cases bar chart
      - Attribution

    Returns the chosen time frame id.
    """
    if view.records is None or view.records.empty:
        st.info("No data for this region yet.")
        return default_frame

    st.markdown(f"### {view.display_name}")

    stats = compute_overall_stats(view.records)
    c1, c2, c3 = st.columns(3)
    c1.metric("Cases", f"{stats['cases']:,}", f"{stats['new_cases']:+,}")
    c2.metric("Deaths", f"{stats['deaths']:,}", f"{stats['new_deaths']:+,}", delta_color="inverse")
    c3.metric("As of", stats["date"])

    frame_ids = list(TIME_FRAMES)
    frame_id = st.radio(
        "Time frame",
        frame_ids,
        index=frame_ids.index(default_frame) if default_frame in frame_ids else 0,
        format_func=lambda f: TIME_FRAMES[f].label,
        horizontal=True,
        key=f"{key}_time_frame",
        label_visibility="collapsed",
    )

    st.altair_chart(_bar_chart(slice_time_frame(view.records, frame_id)), use_container_width=True)
    render_attribution()
    return frame_id


def render_counties_table(counties: list, *, state_name: str) -> None:
    """Latest numbers for every county of the selected state."""
    st.markdown(f"#### Counties in {state_name}" if state_name else "#### Counties")

    if not counties:
        st.info("No county data for this state.")
        return

    df = pd.DataFrame(counties).rename(
        columns={"county_name": "County", "cases": "Cases", "deaths": "Deaths", "href": "Link"}
    )
    df = df.sort_values("Cases", ascending=False)

    st.dataframe(
        df[["County", "Cases", "Deaths", "Link"]],
        use_container_width=True,
        hide_index=True,
        column_config={"Link": st.column_config.LinkColumn("Link", display_text="Open")},
    )
