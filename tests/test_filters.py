import pandas as pd
import pytest

from filters import MAX, MONTH, WEEK, compute_overall_stats, slice_time_frame


def _series(n):
    dates = pd.date_range("2021-01-01", periods=n, freq="D").strftime("%Y-%m-%d")
    return pd.DataFrame(
        {
            "date": list(dates),
            "fips": ["06001"] * n,
            "cases": [i * 10 for i in range(n)],
            "deaths": [i for i in range(n)],
        }
    )


def test_slice_time_frame():
    df = _series(40)

    week = slice_time_frame(df, WEEK)
    assert len(week) == 7
    assert week["date"].iloc[-1] == "2021-02-09"

    assert len(slice_time_frame(df, MONTH)) == 30
    assert len(slice_time_frame(df, MAX)) == 40


def test_slice_time_frame_short_series():
    assert len(slice_time_frame(_series(3), MONTH)) == 3


def test_slice_time_frame_unknown():
    with pytest.raises(ValueError):
        slice_time_frame(_series(3), "YEAR")


def test_compute_overall_stats():
    stats = compute_overall_stats(_series(3))
    assert stats == dict(date="2021-01-03", cases=20, deaths=2, new_cases=10, new_deaths=1)


def test_compute_overall_stats_empty():
    assert compute_overall_stats(_series(0))["cases"] == 0
