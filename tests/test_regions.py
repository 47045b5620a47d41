import pandas as pd
import pytest
from pandas.testing import assert_frame_equal

from regions import (
    StateName,
    counties_by_state,
    county_display_name,
    resolve_county,
    resolve_state,
)

NYC_CODES = ["36061", "36047", "36081", "36005", "36085"]

COUNTY_NAMES = {"06001": "Alameda", "06075": "San Francisco", "36061": "New York"}
STATE_NAMES = {"06": StateName("California", "CA"), "36": StateName("New York", "NY")}


def _county_df():
    return pd.DataFrame(
        {
            "date": ["2021-01-01", "2021-01-01", "2021-01-01", "2021-01-02", "2021-01-02", "2021-01-02"],
            "county": ["Alameda", "San Francisco", "New York City", "Alameda", "San Francisco", "New York City"],
            "state": ["California", "California", "New York", "California", "California", "New York"],
            "fips": ["06001", "06075", "", "06001", "06075", ""],
            "cases": [100, 50, 1000, 120, 55, 1100],
            "deaths": [1, 0, 10, 2, 0, 11],
        }
    )


def _state_df():
    return pd.DataFrame(
        {
            "date": ["2021-01-01", "2021-01-01", "2021-01-02", "2021-01-02"],
            "state": ["California", "New York", "California", "New York"],
            "fips": ["06", "36", "06", "36"],
            "cases": [150, 1000, 175, 1100],
            "deaths": [1, 10, 2, 11],
        }
    )


def test_every_borough_resolves_to_the_same_region():
    df = _county_df()
    views = [resolve_county(code, df, COUNTY_NAMES, STATE_NAMES) for code in NYC_CODES]

    assert {v.display_name for v in views} == {"New York City, New York"}
    for v in views[1:]:
        assert_frame_equal(v.records, views[0].records)
    assert views[0].records["cases"].tolist() == [1000, 1100]


def test_resolve_county_regular():
    view = resolve_county("06001", _county_df(), COUNTY_NAMES, STATE_NAMES)

    assert view.id == "06001"
    assert view.display_name == "Alameda, California"
    assert view.records["cases"].tolist() == [100, 120]


def test_resolve_county_unknown_fips_does_not_raise():
    view = resolve_county("99999", _county_df(), COUNTY_NAMES, STATE_NAMES)
    assert view.records.empty
    assert view.display_name == "99999, "


def test_resolve_county_empty_dataset():
    view = resolve_county("06001", _county_df().iloc[0:0], COUNTY_NAMES, STATE_NAMES)
    assert view.records.empty
    assert view.display_name == ""


def test_resolve_county_none_dataset_is_a_contract_violation():
    with pytest.raises(TypeError):
        resolve_county("06001", None, COUNTY_NAMES, STATE_NAMES)


def test_county_display_name_for_merged_region_ignores_name_table():
    assert county_display_name("36061", COUNTY_NAMES, STATE_NAMES) == "New York City, New York"


def test_resolve_state():
    view = resolve_state("36", _state_df(), STATE_NAMES)
    assert view.display_name == "New York"
    assert view.records["cases"].tolist() == [1000, 1100]

    unknown = resolve_state("99", _state_df(), STATE_NAMES)
    assert unknown.display_name == ""
    assert unknown.records.empty

    empty = resolve_state("36", _state_df().iloc[0:0], STATE_NAMES)
    assert empty.display_name == ""


def test_counties_by_state_uses_latest_day():
    out = counties_by_state("06", _county_df(), href_fn=lambda f: f"?county={f}")

    assert out == [
        {"county_name": "Alameda", "cases": 120, "deaths": 2, "href": "?county=06001", "fips": "06001"},
        {"county_name": "San Francisco", "cases": 55, "deaths": 0, "href": "?county=06075", "fips": "06075"},
    ]


def test_resolvers_do_not_mutate_input():
    df = _county_df()
    before = df.copy()

    first = resolve_county("06001", df, COUNTY_NAMES, STATE_NAMES)
    second = resolve_county("06001", df, COUNTY_NAMES, STATE_NAMES)

    assert first.display_name == second.display_name
    assert_frame_equal(first.records, second.records)
    assert_frame_equal(df, before)
