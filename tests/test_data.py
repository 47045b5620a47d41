import pandas as pd
import pytest

from config import COUNTY_REQUIRED_COLS, STATE_REQUIRED_COLS
from data import build_county_names, build_state_names, load_zip_rows, validate_records


def _raw_county_df(**overrides):
    cols = {
        "date": ["2021-01-02", "2021-01-01", "2021-01-02"],
        "county": ["Alameda", "Alameda", "Unknown"],
        "state": ["California", "California", "California"],
        "fips": ["06001", "06001", None],
        "cases": [120, 100, 7],
        "deaths": [2, 1, None],
    }
    cols.update(overrides)
    return pd.DataFrame(cols)


def test_validate_records_normalizes():
    raw = _raw_county_df()
    out = validate_records(raw, COUNTY_REQUIRED_COLS)

    assert out["date"].tolist() == ["2021-01-01", "2021-01-02", "2021-01-02"]
    # same-day rows keep feed order
    assert out["county"].tolist() == ["Alameda", "Alameda", "Unknown"]
    assert out["fips"].tolist() == ["06001", "06001", ""]
    assert out["deaths"].tolist() == [1, 2, 0]
    assert out["cases"].dtype.kind == "i"

    # input untouched
    assert raw["fips"].isna().sum() == 1


def test_validate_records_missing_columns():
    raw = _raw_county_df().drop(columns=["cases"])
    with pytest.raises(ValueError, match="Missing required columns"):
        validate_records(raw, COUNTY_REQUIRED_COLS)


def test_validate_records_rejects_missing_cases():
    with pytest.raises(ValueError, match="cases"):
        validate_records(_raw_county_df(cases=[1, None, 3]), COUNTY_REQUIRED_COLS)


def test_validate_records_rejects_missing_dates():
    with pytest.raises(ValueError, match="date"):
        validate_records(_raw_county_df(date=["2021-01-01", None, "2021-01-02"]), COUNTY_REQUIRED_COLS)


def test_validate_records_rejects_negative_counts():
    with pytest.raises(ValueError, match="negative"):
        validate_records(_raw_county_df(cases=[1, -5, 3]), COUNTY_REQUIRED_COLS)


def test_validate_records_none():
    with pytest.raises(TypeError):
        validate_records(None, STATE_REQUIRED_COLS)


def test_build_county_names_adds_merged_region():
    df = validate_records(_raw_county_df(), COUNTY_REQUIRED_COLS)
    names = build_county_names(df)

    assert names["06001"] == "Alameda"
    assert "" not in names
    assert names["36005"] == "New York City"


def test_build_state_names_with_abbreviations():
    df = pd.DataFrame(
        {
            "date": ["2021-01-01", "2021-01-01", "2021-01-02"],
            "state": ["California", "Puerto Rico", "California"],
            "fips": ["06", "72", "06"],
            "cases": [1, 2, 3],
            "deaths": [0, 0, 0],
        }
    )
    names = build_state_names(df)

    assert names["06"].full == "California"
    assert names["06"].abbreviation == "CA"
    assert names["72"].abbreviation == "PR"
    assert len(names) == 2


def test_load_zip_rows_missing_file(tmp_path):
    assert load_zip_rows(tmp_path / "nope.csv") == []


def test_load_zip_rows_sorted_and_keeps_leading_zeros(tmp_path):
    p = tmp_path / "zip_fips.csv"
    p.write_text(
        "zip,fips,city,state,county\n"
        "94501,06001,Alameda,CA,Alameda\n"
        "02108,25025,Boston,MA,Suffolk\n"
    )

    assert load_zip_rows(p) == [
        ("02108", "25025", "Boston", "MA", "Suffolk"),
        ("94501", "06001", "Alameda", "CA", "Alameda"),
    ]


def test_load_zip_rows_missing_columns(tmp_path):
    p = tmp_path / "zip_fips.csv"
    p.write_text("zip,fips\n10001,36061\n")

    with pytest.raises(ValueError, match="missing required columns"):
        load_zip_rows(p)
