import io
import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import pandas as pd
import requests
import streamlit as st

from config import (
    C,
    CACHE_TTL_SECONDS,
    COUNTY_CSV_URL,
    COUNTY_REQUIRED_COLS,
    REGION_MERGE_RULES,
    STATE_CSV_URL,
    STATE_REQUIRED_COLS,
    ZIP_COLS,
    ZIP_FIPS_LOCAL_PATH,
    MergeRule,
)
from regions import STATE_ABBREVIATIONS, StateName

logger = logging.getLogger(__name__)


def _setting(name: str, default: str) -> str:
    """Streamlit secrets first, then env var, then the config default."""
    try:
        val = st.secrets.get(name.lower(), None)
        if val:
            return str(val)
    except Exception:
        # No secrets.toml configured
        pass
    return os.environ.get(name, default)


def _read_csv(url: str) -> pd.DataFrame:
    headers = {"User-Agent": "Mozilla/5.0"}
    r = requests.get(url, headers=headers, timeout=30)
    r.raise_for_status()
    return pd.read_csv(io.StringIO(r.text), dtype={C.fips: str})


def validate_records(df: pd.DataFrame, required_cols: Iterable[str]) -> pd.DataFrame:
    """
    Normalize a raw daily-records frame and fail fast on bad rows.

    Raises ValueError for:
      - missing required columns
      - rows with no date or no case count
      - negative cases/deaths
    Missing fips/labels become "" and missing deaths become 0.
    """
    if df is None:
        raise TypeError("records must be a DataFrame, got None")

    missing = sorted(c for c in required_cols if c not in df.columns)
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    out = df.copy()

    bad_dates = int(out[C.date].isna().sum())
    if bad_dates:
        raise ValueError(f"{bad_dates} row(s) have no {C.date!r}")

    out[C.cases] = pd.to_numeric(out[C.cases], errors="coerce")
    bad_cases = int(out[C.cases].isna().sum())
    if bad_cases:
        raise ValueError(f"{bad_cases} row(s) have no numeric {C.cases!r}")

    out[C.deaths] = pd.to_numeric(out[C.deaths], errors="coerce")
    missing_deaths = int(out[C.deaths].isna().sum())
    if missing_deaths:
        logger.warning("Filling %d missing %r value(s) with 0", missing_deaths, C.deaths)
        out[C.deaths] = out[C.deaths].fillna(0)

    out[C.cases] = out[C.cases].astype(int)
    out[C.deaths] = out[C.deaths].astype(int)

    negative = int(((out[C.cases] < 0) | (out[C.deaths] < 0)).sum())
    if negative:
        raise ValueError(f"{negative} row(s) have negative {C.cases!r} or {C.deaths!r}")

    out[C.date] = out[C.date].astype(str).str.strip()
    for col in (C.fips, C.county, C.state):
        if col in out.columns:
            out[col] = out[col].fillna("").astype(str).str.strip()

    # Window finding walks dates from the end; keep same-day rows in feed order.
    out = out.sort_values(C.date, kind="stable").reset_index(drop=True)
    return out


@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def load_county_data() -> pd.DataFrame:
    url = _setting("COVID_COUNTY_CSV_URL", COUNTY_CSV_URL)
    df = validate_records(_read_csv(url), COUNTY_REQUIRED_COLS)
    logger.info("Loaded %d county rows from %s", len(df), url)
    return df


@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def load_state_data() -> pd.DataFrame:
    url = _setting("COVID_STATE_CSV_URL", STATE_CSV_URL)
    df = validate_records(_read_csv(url), STATE_REQUIRED_COLS)
    logger.info("Loaded %d state rows from %s", len(df), url)
    return df


def build_county_names(
    county_records: pd.DataFrame,
    merge_rules: Iterable[MergeRule] = REGION_MERGE_RULES,
) -> Dict[str, str]:
    """
    fips -> county name (last label seen wins). Rows with no fips are skipped.

    Merged regions are reported without a fips, so each rule gets one entry
    under its lowest code to stay searchable.
    """
    named = county_records[county_records[C.fips] != ""]
    names = dict(zip(named[C.fips], named[C.county]))

    for rule in merge_rules:
        names.setdefault(min(rule.codes), rule.display_name)
    return names


def build_state_names(state_records: pd.DataFrame) -> Dict[str, StateName]:
    """fips -> StateName(full, abbreviation)."""
    named = state_records[state_records[C.fips] != ""].drop_duplicates(subset=[C.fips], keep="last")

    out: Dict[str, StateName] = {}
    for fips, full in zip(named[C.fips], named[C.state]):
        out[fips] = StateName(full=full, abbreviation=STATE_ABBREVIATIONS.get(fips, ""))
    return out


def load_zip_rows(path: Path = ZIP_FIPS_LOCAL_PATH) -> List[Tuple[str, ...]]:
    """
    Zip crosswalk rows (zip, fips, city, state, county), sorted by zip.
    Optional: returns [] if the file isn't there.
    """
    path = Path(path)
    if not path.exists():
        logger.info("No zip crosswalk at %s; zip search disabled", path)
        return []

    df = pd.read_csv(path, dtype=str)
    missing = [c for c in ZIP_COLS if c not in df.columns]
    if missing:
        raise ValueError(f"Zip crosswalk missing required columns: {missing}")

    df = df[ZIP_COLS].fillna("").sort_values("zip", kind="stable")
    return [tuple(r) for r in df.itertuples(index=False, name=None)]
