"""regions.py

County / state lookups: display names, per-region record slices and the
county list for a state. No Streamlit code here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

import pandas as pd

from config import C, REGION_MERGE_RULES, MergeRule
from trends import find_window_start


@dataclass(frozen=True)
class StateName:
    full: str
    abbreviation: str


@dataclass(frozen=True)
class RegionView:
    id: str
    records: pd.DataFrame
    display_name: str


# Postal abbreviations keyed by state fips (states, DC and territories in the NYT feed)
STATE_ABBREVIATIONS: Dict[str, str] = {
    "01": "AL", "02": "AK", "04": "AZ", "05": "AR", "06": "CA", "08": "CO",
    "09": "CT", "10": "DE", "11": "DC", "12": "FL", "13": "GA", "15": "HI",
    "16": "ID", "17": "IL", "18": "IN", "19": "IA", "20": "KS", "21": "KY",
    "22": "LA", "23": "ME", "24": "MD", "25": "MA", "26": "MI", "27": "MN",
    "28": "MS", "29": "MO", "30": "MT", "31": "NE", "32": "NV", "33": "NH",
    "34": "NJ", "35": "NM", "36": "NY", "37": "NC", "38": "ND", "39": "OH",
    "40": "OK", "41": "OR", "42": "PA", "44": "RI", "45": "SC", "46": "SD",
    "47": "TN", "48": "TX", "49": "UT", "50": "VT", "51": "VA", "53": "WA",
    "54": "WV", "55": "WI", "56": "WY", "60": "AS", "66": "GU", "69": "MP",
    "72": "PR", "78": "VI",
}


def state_fips_of(county_fips: str) -> str:
    return str(county_fips or "")[:2]


def find_merge_rule(fips: str, merge_rules: Iterable[MergeRule] = REGION_MERGE_RULES) -> Optional[MergeRule]:
    for rule in merge_rules:
        if fips in rule.codes:
            return rule
    return None


def _empty_view(fips: str, records: pd.DataFrame) -> RegionView:
    return RegionView(id=fips, records=records.iloc[0:0].copy(), display_name="")


def county_display_name(
    fips: str,
    county_names: Dict[str, str],
    state_names: Dict[str, StateName],
    merge_rules: Iterable[MergeRule] = REGION_MERGE_RULES,
) -> str:
    """'{county}, {state full name}'. Unknown counties fall back to the fips."""
    rule = find_merge_rule(fips, merge_rules)
    county_name = rule.display_name if rule else county_names.get(fips, fips)

    state = state_names.get(state_fips_of(fips))
    state_full = state.full if state else ""

    return f"{county_name}, {state_full}"


def resolve_county(
    fips: str,
    county_records: pd.DataFrame,
    county_names: Dict[str, str],
    state_names: Dict[str, StateName],
    merge_rules: Iterable[MergeRule] = REGION_MERGE_RULES,
) -> RegionView:
    """
    Records + display name for one county.

    Codes covered by a merge rule resolve to the merged region: records are
    matched on the rule's county label and every code shares one display name.
    """
    if county_records is None:
        raise TypeError("county_records must be a DataFrame, got None")
    if county_records.empty:
        return _empty_view(fips, county_records)

    rule = find_merge_rule(fips, merge_rules)
    if rule:
        mask = county_records[C.county] == rule.label
    else:
        mask = county_records[C.fips] == fips

    return RegionView(
        id=fips,
        records=county_records[mask].copy(),
        display_name=county_display_name(fips, county_names, state_names, merge_rules),
    )


def state_name_by_fips(fips: str, state_names: Dict[str, StateName]) -> Optional[StateName]:
    return state_names.get(fips)


def resolve_state(
    fips: str,
    state_records: pd.DataFrame,
    state_names: Dict[str, StateName],
) -> RegionView:
    if state_records is None:
        raise TypeError("state_records must be a DataFrame, got None")
    if state_records.empty:
        return _empty_view(fips, state_records)

    state = state_names.get(fips)
    return RegionView(
        id=fips,
        records=state_records[state_records[C.fips] == fips].copy(),
        display_name=state.full if state else "",
    )


def counties_by_state(
    state_fips: str,
    county_records: pd.DataFrame,
    href_fn: Callable[[str], str],
) -> List[dict]:
    """Latest day's numbers for every county in a state (fips prefix match)."""
    if county_records is None:
        raise TypeError("county_records must be a DataFrame, got None")

    start = find_window_start(county_records, 1)
    latest = county_records.iloc[start:]
    latest = latest[latest[C.fips].fillna("").astype(str).str.startswith(state_fips)]

    out: List[dict] = []
    for _, row in latest.iterrows():
        fips = row[C.fips]
        out.append(
            {
                "county_name": row[C.county],
                "cases": int(row[C.cases]),
                "deaths": int(row[C.deaths]),
                "href": href_fn(fips),
                "fips": fips,
            }
        )
    return out
