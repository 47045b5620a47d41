"""engine.py

CovidDataEngine: the one object the UI talks to.

Datasets and lookup tables are passed in explicitly and checked once at
construction; every query after that is a pure read over them. Keep this
file free of Streamlit code.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from config import (
    C,
    COUNTY_REQUIRED_COLS,
    REGION_MERGE_RULES,
    STATE_REQUIRED_COLS,
    MergeRule,
)
from regions import (
    RegionView,
    StateName,
    counties_by_state,
    resolve_county,
    resolve_state,
    state_fips_of,
    state_name_by_fips,
)
from routes import county_results_href, state_results_href
from search import (
    SearchSuggestion,
    county_suggestions_by_name,
    county_suggestions_by_zip,
    sorted_county_names,
    state_suggestions,
)
from trends import TrendEntry, rank_trends

logger = logging.getLogger(__name__)


def _require_frame(name: str, df, required_cols: Iterable[str]) -> None:
    if not isinstance(df, pd.DataFrame):
        raise TypeError(f"{name} must be a pandas DataFrame, got {type(df).__name__}")
    missing = sorted(c for c in required_cols if c not in df.columns)
    if missing:
        raise ValueError(f"{name} is missing required columns: {missing}")


class CovidDataEngine:
    def __init__(
        self,
        county_records: pd.DataFrame,
        state_records: pd.DataFrame,
        county_names: Dict[str, str],
        state_names: Dict[str, StateName],
        zip_rows: Optional[List[Tuple[str, ...]]] = None,
        merge_rules: Iterable[MergeRule] = REGION_MERGE_RULES,
    ):
        _require_frame("county_records", county_records, COUNTY_REQUIRED_COLS)
        _require_frame("state_records", state_records, STATE_REQUIRED_COLS)
        if county_names is None or state_names is None:
            raise TypeError("county_names and state_names are required")

        self.county_records = county_records
        self.state_records = state_records
        self.county_names = county_names
        self.state_names = state_names
        self.zip_rows = list(zip_rows or [])
        self.merge_rules = tuple(merge_rules)

        self._check_state_coverage()

        self.sorted_county_names = sorted_county_names(county_names)
        logger.info(
            "Engine ready: %d county rows, %d state rows, %d counties, %d states, %d zips",
            len(county_records),
            len(state_records),
            len(county_names),
            len(state_names),
            len(self.zip_rows),
        )

    def _check_state_coverage(self) -> None:
        """Every state referenced by a county fips needs a state name entry."""
        fips = pd.concat(
            [self.county_records[C.fips], pd.Series(list(self.county_names.keys()), dtype=object)],
            ignore_index=True,
        )
        prefixes = {state_fips_of(f) for f in fips.dropna().astype(str) if f}
        prefixes |= {f for f in self.state_records[C.fips].dropna().astype(str) if f}

        missing = sorted(p for p in prefixes if p not in self.state_names)
        if missing:
            raise ValueError(f"State name table is missing fips: {missing}")

    # -----------------------------
    # Region views
    # -----------------------------
    def county_data_by_fips(self, fips: str) -> RegionView:
        return resolve_county(fips, self.county_records, self.county_names, self.state_names, self.merge_rules)

    def state_data_by_fips(self, fips: str) -> RegionView:
        return resolve_state(fips, self.state_records, self.state_names)

    def counties_by_state(self, state_fips: str) -> List[dict]:
        return counties_by_state(state_fips, self.county_records, county_results_href)

    def state_name_by_fips(self, fips: str) -> Optional[StateName]:
        return state_name_by_fips(fips, self.state_names)

    # -----------------------------
    # Search
    # -----------------------------
    def county_suggestions_by_name(self, search_term: str) -> List[SearchSuggestion]:
        return county_suggestions_by_name(search_term, self.sorted_county_names, self.state_names)

    def county_suggestions_by_zip(self, search_term: str) -> List[SearchSuggestion]:
        return county_suggestions_by_zip(search_term, self.zip_rows)

    def state_suggestions(self, search_term: str) -> List[SearchSuggestion]:
        return state_suggestions(search_term, self.state_names)

    # -----------------------------
    # Trending
    # -----------------------------
    def _county_trend_name(self, fips: str) -> str:
        state = self.state_names.get(state_fips_of(fips))
        return f"{self.county_names.get(fips, fips)}, {state.abbreviation if state else ''}"

    def _state_trend_name(self, fips: str) -> str:
        state = self.state_names.get(fips)
        return state.full if state else ""

    def trending_counties(self, days_in_time_frame: int) -> List[TrendEntry]:
        return rank_trends(
            self.county_records,
            days_in_time_frame,
            name_fn=self._county_trend_name,
            href_fn=county_results_href,
        )

    def trending_states(self, days_in_time_frame: int) -> List[TrendEntry]:
        return rank_trends(
            self.state_records,
            days_in_time_frame,
            name_fn=self._state_trend_name,
            href_fn=state_results_href,
        )
