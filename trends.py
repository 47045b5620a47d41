# trends.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, List, Optional

import pandas as pd

from config import C, TREND_MIN_PEAK, UNDEFINED_TREND

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class TrendEntry:
    fips: str
    name: str
    baseline: int
    peak: int
    percent_increase: str  # "12.34" or UNDEFINED_TREND
    percent_value: Optional[float]
    href: str

    # Older callers read these as low/high.
    @property
    def low(self) -> int:
        return self.baseline

    @property
    def high(self) -> int:
        return self.peak

    @property
    def is_defined(self) -> bool:
        return self.percent_value is not None


def find_window_start(records: pd.DataFrame, distinct_day_count: int) -> int:
    """
    Position of the first row belonging to the last `distinct_day_count`
    distinct dates, scanning from the end.

    Returns 0 when the frame holds no more than `distinct_day_count` dates
    (the whole frame is the window). A count of 0 yields len(records).
    """
    if records is None:
        raise TypeError("records must be a DataFrame, got None")

    dates = records[C.date].tolist()
    seen = set()

    for i in range(len(dates) - 1, -1, -1):
        d = dates[i]
        if d not in seen:
            if len(seen) == distinct_day_count:
                return i + 1
            seen.add(d)

    return 0


def aggregate_baseline_peak(windowed: pd.DataFrame) -> pd.DataFrame:
    """
    Per fips over an already-windowed frame:
      baseline = cases at the fips' first row (never updated)
      peak     = max cases

    Baseline is deliberately NOT the minimum: it is the start of the window,
    which is what percent increase compares against.

    Returns a DataFrame indexed by fips (first-appearance order) with
    columns: baseline, peak. Missing fips become "".
    """
    if windowed is None or windowed.empty:
        return pd.DataFrame(columns=["baseline", "peak"])

    df = windowed[[C.fips, C.cases]].copy()
    df[C.fips] = df[C.fips].fillna("").astype(str)

    return df.groupby(C.fips, sort=False)[C.cases].agg(baseline="first", peak="max")


def percent_increase(baseline: int, peak: int) -> str:
    """
    (peak / baseline - 1) * 100 as a two-decimal string; UNDEFINED_TREND if baseline is 0.

    Halves round up (3.125 -> "3.13"), not to even as format() does.
    """
    if baseline == 0:
        return UNDEFINED_TREND
    pct = Decimal((peak / baseline - 1) * 100)
    return str(pct.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def _parse_percent(pct: str) -> Optional[float]:
    if pct == UNDEFINED_TREND:
        return None
    return float(pct)


def _trend_sort_key(entry: TrendEntry):
    # Undefined trends go last; defined ones ascending by numeric value.
    if entry.percent_value is None:
        return (1, 0.0)
    return (0, entry.percent_value)


def rank_trends(
    records: pd.DataFrame,
    days_in_time_frame: int,
    *,
    name_fn: Callable[[str], str],
    href_fn: Callable[[str], str],
) -> List[TrendEntry]:
    """
    Trend ranking over the last `days_in_time_frame` distinct dates.

    Regions with no fips or a peak <= TREND_MIN_PEAK are dropped.
    Sorted ascending by percent increase, undefined trends last.
    """
    start = find_window_start(records, days_in_time_frame)
    baseline_peak = aggregate_baseline_peak(records.iloc[start:])

    entries: List[TrendEntry] = []
    for fips, row in baseline_peak.iterrows():
        baseline = int(row["baseline"])
        peak = int(row["peak"])
        if not fips or peak <= TREND_MIN_PEAK:
            continue

        pct = percent_increase(baseline, peak)
        entries.append(
            TrendEntry(
                fips=fips,
                name=name_fn(fips),
                baseline=baseline,
                peak=peak,
                percent_increase=pct,
                percent_value=_parse_percent(pct),
                href=href_fn(fips),
            )
        )

    entries.sort(key=_trend_sort_key)

    logger.debug(
        "Ranked %d of %d regions over %d days (window starts at row %d)",
        len(entries),
        len(baseline_peak),
        days_in_time_frame,
        start,
    )
    return entries


def format_trend(entry: TrendEntry) -> str:
    """
    Formats percent increase as arrows for display.
    """
    if not entry.is_defined:
        return f"▲ {UNDEFINED_TREND}"
    if entry.percent_value > 0:
        return f"▲ +{entry.percent_increase}%"
    return "→ 0.00%"
