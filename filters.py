# filters.py
from dataclasses import dataclass
from typing import Dict, Optional

import pandas as pd

from config import C


@dataclass(frozen=True)
class TimeFrame:
    id: str
    label: str
    rows: Optional[int]  # None = everything


WEEK = "WEEK"
MONTH = "MONTH"
MAX = "MAX"

TIME_FRAMES: Dict[str, TimeFrame] = {
    WEEK: TimeFrame(WEEK, "7 days", 7),
    MONTH: TimeFrame(MONTH, "30 days", 30),
    MAX: TimeFrame(MAX, "Max", None),
}


def slice_time_frame(records: pd.DataFrame, frame_id: str) -> pd.DataFrame:
    """Trailing rows of a single region's records for the chart."""
    if frame_id not in TIME_FRAMES:
        raise ValueError(f"Unknown time frame: {frame_id!r} (expected one of {list(TIME_FRAMES)})")

    rows = TIME_FRAMES[frame_id].rows
    if rows is None:
        return records.copy()
    return records.tail(rows).copy()


def compute_overall_stats(records: pd.DataFrame) -> Dict[str, object]:
    """Latest cumulative totals + day-over-day new cases for a region's records."""
    if records is None or records.empty:
        return dict(date="N/A", cases=0, deaths=0, new_cases=0, new_deaths=0)

    last = records.iloc[-1]
    prev = records.iloc[-2] if len(records) > 1 else None

    cases = int(last[C.cases])
    deaths = int(last[C.deaths])
    new_cases = cases - int(prev[C.cases]) if prev is not None else cases
    new_deaths = deaths - int(prev[C.deaths]) if prev is not None else deaths

    return dict(
        date=str(last[C.date]),
        cases=cases,
        deaths=deaths,
        new_cases=new_cases,
        new_deaths=new_deaths,
    )
