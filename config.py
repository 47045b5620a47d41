# config.py
from dataclasses import dataclass
from pathlib import Path

# Base directory of the repo (reliable in Streamlit Cloud)
BASE_DIR = Path(__file__).resolve().parent

# -----------------------------
# Data / files
# -----------------------------
NYT_BASE_URL = "https://raw.githubusercontent.com/nytimes/covid-19-data/master"

COUNTY_CSV_URL = f"{NYT_BASE_URL}/us-counties.csv"
STATE_CSV_URL = f"{NYT_BASE_URL}/us-states.csv"

# Optional zip -> fips crosswalk (local, in repo root)
ZIP_FIPS_LOCAL_PATH = BASE_DIR / "zip_fips.csv"

CACHE_TTL_SECONDS = 60 * 60

# -----------------------------
# Streamlit page config
# -----------------------------
DEFAULT_PAGE = dict(
    page_title="COVID County Tracker",
    layout="wide",
    initial_sidebar_state="expanded",
)

# -----------------------------
# Column names (single source of truth)
# -----------------------------
@dataclass(frozen=True)
class Cols:
    date: str = "date"
    county: str = "county"
    state: str = "state"
    fips: str = "fips"
    cases: str = "cases"
    deaths: str = "deaths"

C = Cols()

COUNTY_REQUIRED_COLS = {C.date, C.county, C.state, C.fips, C.cases, C.deaths}
STATE_REQUIRED_COLS = {C.date, C.state, C.fips, C.cases, C.deaths}

ZIP_COLS = ["zip", "fips", "city", "state", "county"]

# -----------------------------
# Trends / search
# -----------------------------
# Regions whose peak is at or below this are too small to rank.
TREND_MIN_PEAK = 100

# Days offered in the "trending" selector.
TRENDING_TIME_FRAMES = [7, 14, 30]

SUGGESTION_LIMIT = 5

UNDEFINED_TREND = "N/A"

# -----------------------------
# Region merge rules
# -----------------------------
@dataclass(frozen=True)
class MergeRule:
    """Several fips codes reported as one region.

    Records are matched by ``label`` in the county column, not by fips.
    """
    codes: frozenset
    label: str
    display_name: str


NEW_YORK_CITY = "New York City"

REGION_MERGE_RULES = (
    MergeRule(
        # New York, Kings, Queens, Bronx, Richmond
        codes=frozenset({"36061", "36047", "36081", "36005", "36085"}),
        label=NEW_YORK_CITY,
        display_name=NEW_YORK_CITY,
    ),
)
