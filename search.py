# search.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence, Tuple

from config import SUGGESTION_LIMIT
from regions import StateName, state_fips_of


@dataclass(frozen=True)
class SearchSuggestion:
    display_text: str
    value: Any


def match_prefix(
    candidates: Sequence[Sequence[str]],
    search_term: str,
    field_index: int,
    display_fn: Callable[[Sequence[str]], str],
    value_fn: Callable[[Sequence[str]], Any],
    limit: int = SUGGESTION_LIMIT,
) -> List[SearchSuggestion]:
    """
    Case-insensitive starts-with match on candidate[field_index].

    Results keep candidate order and scanning stops at `limit` matches, so the
    candidates should already be sorted the way suggestions are wanted.
    """
    suggestions: List[SearchSuggestion] = []
    if limit <= 0:
        return suggestions
    term = (search_term or "").lower()

    for item in candidates:
        if str(item[field_index]).lower().startswith(term):
            suggestions.append(SearchSuggestion(display_text=display_fn(item), value=value_fn(item)))
            if len(suggestions) >= limit:
                break

    return suggestions


def sorted_county_names(county_names: Dict[str, str]) -> List[Tuple[str, str]]:
    """(fips, name) pairs sorted by name."""
    return sorted(county_names.items(), key=lambda kv: kv[1])


def county_suggestions_by_name(
    search_term: str,
    sorted_names: List[Tuple[str, str]],
    state_names: Dict[str, StateName],
) -> List[SearchSuggestion]:
    def display(item) -> str:
        state = state_names.get(state_fips_of(item[0]))
        return f"{item[1]}, {state.full if state else ''}"

    return match_prefix(
        sorted_names,
        search_term,
        1,
        display_fn=display,
        value_fn=lambda item: item[0],
    )


def county_suggestions_by_zip(search_term: str, zip_rows: List[Tuple[str, ...]]) -> List[SearchSuggestion]:
    """zip_rows: (zip, fips, city, state, county)."""
    return match_prefix(
        zip_rows,
        search_term,
        0,
        display_fn=lambda r: f"{r[2]}, {r[3]} {r[0]} {r[4]}",
        value_fn=lambda r: {"fips": r[1], "zip_code": r[0]},
    )


def state_suggestions(search_term: str, state_names: Dict[str, StateName]) -> List[SearchSuggestion]:
    states = [(fips, s.full) for fips, s in state_names.items()]
    return match_prefix(
        states,
        search_term,
        1,
        display_fn=lambda item: item[1],
        value_fn=lambda item: {"fips": item[0], "name": item[1]},
    )
