from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

from datatable.columns import Column, find_column, get_value, lookup_path
from datatable.values import to_search_text


def _field_getters(columns: Sequence[Column], search_keys: Optional[Sequence[str]]) -> List[Callable[[Any], Any]]:
    if search_keys is None:
        return [lambda r, c=col: get_value(r, c) for col in columns if col.searchable]
    getters: List[Callable[[Any], Any]] = []
    for key in search_keys:
        col = find_column(columns, key)
        if col is not None:
            getters.append(lambda r, c=col: get_value(r, c))
        else:
            getters.append(lambda r, k=str(key): lookup_path(r, k))
    return getters


def filter_records(
    records: Sequence[Any],
    query: str,
    columns: Sequence[Column],
    *,
    search_keys: Optional[Sequence[str]] = None,
) -> List[Any]:
    """Keep records where any searchable field contains `query` (case-insensitive substring)."""
    needle = (query or "").strip().casefold()
    if not needle:
        return list(records)
    getters = _field_getters(columns, search_keys)
    return [r for r in records if any(needle in to_search_text(get(r)).casefold() for get in getters)]
