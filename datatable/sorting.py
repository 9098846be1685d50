from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Any, List, Literal, Optional, Sequence, Tuple

from datatable.columns import Column, find_column, lookup_path
from datatable.values import compare_tokens, is_missing, sort_token


logger = logging.getLogger(__name__)

Direction = Literal["asc", "desc"]
ASC: Direction = "asc"
DESC: Direction = "desc"


def normalize_direction(value: object) -> Direction:
    return DESC if str(value or "").strip().lower() == DESC else ASC


def next_sort(current_key: Optional[str], current_direction: str, column_key: str) -> Tuple[str, Direction]:
    """Header click: same column flips asc <-> desc, another column starts ascending."""
    if current_key == column_key:
        return column_key, (ASC if normalize_direction(current_direction) == DESC else DESC)
    return column_key, ASC


def sort_records(records: Sequence[Any], column: Optional[Column], direction: str = ASC) -> List[Any]:
    """Stable, type-aware sort on one column; missing values always go last.

    Returns the records in input order when no sortable column is given or the column's
    accessor cannot be applied to every record.
    """
    rows = list(records)
    if column is None or not column.sortable:
        return rows

    try:
        if column.accessor is None:
            values = [lookup_path(r, column.key) for r in rows]
        else:
            values = [column.accessor(r) for r in rows]
    except Exception:
        logger.warning("column %r cannot be sorted; keeping natural order", column.key, exc_info=True)
        return rows

    present = [(sort_token(v), r) for v, r in zip(values, rows) if not is_missing(v)]
    missing = [r for v, r in zip(values, rows) if is_missing(v)]
    ordered = sorted(
        present,
        key=cmp_to_key(lambda a, b: compare_tokens(a[0], b[0])),
        reverse=normalize_direction(direction) == DESC,
    )
    return [r for _, r in ordered] + missing


def sort_by_key(records: Sequence[Any], columns: Sequence[Column], sort_key: Optional[str], direction: str = ASC) -> List[Any]:
    column = find_column(columns, sort_key)
    if sort_key is not None and column is None:
        logger.warning("unknown sort key %r; keeping natural order", sort_key)
    return sort_records(records, column, direction)
