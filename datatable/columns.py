from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Literal, Mapping, Optional, Sequence

import pandas as pd

from datatable.values import is_missing, to_search_text


logger = logging.getLogger(__name__)

Align = Literal["left", "center", "right"]
MISSING_CELL = "-"


class ColumnError(ValueError):
    """Raised when a column set cannot describe a table (empty or duplicate keys)."""


@dataclass(frozen=True)
class Column:
    key: str
    label: str = ""
    sortable: bool = False
    searchable: bool = True
    accessor: Optional[Callable[[Any], Any]] = None
    render: Optional[Callable[[Any], Any]] = None
    align: Align = "left"
    width: Optional[str] = None

    @property
    def title(self) -> str:
        return self.label or self.key


def lookup_path(record: Any, path: str) -> Any:
    """Resolve `path` on a record; dotted paths walk nested mappings/attributes."""
    current = record
    for part in path.split("."):
        if current is None:
            return None
        if isinstance(current, (Mapping, pd.Series)):
            current = current.get(part)
        else:
            current = getattr(current, part, None)
    return current


def get_value(record: Any, column: Column) -> Any:
    if column.accessor is None:
        return lookup_path(record, column.key)
    try:
        return column.accessor(record)
    except Exception:
        logger.warning("accessor for column %r failed; treating value as missing", column.key, exc_info=True)
        return None


def render_cell(record: Any, column: Column) -> Any:
    if column.render is not None:
        try:
            return column.render(record)
        except Exception:
            logger.warning("render for column %r failed; showing empty cell", column.key, exc_info=True)
            return MISSING_CELL
    value = get_value(record, column)
    if is_missing(value):
        return MISSING_CELL
    return to_search_text(value)


def find_column(columns: Iterable[Column], key: Optional[str]) -> Optional[Column]:
    if key is None:
        return None
    for col in columns:
        if col.key == key:
            return col
    return None


def validate_columns(columns: Sequence[Column]) -> List[Column]:
    seen = set()
    for col in columns:
        if not col.key:
            raise ColumnError("column key must be a non-empty string")
        if col.key in seen:
            raise ColumnError(f"duplicate column key: {col.key!r}")
        seen.add(col.key)
    return list(columns)


def columns_from_keys(keys: Iterable[str], *, sortable: bool = True) -> List[Column]:
    return [Column(key=str(k), label=str(k).replace("_", " ").title(), sortable=sortable) for k in keys]
