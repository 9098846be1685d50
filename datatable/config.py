from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from datatable.columns import Column, validate_columns


DEFAULT_PAGE_SIZE = 10
PAGE_SIZE_OPTIONS: Tuple[int, ...] = (5, 10, 20, 50)
MAX_PAGE_SIZE = 500
PAGE_WINDOW = 5

DEFAULT_SEARCH_PLACEHOLDER = "Search..."
DEFAULT_EMPTY_MESSAGE = "No data found"
DEFAULT_KEY_FIELD = "id"


@dataclass(frozen=True)
class TableConfig:
    columns: List[Column] = field(default_factory=list)
    searchable: bool = True
    search_placeholder: str = DEFAULT_SEARCH_PLACEHOLDER
    page_size: int = DEFAULT_PAGE_SIZE
    pagination: bool = True
    page_size_options: Tuple[int, ...] = PAGE_SIZE_OPTIONS
    key_field: str = DEFAULT_KEY_FIELD
    empty_message: str = DEFAULT_EMPTY_MESSAGE
    search_keys: Optional[List[str]] = None


def clamp_page_size(value: object, default: int = DEFAULT_PAGE_SIZE) -> int:
    try:
        size = int(value)  # type: ignore[arg-type]
    except Exception:
        size = default
    return max(1, min(MAX_PAGE_SIZE, size))


def _as_int_tuple(values: Optional[Iterable[object]]) -> Tuple[int, ...]:
    if not values:
        return PAGE_SIZE_OPTIONS
    out: List[int] = []
    for v in values:
        try:
            out.append(clamp_page_size(int(v)))  # type: ignore[arg-type]
        except Exception:
            continue
    return tuple(sorted(set(out))) or PAGE_SIZE_OPTIONS


def normalize_config(raw: dict, columns: Iterable[Column]) -> TableConfig:
    search_keys = raw.get("search_keys")
    return TableConfig(
        columns=validate_columns(list(columns)),
        searchable=bool(raw.get("searchable", True)),
        search_placeholder=str(raw.get("search_placeholder") or DEFAULT_SEARCH_PLACEHOLDER),
        page_size=clamp_page_size(raw.get("page_size", DEFAULT_PAGE_SIZE)),
        pagination=bool(raw.get("pagination", True)),
        page_size_options=_as_int_tuple(raw.get("page_size_options")),
        key_field=str(raw.get("key_field") or DEFAULT_KEY_FIELD),
        empty_message=str(raw.get("empty_message") or DEFAULT_EMPTY_MESSAGE),
        search_keys=[str(k) for k in search_keys] if search_keys else None,
    )
