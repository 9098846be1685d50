from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Sequence, Union

from datatable.columns import Column, find_column
from datatable.config import DEFAULT_PAGE_SIZE, clamp_page_size
from datatable.pagination import clamp_page
from datatable.sorting import ASC, Direction, next_sort, normalize_direction


@dataclass(frozen=True)
class TableState:
    search_query: str = ""
    sort_key: Optional[str] = None
    sort_direction: Direction = ASC
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class SetSearch:
    query: str = ""


@dataclass(frozen=True)
class ToggleSort:
    column_key: str


@dataclass(frozen=True)
class GoToPage:
    page: int


@dataclass(frozen=True)
class NextPage:
    pass


@dataclass(frozen=True)
class PreviousPage:
    pass


@dataclass(frozen=True)
class SetPageSize:
    page_size: int


Action = Union[SetSearch, ToggleSort, GoToPage, NextPage, PreviousPage, SetPageSize]


def initial_state(page_size: int = DEFAULT_PAGE_SIZE) -> TableState:
    return TableState(page_size=clamp_page_size(page_size))


def normalize_state(raw: Optional[dict], *, default_page_size: int = DEFAULT_PAGE_SIZE) -> TableState:
    raw = raw or {}
    page = raw.get("page", 1)
    try:
        page = int(page)
    except Exception:
        page = 1
    sort_key = raw.get("sort_key")
    sort_key = str(sort_key) if sort_key not in (None, "") else None
    return TableState(
        search_query=str(raw.get("search_query") or ""),
        sort_key=sort_key,
        sort_direction=normalize_direction(raw.get("sort_direction")),
        page=max(1, page),
        page_size=clamp_page_size(raw.get("page_size", default_page_size), default=default_page_size),
    )


def _go_to(state: TableState, page: int, total_pages: Optional[int]) -> TableState:
    if total_pages is None:
        return replace(state, page=max(1, page))
    return replace(state, page=clamp_page(page, total_pages))


def transition(
    state: TableState,
    action: Action,
    *,
    columns: Optional[Sequence[Column]] = None,
    total_pages: Optional[int] = None,
) -> TableState:
    """Apply one user action to the table state.

    `columns` lets sort toggles ignore unknown or non-sortable headers; `total_pages`
    bounds page navigation from above. Without them only the lower bounds apply.
    """
    if isinstance(action, SetSearch):
        return replace(state, search_query=action.query or "", page=1)
    if isinstance(action, ToggleSort):
        if columns is not None:
            col = find_column(columns, action.column_key)
            if col is None or not col.sortable:
                return state
        key, direction = next_sort(state.sort_key, state.sort_direction, action.column_key)
        return replace(state, sort_key=key, sort_direction=direction)
    if isinstance(action, GoToPage):
        return _go_to(state, int(action.page), total_pages)
    if isinstance(action, NextPage):
        return _go_to(state, state.page + 1, total_pages)
    if isinstance(action, PreviousPage):
        return _go_to(state, state.page - 1, total_pages)
    if isinstance(action, SetPageSize):
        return replace(state, page_size=clamp_page_size(action.page_size, default=state.page_size), page=1)
    raise TypeError(f"unsupported table action: {action!r}")


_ACTION_TYPES = {
    "set_search": lambda raw: SetSearch(query=str(raw.get("query") or "")),
    "toggle_sort": lambda raw: ToggleSort(column_key=str(raw["column_key"])),
    "go_to_page": lambda raw: GoToPage(page=int(raw["page"])),
    "next_page": lambda raw: NextPage(),
    "previous_page": lambda raw: PreviousPage(),
    "set_page_size": lambda raw: SetPageSize(page_size=int(raw["page_size"])),
}


def action_from_dict(raw: dict) -> Action:
    kind = str(raw.get("type") or "")
    build = _ACTION_TYPES.get(kind)
    if build is None:
        raise ValueError(f"unknown action type: {kind!r}")
    try:
        return build(raw)
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"invalid {kind} action: {exc}") from exc
