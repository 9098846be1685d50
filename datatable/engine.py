from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from datatable.columns import Column, lookup_path, render_cell, validate_columns
from datatable.config import TableConfig
from datatable.pagination import Page, paginate, single_page
from datatable.search import filter_records
from datatable.sorting import ASC, Direction, sort_by_key
from datatable.state import Action, TableState, initial_state, transition
from datatable.values import is_missing, to_search_text


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableView:
    page: Page = field(default_factory=Page)
    source_count: int = 0
    filtered_count: int = 0
    search_query: str = ""
    sort_key: Optional[str] = None
    sort_direction: Direction = ASC


def evaluate(
    data: Sequence[Any],
    columns: Sequence[Column],
    state: TableState,
    *,
    searchable: bool = True,
    pagination: bool = True,
    search_keys: Optional[Sequence[str]] = None,
) -> TableView:
    """Run search -> sort -> paginate over `data` for the given table state."""
    query = state.search_query if searchable else ""
    filtered = filter_records(data, query, columns, search_keys=search_keys)
    ordered = sort_by_key(filtered, columns, state.sort_key, state.sort_direction)
    page = paginate(ordered, state.page, state.page_size) if pagination else single_page(ordered)
    logger.debug(
        "table evaluated: %d source rows, %d matched, page %d/%d",
        len(data), len(filtered), page.page, page.total_pages,
    )
    return TableView(
        page=page,
        source_count=len(data),
        filtered_count=len(filtered),
        search_query=query,
        sort_key=state.sort_key,
        sort_direction=state.sort_direction,
    )


def evaluate_config(data: Sequence[Any], config: TableConfig, state: TableState) -> TableView:
    return evaluate(
        data,
        config.columns,
        state,
        searchable=config.searchable,
        pagination=config.pagination,
        search_keys=config.search_keys,
    )


def _aria_sort(view: TableView, col: Column) -> Optional[str]:
    if not col.sortable or view.sort_key != col.key:
        return None
    return "ascending" if view.sort_direction == ASC else "descending"


def _row_id(record: Any, key_field: str, index: int) -> str:
    value = lookup_path(record, key_field)
    if is_missing(value):
        return str(index)
    return to_search_text(value)


def build_payload(view: TableView, config: TableConfig, state: Optional[TableState] = None) -> Dict[str, Any]:
    headers = [
        {
            "key": col.key,
            "label": col.title,
            "sortable": col.sortable,
            "align": col.align,
            "width": col.width,
            "sorted": _aria_sort(view, col) is not None,
            "aria_sort": _aria_sort(view, col),
        }
        for col in config.columns
    ]
    offset = max(0, view.page.start_index - 1)
    rows: List[Dict[str, Any]] = [
        {
            "id": _row_id(record, config.key_field, offset + i),
            "cells": {col.key: render_cell(record, col) for col in config.columns},
        }
        for i, record in enumerate(view.page.items)
    ]
    payload: Dict[str, Any] = {
        "headers": headers,
        "rows": rows,
        "pagination": {**view.page.meta(), "enabled": config.pagination, "page_size_options": list(config.page_size_options)},
        "search": {"enabled": config.searchable, "placeholder": config.search_placeholder, "query": view.search_query},
        "counts": {"source": view.source_count, "filtered": view.filtered_count},
        "empty_message": config.empty_message if not rows else None,
    }
    if state is not None:
        payload["state"] = asdict(state)
    return payload


class DataTable:
    """One table instance: fixed configuration plus the caller's current selection state.

    Records are passed in on every call and never stored or mutated.
    """

    def __init__(self, config: TableConfig, state: Optional[TableState] = None):
        validate_columns(config.columns)
        self.config = config
        self.state = state or initial_state(config.page_size)

    def view(self, data: Sequence[Any]) -> TableView:
        return evaluate_config(data, self.config, self.state)

    def total_pages(self, data: Sequence[Any]) -> int:
        return self.view(data).page.total_pages

    def dispatch(self, action: Action, data: Sequence[Any]) -> TableState:
        self.state = transition(
            self.state,
            action,
            columns=self.config.columns,
            total_pages=self.total_pages(data),
        )
        return self.state

    def payload(self, data: Sequence[Any]) -> Dict[str, Any]:
        return build_payload(self.view(data), self.config, self.state)
