from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from datatable.config import (
    DEFAULT_EMPTY_MESSAGE,
    DEFAULT_KEY_FIELD,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SEARCH_PLACEHOLDER,
    PAGE_SIZE_OPTIONS,
)


class ColumnModel(BaseModel):
    key: str
    label: str = ""
    sortable: bool = False
    searchable: bool = True
    field: Optional[str] = None
    format: Optional[Literal["currency", "percent", "number", "date", "badge"]] = None
    format_options: Dict[str, Any] = Field(default_factory=dict)
    align: Literal["left", "center", "right"] = "left"
    width: Optional[str] = None


class TableStateModel(BaseModel):
    search_query: str = ""
    sort_key: Optional[str] = None
    sort_direction: Literal["asc", "desc"] = "asc"
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


class TableOptionsModel(BaseModel):
    searchable: bool = True
    search_placeholder: str = DEFAULT_SEARCH_PLACEHOLDER
    page_size: int = DEFAULT_PAGE_SIZE
    pagination: bool = True
    page_size_options: List[int] = Field(default_factory=lambda: list(PAGE_SIZE_OPTIONS))
    key_field: str = DEFAULT_KEY_FIELD
    empty_message: str = DEFAULT_EMPTY_MESSAGE
    search_keys: Optional[List[str]] = None


class EvaluateRequest(BaseModel):
    data: List[Dict[str, Any]] = Field(default_factory=list)
    columns: List[ColumnModel]
    state: TableStateModel = Field(default_factory=TableStateModel)
    options: TableOptionsModel = Field(default_factory=TableOptionsModel)


class ActionModel(BaseModel):
    type: Literal["set_search", "toggle_sort", "go_to_page", "next_page", "previous_page", "set_page_size"]
    query: Optional[str] = None
    column_key: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


class TransitionRequest(BaseModel):
    state: TableStateModel = Field(default_factory=TableStateModel)
    action: ActionModel
    columns: List[ColumnModel] = Field(default_factory=list)
    data: Optional[List[Dict[str, Any]]] = None
    options: TableOptionsModel = Field(default_factory=TableOptionsModel)


class MetaListResponse(BaseModel):
    values: List[str]
