from __future__ import annotations

from dataclasses import asdict
import logging
import math
from typing import List

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import ColumnModel, EvaluateRequest, MetaListResponse, TableOptionsModel, TransitionRequest
from datatable.columns import Column, ColumnError, lookup_path
from datatable.config import MAX_PAGE_SIZE, PAGE_SIZE_OPTIONS, DEFAULT_PAGE_SIZE, TableConfig, normalize_config
from datatable.engine import build_payload, evaluate_config
from datatable.formatting import FORMATTERS
from datatable.state import action_from_dict, normalize_state, transition


app = FastAPI(title="Data Table API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _column_from_model(model: ColumnModel) -> Column:
    field = model.field or model.key
    render = None
    if model.format is not None:
        try:
            render = FORMATTERS[model.format](field, **model.format_options)
        except TypeError as exc:
            raise ColumnError(f"bad format options for column {model.key!r}: {exc}") from exc
    return Column(
        key=model.key,
        label=model.label,
        sortable=model.sortable,
        searchable=model.searchable,
        accessor=(lambda r, f=field: lookup_path(r, f)) if model.field else None,
        render=render,
        align=model.align,
        width=model.width,
    )


def _config_from_models(columns: List[ColumnModel], options: TableOptionsModel) -> TableConfig:
    return normalize_config(options.model_dump(), [_column_from_model(c) for c in columns])


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _error(exc: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/formats", response_model=MetaListResponse)
def meta_formats():
    return MetaListResponse(values=sorted(FORMATTERS))


@app.get("/meta/defaults")
def meta_defaults():
    return _json({"page_size": DEFAULT_PAGE_SIZE, "page_size_options": list(PAGE_SIZE_OPTIONS), "max_page_size": MAX_PAGE_SIZE})


@app.post("/table/evaluate")
def table_evaluate(body: EvaluateRequest):
    try:
        config = _config_from_models(body.columns, body.options)
        state = normalize_state(body.state.model_dump(exclude_unset=True), default_page_size=config.page_size)
        view = evaluate_config(body.data, config, state)
        return _json(build_payload(view, config, state))
    except ColumnError as exc:
        return _error(exc, status_code=400)
    except Exception as exc:
        logger.exception("table_evaluate failed")
        return _error(exc)


@app.post("/table/transition")
def table_transition(body: TransitionRequest):
    try:
        config = _config_from_models(body.columns, body.options)
        state = normalize_state(body.state.model_dump(exclude_unset=True), default_page_size=config.page_size)
        action = action_from_dict(body.action.model_dump(exclude_none=True))
        total_pages = None
        if body.data is not None:
            total_pages = evaluate_config(body.data, config, state).page.total_pages
        new_state = transition(
            state,
            action,
            columns=config.columns or None,
            total_pages=total_pages,
        )
        return _json({"state": asdict(new_state), "total_pages": total_pages})
    except (ColumnError, ValueError) as exc:
        return _error(exc, status_code=400)
    except Exception as exc:
        logger.exception("table_transition failed")
        return _error(exc)
