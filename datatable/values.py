from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

import numpy as np
import pandas as pd


ISO_DATE_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{1,9})?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M"


def is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, Decimal):
        return value.is_nan()
    if isinstance(value, (list, tuple, dict, set, np.ndarray)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def is_numeric(value: object) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (numbers.Real, Decimal)) and not is_missing(value)


def _format_number(value: numbers.Real | Decimal) -> str:
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return str(int(value))
        return format(value.normalize(), "f") if value.is_finite() else str(value)
    if isinstance(value, numbers.Integral):
        return str(int(value))
    f = float(value)
    if math.isfinite(f) and f.is_integer():
        return str(int(f))
    return repr(f)


def _format_temporal(value: date) -> str:
    if not isinstance(value, datetime):
        return value.strftime(DATE_FORMAT)
    if value.hour == 0 and value.minute == 0 and value.second == 0 and value.microsecond == 0:
        return value.strftime(DATE_FORMAT)
    return value.strftime(DATETIME_FORMAT)


def to_search_text(value: object) -> str:
    """Canonical string form used by search and by the text fallback of sorting."""
    if is_missing(value):
        return ""
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, (numbers.Real, Decimal)):
        return _format_number(value)
    if isinstance(value, date):
        return _format_temporal(value)
    return str(value)


def as_timestamp(value: object) -> Optional[pd.Timestamp]:
    """Return a naive timestamp for date values and ISO-8601 date strings, else None."""
    if is_missing(value):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not ISO_DATE_RE.match(value):
            return None
    elif not isinstance(value, date):
        return None
    try:
        ts = pd.Timestamp(value)
    except (ValueError, OverflowError):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts


@dataclass(frozen=True)
class SortToken:
    number: Optional[numbers.Real | Decimal]
    moment: Optional[pd.Timestamp]
    text: str


def _exact_number(value: Any) -> numbers.Real | Decimal:
    if isinstance(value, np.generic):
        return value.item()
    return value


def sort_token(value: Any) -> SortToken:
    if is_numeric(value):
        return SortToken(number=_exact_number(value), moment=None, text=to_search_text(value).casefold())
    return SortToken(number=None, moment=as_timestamp(value), text=to_search_text(value).casefold())


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_tokens(a: SortToken, b: SortToken) -> int:
    if a.number is not None and b.number is not None:
        return _cmp(a.number, b.number)
    if a.moment is not None and b.moment is not None:
        return _cmp(a.moment, b.moment)
    return _cmp(a.text, b.text)
