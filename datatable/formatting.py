"""Presentation-only cell renderers.

Each factory returns a `render` callable for a column. Renderers never feed back into
search or sort; those always use the column's raw value.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

from datatable.columns import lookup_path
from datatable.values import as_timestamp, is_missing, is_numeric, to_search_text

Renderer = Callable[[Any], Any]


def format_currency(value: object, decimals: int = 0, symbol: str = "$") -> str:
    if not is_numeric(value):
        return "N/A"
    return f"{symbol}{float(value):,.{decimals}f}"  # type: ignore[arg-type]


def format_percent(value: object, decimals: int = 0) -> str:
    if not is_numeric(value):
        return ""
    return f"{float(value) * 100:.{decimals}f}%"  # type: ignore[arg-type]


def format_number(value: object, decimals: int = 0) -> str:
    if not is_numeric(value):
        return ""
    return f"{float(value):,.{decimals}f}"  # type: ignore[arg-type]


def format_date(value: object, fmt: str = "%d %b %Y") -> str:
    ts = as_timestamp(value)
    if ts is None:
        return "" if is_missing(value) else str(value)
    return ts.strftime(fmt)


def currency(field: str, decimals: int = 0, symbol: str = "$") -> Renderer:
    return lambda record: format_currency(lookup_path(record, field), decimals, symbol)


def percent(field: str, decimals: int = 0) -> Renderer:
    return lambda record: format_percent(lookup_path(record, field), decimals)


def number(field: str, decimals: int = 0) -> Renderer:
    return lambda record: format_number(lookup_path(record, field), decimals)


def date_text(field: str, fmt: str = "%d %b %Y") -> Renderer:
    return lambda record: format_date(lookup_path(record, field), fmt)


def badge(field: str, tones: Optional[Mapping[str, str]] = None, default_tone: str = "neutral") -> Renderer:
    """Status label plus a tone name the host UI maps to a colour."""
    tones = dict(tones or {})

    def render(record: Any) -> Dict[str, str]:
        label = to_search_text(lookup_path(record, field))
        return {"label": label, "tone": tones.get(label, default_tone)}

    return render


FORMATTERS: Dict[str, Callable[..., Renderer]] = {
    "currency": currency,
    "percent": percent,
    "number": number,
    "date": date_text,
    "badge": badge,
}
