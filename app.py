import pandas as pd
import streamlit as st
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from datatable.columns import Column
from datatable.config import TableConfig
from datatable.engine import DataTable
from datatable.formatting import badge, currency, date_text
from datatable.records import SAMPLE_REQUESTS_PATH, load_records
from datatable.state import GoToPage, NextPage, PreviousPage, SetPageSize, SetSearch, ToggleSort

STATUS_TONES = {
    "Pending": "warning",
    "Approved": "success",
    "Rejected": "danger",
    "In Progress": "info",
    "Completed": "success",
}
TONE_ICONS = {"warning": "🟡", "success": "🟢", "danger": "🔴", "info": "🔵", "neutral": "⚪"}

REQUEST_COLUMNS = [
    Column(key="id", label="Request", sortable=True),
    Column(key="employee_name", label="Employee", sortable=True),
    Column(key="department", label="Department", sortable=True),
    Column(key="type", label="Type", sortable=True),
    Column(key="priority", label="Priority", sortable=True, render=badge("priority")),
    Column(key="status", label="Status", sortable=True, render=badge("status", STATUS_TONES)),
    Column(key="date", label="Date", sortable=True, render=date_text("date")),
    Column(key="amount", label="Amount", sortable=True, align="right", render=currency("amount")),
    Column(key="actions", label="Actions", searchable=False, render=lambda r: "View"),
]


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #6b7280;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #111827;}
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;}
        .table-footer {color: #6b7280;font-size: 0.9rem;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def render_page_header(title: str, breadcrumb: str):
    inject_base_styles()
    st.markdown(
        f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
        unsafe_allow_html=True,
    )


def cell_text(value: Any) -> str:
    if isinstance(value, dict) and "label" in value:
        return f"{TONE_ICONS.get(value.get('tone', 'neutral'), '')} {value['label']}".strip()
    return str(value)


def payload_frame(payload: Dict[str, Any]) -> pd.DataFrame:
    headers = payload["headers"]
    labels = []
    for h in headers:
        arrow = {"ascending": " ▲", "descending": " ▼"}.get(h["aria_sort"] or "", "")
        labels.append(f"{h['label']}{arrow}")
    rows = [[cell_text(row["cells"][h["key"]]) for h in headers] for row in payload["rows"]]
    return pd.DataFrame(rows, columns=labels)


def get_table(name: str, config: TableConfig) -> DataTable:
    key = f"_table_{name}"
    if key not in st.session_state:
        st.session_state[key] = DataTable(config)
    return st.session_state[key]


def render_table(name: str, table: DataTable, data: List[Dict[str, Any]]):
    sortable = [c for c in table.config.columns if c.sortable]
    controls = st.columns([4, 3, 2])
    with controls[0]:
        if table.config.searchable:
            query = st.text_input("Search", value=table.state.search_query, placeholder=table.config.search_placeholder, key=f"{name}_q")
            if query != table.state.search_query:
                table.dispatch(SetSearch(query), data)
    with controls[1]:
        labels = {c.key: c.title for c in sortable}
        keys = list(labels)
        choice: Optional[str] = st.selectbox(
            "Sort by",
            options=keys,
            format_func=labels.get,
            index=keys.index(table.state.sort_key) if table.state.sort_key in labels else None,
            placeholder="Natural order",
            key=f"{name}_sort",
        )
        if choice is not None and choice != table.state.sort_key:
            table.dispatch(ToggleSort(choice), data)
        if st.button("Toggle direction", key=f"{name}_dir", disabled=table.state.sort_key is None):
            table.dispatch(ToggleSort(table.state.sort_key), data)
    with controls[2]:
        options = list(table.config.page_size_options)
        size = st.selectbox(
            "Rows per page",
            options=options,
            index=options.index(table.state.page_size) if table.state.page_size in options else 0,
            key=f"{name}_size",
        )
        if size != table.state.page_size:
            table.dispatch(SetPageSize(size), data)

    payload = table.payload(data)
    if payload["rows"]:
        st.dataframe(payload_frame(payload), use_container_width=True, hide_index=True)
    else:
        st.info(payload["empty_message"])

    pager = payload["pagination"]
    if not pager["enabled"] or pager["total_items"] == 0:
        return
    footer = st.columns([4, 1, 3, 1])
    footer[0].markdown(
        f"<div class='table-footer'>Showing {pager['start_index']} to {pager['end_index']} of {pager['total_items']} entries</div>",
        unsafe_allow_html=True,
    )
    if footer[1].button("‹ Prev", key=f"{name}_prev", disabled=not pager["can_go_previous"]):
        table.dispatch(PreviousPage(), data)
        st.rerun()
    page_cols = footer[2].columns(len(pager["page_numbers"]))
    for col, number in zip(page_cols, pager["page_numbers"]):
        if col.button(str(number), key=f"{name}_p{number}", type="primary" if number == pager["page"] else "secondary"):
            table.dispatch(GoToPage(number), data)
            st.rerun()
    if footer[3].button("Next ›", key=f"{name}_next", disabled=not pager["can_go_next"]):
        table.dispatch(NextPage(), data)
        st.rerun()


# ---------- UI setup ----------
st.set_page_config(page_title="Requests", layout="wide")
inject_base_styles()

records = load_records(SAMPLE_REQUESTS_PATH)
if not records:
    st.error(f"No records found. Place a CSV at {SAMPLE_REQUESTS_PATH}.")
    st.stop()

render_page_header("Requests", "Dashboard / Requests")
requests_table = get_table(
    "requests",
    TableConfig(columns=REQUEST_COLUMNS, search_placeholder="Search requests...", page_size=10),
)
with card("All requests"):
    render_table("requests", requests_table, records)
