import pytest

from datatable.columns import Column
from datatable.config import MAX_PAGE_SIZE
from datatable.state import (
    GoToPage,
    NextPage,
    PreviousPage,
    SetPageSize,
    SetSearch,
    TableState,
    ToggleSort,
    action_from_dict,
    initial_state,
    normalize_state,
    transition,
)

COLUMNS = [Column(key="name", sortable=True), Column(key="date", sortable=True), Column(key="actions")]


def test_initial_state_defaults():
    state = initial_state(page_size=20)
    assert state == TableState(search_query="", sort_key=None, sort_direction="asc", page=1, page_size=20)


def test_search_resets_to_first_page():
    state = TableState(page=3)
    after = transition(state, SetSearch("pend"))
    assert after.search_query == "pend"
    assert after.page == 1


def test_sort_toggle_keeps_page():
    state = TableState(page=2)
    state = transition(state, ToggleSort("name"), columns=COLUMNS)
    assert (state.sort_key, state.sort_direction, state.page) == ("name", "asc", 2)
    state = transition(state, ToggleSort("name"), columns=COLUMNS)
    assert state.sort_direction == "desc"
    state = transition(state, ToggleSort("date"), columns=COLUMNS)
    assert (state.sort_key, state.sort_direction) == ("date", "asc")


def test_sort_toggle_on_non_sortable_or_unknown_column_is_ignored():
    state = TableState(sort_key="name", sort_direction="desc")
    assert transition(state, ToggleSort("actions"), columns=COLUMNS) == state
    assert transition(state, ToggleSort("ghost"), columns=COLUMNS) == state


def test_page_navigation_is_clamped():
    state = TableState(page=2)
    assert transition(state, GoToPage(10), total_pages=4).page == 4
    assert transition(state, GoToPage(-3), total_pages=4).page == 1
    assert transition(state, GoToPage(10)).page == 10
    assert transition(TableState(page=4), NextPage(), total_pages=4).page == 4
    assert transition(TableState(page=1), PreviousPage(), total_pages=4).page == 1
    assert transition(TableState(page=2), NextPage(), total_pages=4).page == 3


def test_page_size_change_resets_page():
    state = transition(TableState(page=5, page_size=10), SetPageSize(20))
    assert (state.page, state.page_size) == (1, 20)
    assert transition(state, SetPageSize(MAX_PAGE_SIZE * 10)).page_size == MAX_PAGE_SIZE
    assert transition(state, SetPageSize(0)).page_size == 1


def test_unknown_action_object_is_a_type_error():
    with pytest.raises(TypeError):
        transition(TableState(), object())


def test_actions_from_dicts():
    assert action_from_dict({"type": "set_search", "query": "x"}) == SetSearch("x")
    assert action_from_dict({"type": "toggle_sort", "column_key": "name"}) == ToggleSort("name")
    assert action_from_dict({"type": "go_to_page", "page": "3"}) == GoToPage(3)
    assert action_from_dict({"type": "next_page"}) == NextPage()
    with pytest.raises(ValueError):
        action_from_dict({"type": "explode"})
    with pytest.raises(ValueError):
        action_from_dict({"type": "go_to_page"})


def test_normalize_state_from_untrusted_input():
    state = normalize_state({"page": "abc", "page_size": "9999", "sort_direction": "DESC", "sort_key": ""})
    assert state.page == 1
    assert state.page_size == MAX_PAGE_SIZE
    assert state.sort_direction == "desc"
    assert state.sort_key is None
    assert normalize_state(None) == TableState()
