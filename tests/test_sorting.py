from decimal import Decimal

from datatable.columns import Column
from datatable.sorting import next_sort, normalize_direction, sort_by_key, sort_records

SCORE = Column(key="score", sortable=True)


def names(rows):
    return [r["name"] for r in rows]


def test_null_scores_sort_last_in_both_directions_and_ties_stay_stable():
    data = [{"name": "B", "score": 2}, {"name": "A", "score": None}, {"name": "C", "score": 2}]
    assert names(sort_records(data, SCORE, "asc")) == ["B", "C", "A"]
    assert names(sort_records(data, SCORE, "desc")) == ["B", "C", "A"]


def test_missing_field_counts_as_null():
    data = [{"name": "A"}, {"name": "B", "score": 3}, {"name": "C", "score": 1}]
    assert names(sort_records(data, SCORE, "asc")) == ["C", "B", "A"]
    assert names(sort_records(data, SCORE, "desc")) == ["B", "C", "A"]


def test_stability_with_repeated_status_values():
    status = Column(key="status", sortable=True)
    data = [
        {"name": "r1", "status": "Pending"},
        {"name": "r2", "status": "Approved"},
        {"name": "r3", "status": "Pending"},
        {"name": "r4", "status": "Approved"},
        {"name": "r5", "status": "Pending"},
    ]
    assert names(sort_records(data, status, "asc")) == ["r2", "r4", "r1", "r3", "r5"]
    assert names(sort_records(data, status, "desc")) == ["r1", "r3", "r5", "r2", "r4"]


def test_numbers_compare_numerically_and_dates_chronologically():
    nums = [{"name": n, "score": s} for n, s in [("a", 10), ("b", 9), ("c", 100)]]
    assert names(sort_records(nums, SCORE)) == ["b", "a", "c"]
    when = Column(key="date", sortable=True)
    dates = [{"name": "x", "date": "2024-02-01"}, {"name": "y", "date": "2023-12-31"}, {"name": "z", "date": "2024-01-15"}]
    assert names(sort_records(dates, when, "desc")) == ["x", "z", "y"]


def test_strings_compare_case_insensitively():
    col = Column(key="name", sortable=True)
    data = [{"name": "bravo"}, {"name": "Alpha"}, {"name": "charlie"}]
    assert names(sort_records(data, col)) == ["Alpha", "bravo", "charlie"]


def test_unsortable_unknown_or_missing_column_keeps_natural_order():
    data = [{"name": "b", "score": 2}, {"name": "a", "score": 1}]
    assert names(sort_records(data, None)) == ["b", "a"]
    assert names(sort_records(data, Column(key="score"))) == ["b", "a"]
    assert names(sort_by_key(data, [SCORE], "nope")) == ["b", "a"]
    assert names(sort_by_key(data, [SCORE], "score")) == ["a", "b"]


def test_broken_accessor_degrades_to_natural_order():
    col = Column(key="x", sortable=True, accessor=lambda r: r["missing"])
    data = [{"name": "b"}, {"name": "a"}]
    assert names(sort_records(data, col)) == ["b", "a"]


def test_sort_uses_accessor_not_render():
    col = Column(key="amount", sortable=True, accessor=lambda r: r["raw"], render=lambda r: f"${r['raw']:,}")
    data = [{"name": "big", "raw": 1000}, {"name": "small", "raw": 20}]
    assert names(sort_records(data, col)) == ["small", "big"]


def test_sort_does_not_mutate_input():
    data = [{"name": "b", "score": 2}, {"name": "a", "score": 1}]
    snapshot = list(data)
    sort_records(data, SCORE, "asc")
    assert data == snapshot


def test_header_click_cycle():
    assert next_sort(None, "asc", "name") == ("name", "asc")
    assert next_sort("name", "asc", "name") == ("name", "desc")
    assert next_sort("name", "desc", "name") == ("name", "asc")
    assert next_sort("name", "desc", "date") == ("date", "asc")
    assert normalize_direction("DESC") == "desc"
    assert normalize_direction("sideways") == "asc"


def test_decimal_amounts_compare_numerically():
    col = Column(key="amount", sortable=True)
    data = [{"name": "ten", "amount": Decimal("10")}, {"name": "nine", "amount": Decimal("9")}, {"name": "half", "amount": Decimal("0.5")}]
    assert names(sort_records(data, col, "asc")) == ["half", "nine", "ten"]
    mixed = [{"name": "d", "amount": Decimal("2.5")}, {"name": "i", "amount": 3}, {"name": "f", "amount": 1.5}]
    assert names(sort_records(mixed, col, "desc")) == ["i", "d", "f"]


def test_decimal_nan_sorts_with_missing_values():
    col = Column(key="amount", sortable=True)
    data = [{"name": "nan", "amount": Decimal("NaN")}, {"name": "one", "amount": Decimal("1")}]
    assert names(sort_records(data, col, "asc")) == ["one", "nan"]


def test_large_integers_keep_exact_order():
    big = 2 ** 53
    data = [{"name": "plus_one", "score": big + 1}, {"name": "base", "score": big}]
    assert names(sort_records(data, SCORE, "asc")) == ["base", "plus_one"]
