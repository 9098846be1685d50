from datatable.formatting import FORMATTERS, badge, currency, date_text, format_currency, format_percent, number, percent


def test_value_formatters():
    assert format_currency(1234.4) == "$1,234"
    assert format_currency(1234.4, decimals=2) == "$1,234.40"
    assert format_currency(None) == "N/A"
    assert format_percent(0.256, decimals=1) == "25.6%"
    assert format_percent(None) == ""


def test_renderer_factories_read_raw_fields():
    row = {"pay": {"net": 4200}, "rate": 0.5, "date": "2024-01-05", "hours": 1500, "status": "Pending"}
    assert currency("pay.net")(row) == "$4,200"
    assert percent("rate")(row) == "50%"
    assert number("hours")(row) == "1,500"
    assert date_text("date")(row) == "05 Jan 2024"
    assert date_text("missing")(row) == ""
    assert badge("status", {"Pending": "warning"})(row) == {"label": "Pending", "tone": "warning"}
    assert badge("status")(row)["tone"] == "neutral"


def test_formatter_registry():
    assert set(FORMATTERS) == {"currency", "percent", "number", "date", "badge"}
