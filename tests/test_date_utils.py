from datetime import datetime, timezone

from trendline.date_utils import (
    add_months,
    format_long_date,
    format_short_date,
    month_ticks,
    parse_date,
)


def test_parse_two_digit_year_as_utc():
    ts = parse_date(" 03/07/23 ", "%m/%d/%y")
    assert ts == datetime(2023, 3, 7, tzinfo=timezone.utc).timestamp()


def test_tooltip_date_formats():
    ts = parse_date("03/07/23", "%m/%d/%y")
    assert format_long_date(ts) == "Tue Mar 07 2023"
    assert format_short_date(ts) == "3/7/2023"


def test_add_months_clamps_day():
    assert add_months(datetime(2023, 1, 31), 1) == datetime(2023, 2, 28)
    assert add_months(datetime(2023, 11, 15), 3) == datetime(2024, 2, 15)


def test_month_ticks_cross_year():
    t0 = parse_date("11/20/23", "%m/%d/%y")
    t1 = parse_date("02/01/24", "%m/%d/%y")
    labels = [datetime.fromtimestamp(t, tz=timezone.utc).strftime("%Y-%m-%d") for t in month_ticks(t0, t1)]
    assert labels == ["2023-12-01", "2024-01-01", "2024-02-01"]
