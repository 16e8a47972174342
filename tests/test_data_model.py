import pytest

from trendline.data_model import Category, Record, Series, color_for, group_series

from conftest import day


def test_category_colors_and_fallback():
    assert Category.lookup("AAL").color == "gray"
    assert Category.lookup("UAL").color == "steelblue"
    assert Category.lookup("DAL").color == "firebrick"
    assert Category.lookup("JBU") is None
    assert color_for("DAL") == "firebrick"
    assert color_for("JBU") == "black"
    assert color_for("JBU", fallback="#123456") == "#123456"


def test_group_series_keeps_first_appearance_and_sorts():
    records = [
        Record(day(9), 3.0, "UAL"),
        Record(day(2), 1.0, "AAL"),
        Record(day(1), 2.0, "UAL"),
        Record(day(5), 4.0, "AAL"),
    ]
    series = group_series(records)
    assert [s.category for s in series] == ["UAL", "AAL"]
    assert series[0].timestamps == (day(1), day(9))
    assert [r.price for r in series[1].records] == [1.0, 4.0]


def test_series_sort_is_stable_for_equal_timestamps():
    a = Record(day(3), 1.0, "AAL")
    b = Record(day(3), 2.0, "AAL")
    s = Series("AAL", (a, b))
    assert s.records == (a, b)


def test_series_must_not_be_empty():
    with pytest.raises(ValueError):
        Series("AAL", ())
