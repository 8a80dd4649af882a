"""Tests for the date, customer name and order source filters"""

from datetime import date, datetime

import pandas as pd

from core.filters import (
    ALL_SOURCES,
    DateRange,
    OrderFilters,
    apply_filters,
    filter_by_customer_name,
    filter_by_date,
    filter_by_order_source,
    normalize_filters,
    unique_order_sources,
)

from tests.helpers import make_orders, make_row


def names(df):
    return df["customer_name"].tolist()


def test_unbounded_date_filter_is_identity(sample_orders):
    result = filter_by_date(sample_orders, None, None)
    pd.testing.assert_frame_equal(result, sample_orders)


def test_single_day_range_is_inclusive():
    """A one-day range keeps that day only"""
    orders = make_orders(
        make_row(name="before", pickup_date="2024.01.02"),
        make_row(name="on", pickup_date="2024.01.03"),
        make_row(name="after", pickup_date="2024.01.04"),
    )
    result = filter_by_date(orders, date(2024, 1, 3), date(2024, 1, 3))
    assert names(result) == ["on"]


def test_datetime_bounds_are_truncated_to_the_day():
    orders = make_orders(make_row(name="on", pickup_date="2024.01.03"))
    result = filter_by_date(orders, datetime(2024, 1, 3, 18, 30), datetime(2024, 1, 3, 9, 0))
    assert names(result) == ["on"]


def test_open_ended_ranges(sample_orders):
    assert names(filter_by_date(sample_orders, date(2024, 1, 5), None)) == ["Kim Minji", "Park Jisoo"]
    assert names(filter_by_date(sample_orders, None, date(2024, 1, 3))) == ["Lee Hana", "Jung Ara"]


def test_unparseable_pickup_dates_are_dropped_once_a_bound_is_set(sample_orders):
    assert "kim seoyeon" in names(filter_by_date(sample_orders, None, None))
    assert "kim seoyeon" not in names(filter_by_date(sample_orders, date(2000, 1, 1), None))
    assert "kim seoyeon" not in names(filter_by_date(sample_orders, None, date(2100, 1, 1)))


def test_customer_name_filter_is_case_insensitive(sample_orders):
    lower = filter_by_customer_name(sample_orders, "kim")
    upper = filter_by_customer_name(sample_orders, "KIM")
    assert names(lower) == ["Kim Minji", "kim seoyeon"]
    pd.testing.assert_frame_equal(lower, upper)


def test_partial_name_search():
    orders = make_orders(make_row(name="Kim"))
    assert len(filter_by_customer_name(orders, "ki")) == 1
    assert filter_by_customer_name(orders, "park").empty


def test_blank_search_is_noop(sample_orders):
    for text in ("", "   ", "\t"):
        assert len(filter_by_customer_name(sample_orders, text)) == len(sample_orders)


def test_source_filter_exact_match(sample_orders):
    assert names(filter_by_order_source(sample_orders, "Kakao")) == ["Park Jisoo", "Choi Yuna"]
    assert filter_by_order_source(sample_orders, "kakao").empty
    assert len(filter_by_order_source(sample_orders, ALL_SOURCES)) == len(sample_orders)
    assert len(filter_by_order_source(sample_orders, "")) == len(sample_orders)


def test_filters_do_not_mutate_input(sample_orders):
    before = sample_orders.copy()
    filters = OrderFilters(date_range=DateRange(date(2024, 1, 3), date(2024, 1, 5)), customer_search="a", order_source="Kakao")
    apply_filters(sample_orders, filters)
    pd.testing.assert_frame_equal(sample_orders, before)


def test_apply_filters_is_a_subset_and_idempotent(sample_orders):
    filters = OrderFilters(date_range=DateRange(date(2024, 1, 3), None), customer_search="a", order_source="Instagram")
    once = apply_filters(sample_orders, filters)
    twice = apply_filters(once, filters)

    assert set(once.index).issubset(set(sample_orders.index))
    assert names(once) == ["Lee Hana", "Jung Ara"]
    pd.testing.assert_frame_equal(once, twice)


def test_normalize_filters_accepts_loose_input():
    filters = normalize_filters(
        {"date_range": {"start": "2024.01.03", "end": "2024-01-09T00:00:00"}, "customer_search": "kim", "order_source": None}
    )
    assert filters.date_range == DateRange(date(2024, 1, 3), date(2024, 1, 9))
    assert filters.customer_search == "kim"
    assert filters.order_source == ALL_SOURCES

    empty = normalize_filters({})
    assert empty.date_range.is_unbounded
    assert empty == OrderFilters()


def test_unique_order_sources_are_sorted_and_skip_blanks(sample_orders):
    orders = pd.concat([sample_orders, make_orders(make_row(source=""))], ignore_index=True)
    assert unique_order_sources(orders) == ["Instagram", "Kakao", "Phone"]
    assert unique_order_sources(make_orders()) == []


def test_source_with_surrounding_spaces_matches_exactly():
    """A source offered by the selector filters back to the same orders"""
    orders = make_orders(make_row(name="Kim", source=" Instagram"), make_row(name="Lee", source="Instagram"))
    source = unique_order_sources(orders)[0]
    filters = normalize_filters({"order_source": source})

    assert source == " Instagram"
    assert filters.order_source == " Instagram"
    assert names(apply_filters(orders, filters)) == ["Kim"]
    assert normalize_filters({"order_source": ""}).order_source == ALL_SOURCES
