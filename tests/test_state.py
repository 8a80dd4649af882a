"""Tests for the dashboard view state"""

from datetime import date

import pytest

from core.config import settings
from core.errors import ConfigurationMissingError, SheetsFetchError, SHEETS_ERROR_MESSAGE
from core.filters import ALL_SOURCES, OrderFilters
from core.settings_store import SheetSettings
from core.sorting import SortState
from core.state import DashboardState, recompute

from tests.helpers import make_orders, make_row

SHEET = SheetSettings(api_key="key", sheet_id="sheet", sheet_name="주문내역")


def names(df):
    return df["customer_name"].tolist()


class FakeFetcher:
    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def __call__(self, sheet):
        self.calls.append(sheet)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def test_initial_state_is_empty():
    state = DashboardState(fetcher=FakeFetcher())
    assert state.view.total == 0
    assert state.view.order_sources == []
    assert all(items == [] for items in state.view.statistics.values())
    assert state.filters == OrderFilters()
    assert state.error is None


def test_recompute_sorts_rows_and_counts_filtered_orders(sample_orders):
    filters = OrderFilters(order_source="Instagram")
    view = recompute(sample_orders, filters, SortState("customer_name", "asc"))

    assert names(view.rows) == ["Jung Ara", "Kim Minji", "Lee Hana"]
    assert [(i.name, i.count) for i in view.statistics["design"]] == [("Heart", 3)]
    assert view.order_sources == ["Instagram", "Kakao", "Phone"]


def test_statistics_do_not_depend_on_sort(sample_orders):
    a = recompute(sample_orders, OrderFilters(), SortState("design", "asc"))
    b = recompute(sample_orders, OrderFilters(), SortState("customer_name", "desc"))
    assert a.statistics == b.statistics


def test_every_setter_recomputes(sample_orders):
    state = DashboardState(fetcher=FakeFetcher())
    state.set_orders(sample_orders)
    assert state.view.total == 6

    state.set_date_range(date(2024, 1, 3), date(2024, 1, 5))
    assert names(state.view.rows) == ["Lee Hana", "Jung Ara", "Choi Yuna", "Park Jisoo"]

    state.set_customer_search("a")
    state.set_order_source("Kakao")
    assert names(state.view.rows) == ["Choi Yuna", "Park Jisoo"]
    assert [i.name for i in state.view.statistics["design"]] == ["Star"]

    state.toggle_sort("customer_name")
    assert names(state.view.rows) == ["Choi Yuna", "Park Jisoo"]
    state.toggle_sort("customer_name")
    assert names(state.view.rows) == ["Park Jisoo", "Choi Yuna"]

    state.set_order_source(ALL_SOURCES)
    state.set_customer_search("")
    state.set_date_range(None, None)
    assert state.view.total == 6


def test_fetch_replaces_orders(sample_orders):
    fetcher = FakeFetcher(sample_orders)
    state = DashboardState(fetcher=fetcher)

    assert state.fetch_orders(SHEET) is True
    assert fetcher.calls == [SHEET]
    assert state.view.total == 6
    assert state.error is None
    assert state.is_loading is False


def test_failed_fetch_keeps_previous_orders(sample_orders):
    """A 403 keeps the old data and fills the error slot until consumed"""
    fetcher = FakeFetcher(sample_orders, SheetsFetchError("HTTP 403: Forbidden"))
    state = DashboardState(fetcher=fetcher)
    state.fetch_orders(SHEET)
    rows_before = state.view.rows.copy()

    assert state.fetch_orders(SHEET) is False
    assert state.orders is not None and len(state.orders) == 6
    assert state.view.rows.equals(rows_before)
    assert state.error == SHEETS_ERROR_MESSAGE
    assert state.is_loading is False

    assert state.consume_error() == SHEETS_ERROR_MESSAGE
    assert state.error is None
    assert state.consume_error() is None


def test_clear_error():
    state = DashboardState(fetcher=FakeFetcher(SheetsFetchError("boom")))
    state.fetch_orders(SHEET)
    assert state.error
    state.clear_error()
    assert state.error is None


def test_missing_configuration_is_raised_before_fetching(sample_orders):
    fetcher = FakeFetcher()
    state = DashboardState(fetcher=fetcher)
    state.set_orders(sample_orders)

    with pytest.raises(ConfigurationMissingError) as exc_info:
        state.fetch_orders(SheetSettings(api_key="", sheet_id=" "))

    assert exc_info.value.fields == ["api_key", "sheet_id"]
    assert fetcher.calls == []
    assert state.view.total == 6


def test_fetch_is_ignored_while_loading():
    fetcher = FakeFetcher()
    state = DashboardState(fetcher=fetcher)
    state.is_loading = True

    assert state.fetch_orders(SHEET) is False
    assert fetcher.calls == []


def test_new_fetch_keeps_filters():
    first = make_orders(make_row(name="Kim", source="Kakao"))
    second = make_orders(make_row(name="Kim", source="Kakao"), make_row(name="Lee", source="Phone"))
    state = DashboardState(fetcher=FakeFetcher(first, second))
    state.set_order_source("Kakao")

    state.fetch_orders(SHEET)
    state.fetch_orders(SHEET)
    assert names(state.view.rows) == ["Kim"]
    assert state.view.order_sources == ["Kakao", "Phone"]


def test_recompute_reads_top_n_setting_at_call_time(monkeypatch):
    orders = make_orders(*[make_row(design=d) for d in ["Heart", "Heart", "Star", "Moon"]])
    monkeypatch.setattr(settings, "stat_top_n", 2)
    view = recompute(orders, OrderFilters(), SortState())
    assert [item.name for item in view.statistics["design"]] == ["Heart", "Star"]
