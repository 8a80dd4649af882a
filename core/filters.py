from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

import pandas as pd

from core.dates import parse_date_series, parse_order_date


ALL_SOURCES = "모든 주문경로"


@dataclass(frozen=True)
class DateRange:
    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self) -> None:
        # Bounds compare at day granularity.
        if isinstance(self.start, datetime):
            object.__setattr__(self, "start", self.start.date())
        if isinstance(self.end, datetime):
            object.__setattr__(self, "end", self.end.date())

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None


@dataclass(frozen=True)
class OrderFilters:
    date_range: DateRange = field(default_factory=DateRange)
    customer_search: str = ""
    order_source: str = ALL_SOURCES


def _day(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def _as_date(value: object) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, str) and "T" in value:
        value = value.split("T", 1)[0]
    return parse_order_date(value)


def normalize_filters(raw: dict) -> OrderFilters:
    raw = raw or {}
    date_range = raw.get("date_range") or {}
    start = _as_date(date_range.get("start", raw.get("start")))
    end = _as_date(date_range.get("end", raw.get("end")))

    customer_search = str(raw.get("customer_search") or "")
    order_source = str(raw.get("order_source") or "") or ALL_SOURCES
    return OrderFilters(
        date_range=DateRange(start=start, end=end),
        customer_search=customer_search,
        order_source=order_source,
    )


def filter_by_date(orders: pd.DataFrame, start: Optional[date], end: Optional[date]) -> pd.DataFrame:
    """Keep orders whose pickup date falls inside [start, end].

    With no bound set this is the identity. With any bound set, orders whose
    pickup date cannot be parsed are dropped.
    """
    if start is None and end is None:
        return orders
    pickup = parse_date_series(orders["pickup_date"])
    mask = pickup.notna()
    if start is not None:
        mask &= pickup >= pd.Timestamp(_day(start))
    if end is not None:
        mask &= pickup <= pd.Timestamp(_day(end))
    return orders[mask]


def filter_by_customer_name(orders: pd.DataFrame, search: str) -> pd.DataFrame:
    if not search or not search.strip():
        return orders
    term = search.lower()
    mask = orders["customer_name"].astype(str).str.lower().str.contains(term, regex=False)
    return orders[mask]


def filter_by_order_source(orders: pd.DataFrame, source: Optional[str]) -> pd.DataFrame:
    if not source or source == ALL_SOURCES:
        return orders
    return orders[orders["source"] == source]


def apply_filters(orders: pd.DataFrame, filters: OrderFilters) -> pd.DataFrame:
    filtered = filter_by_date(orders, filters.date_range.start, filters.date_range.end)
    filtered = filter_by_customer_name(filtered, filters.customer_search)
    return filter_by_order_source(filtered, filters.order_source)


def unique_order_sources(orders: pd.DataFrame) -> List[str]:
    if orders.empty:
        return []
    sources = orders["source"].astype(str)
    return sorted({s for s in sources.tolist() if s})
