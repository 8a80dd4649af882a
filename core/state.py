from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Callable, Dict, List, Optional

import pandas as pd

from core.config import settings
from core.data import empty_orders
from core.errors import ConfigurationMissingError, SheetsFetchError
from core.filters import DateRange, OrderFilters, apply_filters, unique_order_sources
from core.metrics_statistics import StatItem, compute_statistics
from core.settings_store import SheetSettings
from core.sheets import fetch_orders as fetch_sheet_orders
from core.sorting import SortState, sort_orders, toggle_sort

logger = logging.getLogger(__name__)

Fetcher = Callable[[SheetSettings], pd.DataFrame]


@dataclass(frozen=True)
class DerivedView:
    rows: pd.DataFrame
    statistics: Dict[str, List[StatItem]]
    order_sources: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.rows)


def recompute(
    orders: pd.DataFrame,
    filters: OrderFilters,
    sort: SortState,
    *,
    top_n: Optional[int] = None,
) -> DerivedView:
    """Derive the displayed rows and statistics from the current inputs.

    Statistics are computed over the filtered orders before sorting; sorting
    only affects row order.
    """
    top_n = top_n or settings.stat_top_n
    filtered = apply_filters(orders, filters)
    return DerivedView(
        rows=sort_orders(filtered, sort),
        statistics=compute_statistics(filtered, top_n),
        order_sources=unique_order_sources(orders),
    )


class DashboardState:
    """Inputs of the orders dashboard plus the view derived from them.

    Every input setter recomputes the derived view before returning, so `view`
    always matches the latest inputs.
    """

    def __init__(self, *, fetcher: Optional[Fetcher] = None, top_n: Optional[int] = None):
        self._fetcher = fetcher or fetch_sheet_orders
        self.top_n = top_n or settings.stat_top_n
        self.orders: pd.DataFrame = empty_orders()
        self.filters = OrderFilters()
        self.sort = SortState()
        self.error: Optional[str] = None
        self.is_loading = False
        self.view = recompute(self.orders, self.filters, self.sort, top_n=self.top_n)

    def _recompute(self) -> None:
        self.view = recompute(self.orders, self.filters, self.sort, top_n=self.top_n)

    def set_orders(self, orders: pd.DataFrame) -> None:
        self.orders = orders
        self._recompute()

    def set_date_range(self, start: Optional[date], end: Optional[date]) -> None:
        self.filters = replace(self.filters, date_range=DateRange(start=start, end=end))
        self._recompute()

    def set_customer_search(self, search: str) -> None:
        self.filters = replace(self.filters, customer_search=search or "")
        self._recompute()

    def set_order_source(self, source: str) -> None:
        self.filters = replace(self.filters, order_source=source)
        self._recompute()

    def toggle_sort(self, column: str) -> SortState:
        self.sort = toggle_sort(self.sort, column)
        self._recompute()
        return self.sort

    def fetch_orders(self, sheet: SheetSettings) -> bool:
        """Replace the orders with a fresh read of the sheet.

        Returns True when new orders were loaded. On failure the previous orders
        and view are kept and `error` holds the message to show.
        """
        missing = sheet.missing_fields()
        if missing:
            raise ConfigurationMissingError(missing)
        if self.is_loading:
            logger.warning("Fetch already in progress; ignoring new request")
            return False

        self.is_loading = True
        self.error = None
        try:
            orders = self._fetcher(sheet)
        except SheetsFetchError as exc:
            self.error = exc.message
            return False
        finally:
            self.is_loading = False

        self.set_orders(orders)
        return True

    def consume_error(self) -> Optional[str]:
        error, self.error = self.error, None
        return error

    def clear_error(self) -> None:
        self.error = None
