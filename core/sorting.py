from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

import pandas as pd

from core.data import DATE_COLUMNS, ORDER_COLUMNS
from core.dates import parse_date_series


Direction = Literal["asc", "desc", "default"]

DEFAULT_SORT_COLUMN = "pickup_date"
SORTABLE_COLUMNS = tuple(ORDER_COLUMNS)

_NEXT_DIRECTION = {"asc": "desc", "desc": "default", "default": "asc"}


@dataclass(frozen=True)
class SortState:
    column: Optional[str] = None
    direction: Direction = "default"

    @property
    def effective_column(self) -> str:
        if self.direction == "default" or self.column is None:
            return DEFAULT_SORT_COLUMN
        return self.column


def toggle_sort(state: SortState, column: str) -> SortState:
    """Next sort state after a click on `column`'s header.

    A new column starts ascending. Clicking the active column cycles
    asc -> desc -> default -> asc; default always lands on pickup date.
    """
    if column not in SORTABLE_COLUMNS:
        raise ValueError(f"Unknown sort column: {column!r}")
    if column != state.column:
        return SortState(column=column, direction="asc")
    direction = _NEXT_DIRECTION[state.direction]
    if direction == "default":
        return SortState(column=DEFAULT_SORT_COLUMN, direction="default")
    return SortState(column=column, direction=direction)


def _sort_key(column: str):
    if column in DATE_COLUMNS:
        return parse_date_series
    return lambda s: s.astype(str).str.lower()


def sort_orders(orders: pd.DataFrame, state: SortState) -> pd.DataFrame:
    column = state.effective_column
    ascending = state.direction != "desc"
    if orders.empty:
        return orders
    # Unparseable dates become NaT and stay last in either direction.
    return orders.sort_values(
        by=column,
        ascending=ascending,
        kind="stable",
        na_position="last",
        key=_sort_key(column),
    )
