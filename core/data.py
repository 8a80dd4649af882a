from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence

import pandas as pd


# Sheet column index -> record field. Columns past the last index are ignored.
ORDER_COLUMNS: List[str] = [
    "customer_name",
    "design",
    "order_date",
    "pickup_date",
    "flavor",
    "base",
    "size",
    "cream",
    "request_notes",
    "special_notes",
    "source",
]

DATE_COLUMNS = ("order_date", "pickup_date")


def empty_orders() -> pd.DataFrame:
    return pd.DataFrame({col: pd.Series(dtype=object) for col in ORDER_COLUMNS})


def _cell(row: Sequence[object], idx: int) -> str:
    if idx >= len(row):
        return ""
    value = row[idx]
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value)


def parse_sheet_values(values: Optional[Sequence[Sequence[object]]]) -> pd.DataFrame:
    """Turn a raw sheet grid (row 0 = header) into an orders frame.

    Missing cells become empty strings. Dates stay as the sheet text; they are
    only interpreted when filtering or sorting.
    """
    if not values or len(values) < 2:
        return empty_orders()
    rows = [[_cell(row or [], idx) for idx in range(len(ORDER_COLUMNS))] for row in values[1:]]
    return pd.DataFrame(rows, columns=ORDER_COLUMNS, dtype=object)


def orders_to_records(df: pd.DataFrame) -> List[Dict[str, object]]:
    if df.empty:
        return []
    out = df.reset_index(names="row_id")
    return out.to_dict(orient="records")


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))
