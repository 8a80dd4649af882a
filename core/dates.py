from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

import pandas as pd


_DATE_RE = re.compile(r"^\s*(\d{4})\s*-\s*(\d{1,2})\s*-\s*(\d{1,2})\s*-?\s*$")


def parse_order_date(value: object) -> Optional[date]:
    """Parse `YYYY.MM.DD` / `YYYY-MM-DD` sheet text into a date, or None when unparseable.

    Filtering and sorting both go through this function so they always agree on
    which records carry a usable date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value)
    if not text.strip():
        return None
    match = _DATE_RE.match(text.replace(".", "-"))
    if not match:
        return None
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return None


def parse_date_series(values: pd.Series) -> pd.Series:
    parsed = [parse_order_date(v) for v in values]
    stamps = [pd.Timestamp(d) if d is not None else pd.NaT for d in parsed]
    return pd.Series(pd.to_datetime(stamps), index=values.index)


def format_sheet_date(value: date) -> str:
    return value.strftime("%Y.%m.%d")


def format_date_range_label(start: Optional[date], end: Optional[date]) -> str:
    if start is None:
        return "날짜를 선택하세요"
    end = end or start
    first, last = format_sheet_date(start), format_sheet_date(end)
    if first == last:
        return f"{first} (1일)"
    days = abs((end - start).days) + 1
    return f"{first} - {last} (총 {days}일)"
