from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List

import pandas as pd

from core.data import round_half_up


# Category name -> order field, in display order.
STAT_CATEGORIES: Dict[str, str] = {
    "design": "design",
    "flavor": "flavor",
    "size": "size",
    "base": "base",
    "cream": "cream",
}

DEFAULT_TOP_N = 10


@dataclass(frozen=True)
class StatItem:
    name: str
    count: int
    percentage: int


def count_by(orders: pd.DataFrame, field: str) -> pd.Series:
    """Occurrences per non-blank value, in first-seen order."""
    if orders.empty or field not in orders.columns:
        return pd.Series(dtype="int64")
    values = orders[field].astype(str)
    values = values[values.str.strip() != ""]
    if values.empty:
        return pd.Series(dtype="int64")
    return values.groupby(values, sort=False).size()


def to_stat_items(counts: pd.Series, limit: int = DEFAULT_TOP_N) -> List[StatItem]:
    if counts.empty:
        return []
    # Stable, so equal counts keep first-seen order.
    ranked = counts.sort_values(ascending=False, kind="stable").head(limit)
    max_count = int(ranked.iloc[0]) or 1
    return [
        StatItem(
            name=str(name),
            count=int(count),
            percentage=int(round_half_up(int(count) / max_count * 100)),
        )
        for name, count in ranked.items()
    ]


def compute_statistics(orders: pd.DataFrame, top_n: int = DEFAULT_TOP_N) -> Dict[str, List[StatItem]]:
    return {category: to_stat_items(count_by(orders, field), top_n) for category, field in STAT_CATEGORIES.items()}


def statistics_payload(statistics: Dict[str, List[StatItem]]) -> Dict[str, List[Dict[str, Any]]]:
    return {category: [asdict(item) for item in items] for category, items in statistics.items()}
