from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

import altair as alt
import pandas as pd

from core.metrics_statistics import StatItem

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def statistics_chart(items: List[StatItem], title: str) -> alt.Chart:
    df = pd.DataFrame([asdict(item) for item in items], columns=["name", "count", "percentage"])
    return (
        alt.Chart(df, title=title)
        .mark_bar(color="#374151", cornerRadiusEnd=3)
        .encode(
            x=alt.X("count:Q", title="주문 수", axis=alt.Axis(format="d", tickMinStep=1, gridDash=[4, 4], domain=False, ticks=False)),
            y=alt.Y("name:N", title=None, sort=[item.name for item in items]),
            tooltip=[
                alt.Tooltip("name:N", title="항목"),
                alt.Tooltip("count:Q", title="주문 수"),
                alt.Tooltip("percentage:Q", title="비율(%)"),
            ],
        )
        .properties(height=max(40, 24 * len(df)))
    )


def statistics_charts(statistics: Dict[str, List[StatItem]]) -> Dict[str, Dict[str, Any]]:
    return {category: to_vega_spec(statistics_chart(items, category)) for category, items in statistics.items() if items}
