from __future__ import annotations

from dataclasses import asdict
import logging
from typing import Any, Dict

import pandas as pd
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.responses import Response

from api.schemas import (
    OrderFiltersModel,
    OrdersFetchRequest,
    OrdersViewRequest,
    OrdersViewResponse,
    SortStateModel,
    SortToggleRequest,
)
from core.charts import statistics_charts
from core.config import settings
from core.data import orders_to_records, parse_sheet_values
from core.dates import format_date_range_label
from core.errors import ConfigurationMissingError, DashboardError
from core.filters import OrderFilters, normalize_filters
from core.metrics_statistics import statistics_payload
from core.settings_store import SheetSettings
from core.sheets import fetch_orders
from core.sorting import SortState, toggle_sort
from core.state import recompute


logging.basicConfig(level=settings.log_level)
app = FastAPI(title="Cake Order Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _filters_from_model(model: OrderFiltersModel) -> OrderFilters:
    return normalize_filters(model.model_dump())


def _sort_from_model(model: SortStateModel) -> SortState:
    return SortState(column=model.column, direction=model.direction)


def _error(exc: DashboardError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code, "type": type(exc).__name__},
    )


def _view_payload(orders: pd.DataFrame, filters: OrderFilters, sort: SortState) -> Dict[str, Any]:
    view = recompute(orders, filters, sort, top_n=settings.stat_top_n)
    return {
        "filters": asdict(filters),
        "sort": asdict(sort),
        "date_range_label": format_date_range_label(filters.date_range.start, filters.date_range.end),
        "total": view.total,
        "rows": orders_to_records(view.rows),
        "statistics": statistics_payload(view.statistics),
        "order_sources": view.order_sources,
        "charts": statistics_charts(view.statistics),
    }


@app.post("/orders/view", response_model=OrdersViewResponse)
def orders_view(request: OrdersViewRequest):
    try:
        orders = parse_sheet_values(request.values)
        return _view_payload(orders, _filters_from_model(request.filters), _sort_from_model(request.sort))
    except Exception as exc:
        logger.exception("orders_view failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.post("/orders/fetch", response_model=OrdersViewResponse)
def orders_fetch(request: OrdersFetchRequest):
    sheet = SheetSettings(**request.sheet.model_dump())
    try:
        missing = sheet.missing_fields()
        if missing:
            raise ConfigurationMissingError(missing)
        orders = fetch_orders(sheet)
        return _view_payload(orders, _filters_from_model(request.filters), _sort_from_model(request.sort))
    except DashboardError as exc:
        logger.warning("orders_fetch rejected: %s", exc.code)
        return _error(exc)
    except Exception as exc:
        logger.exception("orders_fetch failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.post("/orders/sort/toggle", response_model=SortStateModel)
def orders_sort_toggle(request: SortToggleRequest):
    try:
        return asdict(toggle_sort(_sort_from_model(request.sort), request.column))
    except ValueError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc), "type": type(exc).__name__})


@app.post("/orders/export")
def orders_export(request: OrdersViewRequest):
    orders = parse_sheet_values(request.values)
    view = recompute(orders, _filters_from_model(request.filters), _sort_from_model(request.sort))
    csv_bytes = view.rows.to_csv(index=False).encode("utf-8-sig")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": "attachment; filename=orders.csv"})
