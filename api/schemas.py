from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from core.config import settings
from core.filters import ALL_SOURCES


class DateRangeModel(BaseModel):
    start: Optional[date] = None
    end: Optional[date] = None


class OrderFiltersModel(BaseModel):
    date_range: DateRangeModel = Field(default_factory=DateRangeModel)
    customer_search: str = ""
    order_source: str = ALL_SOURCES


class SortStateModel(BaseModel):
    column: Optional[str] = None
    direction: Literal["asc", "desc", "default"] = "default"


class SheetSettingsModel(BaseModel):
    api_key: str = ""
    sheet_id: str = ""
    sheet_name: str = settings.default_sheet_name


class OrdersViewRequest(BaseModel):
    values: List[List[Optional[str]]] = Field(default_factory=list)
    filters: OrderFiltersModel = Field(default_factory=OrderFiltersModel)
    sort: SortStateModel = Field(default_factory=SortStateModel)


class OrdersFetchRequest(BaseModel):
    sheet: SheetSettingsModel
    filters: OrderFiltersModel = Field(default_factory=OrderFiltersModel)
    sort: SortStateModel = Field(default_factory=SortStateModel)


class SortToggleRequest(BaseModel):
    sort: SortStateModel = Field(default_factory=SortStateModel)
    column: str

    @field_validator("column")
    @classmethod
    def strip_column(cls, value: str) -> str:
        return value.strip()


class StatItemModel(BaseModel):
    name: str
    count: int
    percentage: int


class OrderModel(BaseModel):
    row_id: int
    customer_name: str
    design: str
    order_date: str
    pickup_date: str
    flavor: str
    base: str
    size: str
    cream: str
    request_notes: Optional[str] = None
    special_notes: Optional[str] = None
    source: str


class OrdersViewResponse(BaseModel):
    filters: OrderFiltersModel
    sort: SortStateModel
    date_range_label: str
    total: int
    rows: List[OrderModel]
    statistics: Dict[str, List[StatItemModel]]
    order_sources: List[str]
    charts: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
