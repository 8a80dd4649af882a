"""Read the order sheet through the Google Sheets values API."""

from __future__ import annotations

import logging
from typing import List, Optional
from urllib.parse import quote

import httpx
import pandas as pd

from core.config import settings
from core.data import parse_sheet_values
from core.errors import SheetsFetchError
from core.settings_store import SheetSettings

logger = logging.getLogger(__name__)


def build_values_url(sheet_id: str, sheet_name: str) -> str:
    cell_range = quote(f"{sheet_name}!{settings.sheets_range}", safe="!:")
    return f"{settings.sheets_api_url}/{quote(sheet_id, safe='')}/values/{cell_range}"


def fetch_sheet_values(sheet: SheetSettings, *, client: Optional[httpx.Client] = None) -> List[List[str]]:
    """GET the fixed A1:K2000 range and return the raw grid (header row included).

    Any failure is raised as SheetsFetchError with the operator-facing message;
    the technical reason is logged and kept on `detail`.
    """
    url = build_values_url(sheet.sheet_id, sheet.sheet_name)
    own_client = client is None
    client = client or httpx.Client(timeout=settings.sheets_timeout_seconds)
    try:
        response = client.get(url, params={"key": sheet.api_key})
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        detail = f"HTTP {e.response.status_code}: {e.response.reason_phrase}"
        logger.error("Google Sheets API error: %s", detail)
        raise SheetsFetchError(detail) from e
    except httpx.HTTPError as e:
        logger.error("Google Sheets request failed: %s", e)
        raise SheetsFetchError(str(e) or type(e).__name__) from e
    except ValueError as e:
        logger.error("Google Sheets returned a non-JSON body: %s", e)
        raise SheetsFetchError("Response body is not JSON") from e
    finally:
        if own_client:
            client.close()

    if not isinstance(data, dict) or not isinstance(data.get("values"), list):
        logger.error("Google Sheets response has no 'values' grid")
        raise SheetsFetchError("Response body has no 'values' grid")
    return data["values"]


def fetch_orders(sheet: SheetSettings, *, client: Optional[httpx.Client] = None) -> pd.DataFrame:
    orders = parse_sheet_values(fetch_sheet_values(sheet, client=client))
    logger.info("Loaded %d orders from sheet %s/%s", len(orders), sheet.sheet_id, sheet.sheet_name)
    return orders
