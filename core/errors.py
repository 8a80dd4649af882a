from __future__ import annotations

from typing import Dict, Iterable, Optional


SHEETS_ERROR_MESSAGE = "시트를 '링크가 있는 모든 사용자'로 공유했는지, API Key/Sheet ID/Sheet Name을 확인하세요."
CONFIG_MISSING_MESSAGE = "Google Sheets API 설정을 먼저 완료해주세요."


class DashboardError(Exception):
    """Base exception for dashboard errors."""

    def __init__(self, code: str, message: str, status_code: int = 400, details: Optional[Dict[str, object]] = None):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationMissingError(DashboardError):
    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__("CONFIGURATION_MISSING", CONFIG_MISSING_MESSAGE, 400, details={"fields": self.fields})


class SheetsFetchError(DashboardError):
    """The spreadsheet could not be read; `message` is safe to show to the operator."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__("SHEETS_FETCH_FAILED", SHEETS_ERROR_MESSAGE, 502, details={"detail": detail})
