from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, MutableMapping

from core.config import settings
from core.errors import ConfigurationMissingError


API_KEY_KEY = "cake_manager_api_key"
SHEET_ID_KEY = "cake_manager_sheet_id"
SHEET_NAME_KEY = "cake_manager_sheet_name"


@dataclass(frozen=True)
class SheetSettings:
    api_key: str = ""
    sheet_id: str = ""
    sheet_name: str = settings.default_sheet_name

    def missing_fields(self, *, include_sheet_name: bool = False) -> List[str]:
        required = ["api_key", "sheet_id"] + (["sheet_name"] if include_sheet_name else [])
        return [name for name in required if not str(getattr(self, name) or "").strip()]


def load_sheet_settings(storage: Mapping[str, object]) -> SheetSettings:
    sheet_name = str(storage.get(SHEET_NAME_KEY) or "").strip() or settings.default_sheet_name
    return SheetSettings(
        api_key=str(storage.get(API_KEY_KEY) or "").strip(),
        sheet_id=str(storage.get(SHEET_ID_KEY) or "").strip(),
        sheet_name=sheet_name,
    )


def save_sheet_settings(storage: MutableMapping[str, object], sheet: SheetSettings) -> None:
    missing = sheet.missing_fields(include_sheet_name=True)
    if missing:
        raise ConfigurationMissingError(missing)
    storage[API_KEY_KEY] = sheet.api_key.strip()
    storage[SHEET_ID_KEY] = sheet.sheet_id.strip()
    storage[SHEET_NAME_KEY] = sheet.sheet_name.strip()
