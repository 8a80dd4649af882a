from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Google Sheets
    sheets_api_url: str = "https://sheets.googleapis.com/v4/spreadsheets"
    sheets_range: str = "A1:K2000"
    sheets_timeout_seconds: float = 60.0
    default_sheet_name: str = "주문내역"

    # Seeded into the settings store on login when both are set
    default_api_key: Optional[str] = None
    default_sheet_id: Optional[str] = None

    # Operator account (single fixed account; login fails while no password is configured)
    operator_email: str = "ofyou"
    operator_password: Optional[str] = None
    session_ttl_hours: int = 24

    # Statistics cards
    stat_top_n: int = 10

    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:8501", "http://127.0.0.1:8501"]

    model_config = SettingsConfigDict(
        env_prefix="CAKE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("stat_top_n")
    @classmethod
    def clamp_top_n(cls, value: int) -> int:
        return max(1, min(50, value))


settings = Settings()
