"""Operator login for the dashboard.

There is exactly one operator account, configured through `CAKE_OPERATOR_EMAIL`
and `CAKE_OPERATOR_PASSWORD`. A successful login stores a random session token
with an expiry in the caller's per-session storage.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from typing import MutableMapping, Optional

from core.config import settings
from core.settings_store import API_KEY_KEY, SHEET_ID_KEY, SHEET_NAME_KEY

logger = logging.getLogger(__name__)

AUTH_KEY = "cake_manager_auth"


@dataclass(frozen=True)
class AuthToken:
    email: str
    token: str
    expires: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Naive `now` values are taken as UTC."""
        now = now or _utcnow()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now > self.expires


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def check_credentials(email: str, password: str) -> bool:
    if not settings.operator_password:
        return False
    email_ok = secrets.compare_digest(email.encode("utf-8"), settings.operator_email.encode("utf-8"))
    password_ok = secrets.compare_digest(password.encode("utf-8"), settings.operator_password.encode("utf-8"))
    return email_ok and password_ok


def seed_sheet_settings(storage: MutableMapping[str, object]) -> None:
    """Pre-fill the sheet connection from configured defaults, keeping anything already saved."""
    if not (settings.default_api_key and settings.default_sheet_id):
        return
    storage.setdefault(API_KEY_KEY, settings.default_api_key)
    storage.setdefault(SHEET_ID_KEY, settings.default_sheet_id)
    storage.setdefault(SHEET_NAME_KEY, settings.default_sheet_name)


def login(storage: MutableMapping[str, object], email: str, password: str, *, now: Optional[datetime] = None) -> bool:
    if not check_credentials(email, password):
        logger.warning("Rejected login for %s", email)
        return False
    token = AuthToken(
        email=email,
        token=secrets.token_urlsafe(9),
        expires=(now or _utcnow()) + timedelta(hours=settings.session_ttl_hours),
    )
    storage[AUTH_KEY] = asdict(token)
    seed_sheet_settings(storage)
    logger.info("Operator %s logged in", email)
    return True


def get_auth_token(storage: MutableMapping[str, object], *, now: Optional[datetime] = None) -> Optional[AuthToken]:
    raw = storage.get(AUTH_KEY)
    if not raw:
        return None
    token = AuthToken(**raw)
    if token.is_expired(now):
        logout(storage)
        return None
    return token


def is_authenticated(storage: MutableMapping[str, object], *, now: Optional[datetime] = None) -> bool:
    return get_auth_token(storage, now=now) is not None


def current_user_email(storage: MutableMapping[str, object], *, now: Optional[datetime] = None) -> Optional[str]:
    token = get_auth_token(storage, now=now)
    return token.email if token else None


def logout(storage: MutableMapping[str, object]) -> None:
    if storage.pop(AUTH_KEY, None) is not None:
        logger.info("Operator logged out")
