import logging
from datetime import datetime, timedelta, timezone
from supabase import Client
from tutorcenter.config.settings import settings
from tutorcenter.core.date_utils import as_utc, parse_timestamp
from tutorcenter.core.resource import define_resource
from tutorcenter.modules.auth_settings.schemas import AuthSettingsUpdate, AuthSettingsResponse
from typing import Any, Dict, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

AUTH_SETTINGS = define_resource(
    "auth_settings",
    primary_key="user_id",
    error_messages={
        "fetch": "Błąd pobierania ustawień",
        "update": "Błąd aktualizacji ustawień",
    },
)


def is_account_locked(row: Optional[Dict[str, Any]], now: Optional[datetime] = None) -> bool:
    """Locked while account_locked_until is in the future"""
    if not row or not row.get("account_locked_until"):
        return False
    try:
        locked_until = as_utc(parse_timestamp(row["account_locked_until"]))
    except ValueError:
        logger.warning(f"Unparseable account_locked_until for {row.get('user_id')}")
        return False
    return locked_until > (now or datetime.now(timezone.utc))


class AuthSettingsService:
    """Security settings of a single user (the caller)"""

    def __init__(self, supabase: Client, user_id: str):
        self.supabase = supabase
        self.user_id = user_id
        self.settings = AUTH_SETTINGS.bind(supabase)

    def _response(self, row: Dict[str, Any]) -> AuthSettingsResponse:
        return AuthSettingsResponse(**row, is_locked=is_account_locked(row))

    def _current(self) -> Dict[str, Any]:
        row = self.settings.get(self.user_id).unwrap()
        if row is None:
            raise HTTPException(status_code=404, detail="Brak ustawień")
        return row

    def get_settings(self) -> AuthSettingsResponse:
        return self._response(self._current())

    def update_settings(self, values: Dict[str, Any]) -> AuthSettingsResponse:
        if not values:
            raise HTTPException(status_code=400, detail="No fields to update")
        payload = {**values, "updated_at": datetime.now(timezone.utc).isoformat()}
        row = self.settings.update(self.user_id, payload).unwrap(status_code=400)
        return self._response(row)

    def apply_update(self, update: AuthSettingsUpdate) -> AuthSettingsResponse:
        return self.update_settings(update.model_dump(mode="json", exclude_unset=True))

    def reset_failed_login_attempts(self) -> AuthSettingsResponse:
        return self.update_settings({"failed_login_attempts": 0, "account_locked_until": None})

    def lock_account(self, duration_minutes: Optional[int] = None) -> AuthSettingsResponse:
        minutes = duration_minutes or settings.account_lock_minutes
        lock_until = datetime.now(timezone.utc) + timedelta(minutes=minutes)
        logger.info(f"Locking account {self.user_id} for {minutes} minutes")
        return self.update_settings({"account_locked_until": lock_until.isoformat()})

    def unlock_account(self) -> AuthSettingsResponse:
        return self.update_settings({"account_locked_until": None, "failed_login_attempts": 0})

    def increment_failed_login_attempts(self) -> AuthSettingsResponse:
        """Count a failed login; reaching the configured maximum locks the account"""
        current = self._current()
        attempts = (current.get("failed_login_attempts") or 0) + 1
        if attempts >= settings.max_failed_login_attempts:
            lock_until = datetime.now(timezone.utc) + timedelta(minutes=settings.account_lock_minutes)
            logger.info(f"Too many failed logins for {self.user_id}, locking account")
            return self.update_settings({
                "failed_login_attempts": attempts,
                "account_locked_until": lock_until.isoformat(),
            })
        return self.update_settings({"failed_login_attempts": attempts})

    def record_password_change(self) -> AuthSettingsResponse:
        return self.update_settings({
            "last_password_change": datetime.now(timezone.utc).isoformat(),
            "require_password_change": False,
        })

    def set_session_timeout(self, minutes: int) -> AuthSettingsResponse:
        if minutes <= 0:
            raise HTTPException(status_code=400, detail="Timeout musi być większy od 0")
        return self.update_settings({"session_timeout_minutes": minutes})
