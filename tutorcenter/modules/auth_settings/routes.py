from fastapi import APIRouter, Body, Depends
from tutorcenter.database.supabase_client import get_user_supabase
from tutorcenter.modules.auth_settings.schemas import AuthSettingsUpdate, AuthSettingsResponse, LockRequest
from tutorcenter.modules.auth_settings.service import AuthSettingsService
from tutorcenter.core.dependencies import get_current_user
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/auth/settings", tags=["auth-settings"])


def get_auth_settings_service(
    user: Dict = Depends(get_current_user),
    supabase: Client = Depends(get_user_supabase)
) -> AuthSettingsService:
    return AuthSettingsService(supabase, user["id"])


@router.get("", response_model=AuthSettingsResponse)
async def get_settings(service: AuthSettingsService = Depends(get_auth_settings_service)):
    """Caller's own security settings"""
    return service.get_settings()


@router.patch("", response_model=AuthSettingsResponse)
async def update_settings(
    update: AuthSettingsUpdate,
    service: AuthSettingsService = Depends(get_auth_settings_service)
):
    return service.apply_update(update)


@router.put("/session-timeout", response_model=AuthSettingsResponse)
async def set_session_timeout(
    minutes: int = Body(..., embed=True),
    service: AuthSettingsService = Depends(get_auth_settings_service)
):
    return service.set_session_timeout(minutes)


@router.post("/lock", response_model=AuthSettingsResponse)
async def lock_account(
    lock: Optional[LockRequest] = None,
    service: AuthSettingsService = Depends(get_auth_settings_service)
):
    return service.lock_account(lock.duration_minutes if lock else None)


@router.post("/unlock", response_model=AuthSettingsResponse)
async def unlock_account(service: AuthSettingsService = Depends(get_auth_settings_service)):
    return service.unlock_account()


@router.post("/failed-login", response_model=AuthSettingsResponse)
async def register_failed_login(service: AuthSettingsService = Depends(get_auth_settings_service)):
    """Count a failed login attempt, locking the account at the configured maximum"""
    return service.increment_failed_login_attempts()


@router.post("/reset-failed-logins", response_model=AuthSettingsResponse)
async def reset_failed_logins(service: AuthSettingsService = Depends(get_auth_settings_service)):
    return service.reset_failed_login_attempts()


@router.post("/password-changed", response_model=AuthSettingsResponse)
async def password_changed(service: AuthSettingsService = Depends(get_auth_settings_service)):
    return service.record_password_change()
