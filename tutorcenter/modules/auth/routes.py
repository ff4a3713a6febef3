from fastapi import APIRouter, Depends
from tutorcenter.config.permissions_config import get_capabilities, get_role_label
from tutorcenter.core.dependencies import get_auth_service, get_current_token, get_current_user
from tutorcenter.database.supabase_client import get_optional_service_supabase
from tutorcenter.modules.auth.schemas import LoginRequest, TokenResponse, MeResponse
from tutorcenter.modules.auth.service import AuthService
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    service_client: Optional[Client] = Depends(get_optional_service_supabase)
):
    """Login and get access token"""
    token = service.login(login_data)
    service.record_login(token.user_id, service_client)
    return token


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse)
async def me(current_user: Dict = Depends(get_current_user)):
    """Current user, role and capability map (for frontend UI only; enforced server side)."""
    profile = current_user.get("profile") or {}
    role = current_user.get("role")
    return MeResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        role=role,
        role_label=get_role_label(role),
        full_name=profile.get("full_name"),
        capabilities=get_capabilities(role),
    )
