from fastapi import APIRouter, Depends
from tutorcenter.database.supabase_client import get_service_supabase
from tutorcenter.modules.users.schemas import (
    InviteRequest, InviteResponse, AdminUserList, RoleChange, ActiveChange
)
from tutorcenter.modules.users.service import AdminUserService
from tutorcenter.core.dependencies import require_admin, require_capability
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/admin", tags=["admin"])


def get_admin_user_service(supabase: Client = Depends(get_service_supabase)) -> AdminUserService:
    return AdminUserService(supabase)


@router.get("/users", response_model=AdminUserList)
async def list_users(
    user: Dict = Depends(require_admin),
    service: AdminUserService = Depends(get_admin_user_service)
):
    """List all users with their auth email (administrators only)"""
    return {"users": service.list_users()}


@router.post("/invite", response_model=InviteResponse)
async def invite_user(
    invite: InviteRequest,
    user: Dict = Depends(require_admin),
    service: AdminUserService = Depends(get_admin_user_service)
):
    """Invite a new user by email and assign their role (administrators only)"""
    return service.invite_user(invite)


@router.patch("/users/{user_id}/role")
async def change_role(
    user_id: str,
    change: RoleChange,
    user: Dict = Depends(require_capability("can_assign_roles")),
    service: AdminUserService = Depends(get_admin_user_service)
):
    return service.set_role(user_id, change.role.value)


@router.patch("/users/{user_id}/active")
async def change_active(
    user_id: str,
    change: ActiveChange,
    user: Dict = Depends(require_admin),
    service: AdminUserService = Depends(get_admin_user_service)
):
    return service.set_active(user_id, change.is_active)
