"""
Core dependencies for route protection and role checking.

Every privileged route goes through require_capability: the caller's role is
re-derived from user_profiles on each request with the elevated client, so
client-side capability checks are only a UI affordance.
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from tutorcenter.config.permissions_config import has_capability
from tutorcenter.database.supabase_client import get_supabase, get_service_supabase
from tutorcenter.modules.auth.service import AuthService
from supabase import Client
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

INSUFFICIENT_PERMISSIONS = "Insufficient permissions"


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract bearer token from the Authorization header (401 when absent)"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No authorization header"
        )
    return credentials.credentials


def get_current_user_id(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    return auth_service.get_current_user(token)


def get_user_profile(user_id: str, supabase: Client) -> Optional[Dict[str, Any]]:
    """Profile row for an auth user, None when missing or unreadable"""
    try:
        result = supabase.table("user_profiles")\
            .select("*")\
            .eq("user_id", user_id)\
            .maybe_single()\
            .execute()
        return result.data if result else None
    except Exception as e:
        logger.error(f"Error getting user profile for {user_id}: {e}")
        return None


def resolve_role(profile: Optional[Dict[str, Any]]) -> Optional[str]:
    """Role from a profile row. Missing or inactive profiles have no role."""
    if not profile:
        return None
    if profile.get("is_active") is False:
        return None
    return profile.get("role")


def _get_request_profile(request: Request, user_id: str, supabase: Client) -> Optional[Dict[str, Any]]:
    """Request-scoped cache so several guards on one request hit user_profiles once"""
    cache = getattr(request.state, "profile_cache", None)
    if cache is None:
        cache = {}
        request.state.profile_cache = cache
    if user_id not in cache:
        cache[user_id] = get_user_profile(user_id, supabase)
    return cache[user_id]


def get_current_user(
    request: Request,
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_service_supabase)
) -> dict:
    """Authenticated user with role and profile attached"""
    profile = _get_request_profile(request, user_data["id"], supabase)
    return {**user_data, "role": resolve_role(profile), "profile": profile}


def require_capability(capability: str):
    """Factory function to create a capability check dependency"""
    def check_capability(user: dict = Depends(get_current_user)) -> dict:
        if not has_capability(user.get("role"), capability):
            logger.info(f"User {user['id']} with role {user.get('role')} denied {capability}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=INSUFFICIENT_PERMISSIONS
            )
        return user
    return check_capability


require_admin = require_capability("can_manage_users")
