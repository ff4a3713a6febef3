import logging
from supabase import Client
from tutorcenter.modules.users.schemas import InviteRequest, InviteResponse, InvitedUser
from typing import Any, Dict, List
from fastapi import HTTPException

logger = logging.getLogger(__name__)

UNKNOWN_EMAIL = "Unknown"


class AdminUserService:
    """User administration through the service_role client (bypasses RLS)"""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_users(self) -> List[Dict[str, Any]]:
        """All profiles, newest first, each with the email of its auth user"""
        try:
            profiles_result = self.supabase.table("user_profiles")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
            auth_users = self.supabase.auth.admin.list_users() or []
            emails = {u.id: u.email for u in auth_users}
            return [
                {**profile, "email": emails.get(profile.get("user_id")) or UNKNOWN_EMAIL}
                for profile in (profiles_result.data or [])
            ]
        except Exception as e:
            logger.error(f"Error listing users: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def invite_user(self, invite: InviteRequest) -> InviteResponse:
        """Send an invitation email and assign the role on the profile created for the new user"""
        try:
            auth_response = self.supabase.auth.admin.invite_user_by_email(
                invite.email,
                {"data": {"full_name": invite.full_name}}
            )
            user = auth_response.user if auth_response else None
            if user:
                self.supabase.table("user_profiles")\
                    .update({
                        "role": invite.role.value,
                        "full_name": invite.full_name,
                    })\
                    .eq("user_id", user.id)\
                    .execute()
                logger.info(f"Invited {invite.email} as {invite.role.value}")
                return InviteResponse(success=True, user=InvitedUser(id=user.id, email=user.email))
            return InviteResponse(success=True, user=None)
        except Exception as e:
            logger.error(f"Error inviting {invite.email}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def _update_profile(self, user_id: str, values: Dict[str, Any]) -> Dict[str, Any]:
        try:
            result = self.supabase.table("user_profiles")\
                .update(values)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=404, detail="User not found")
        return result.data[0]

    def set_role(self, user_id: str, role: str) -> Dict[str, Any]:
        logger.info(f"Changing role of {user_id} to {role}")
        return self._update_profile(user_id, {"role": role})

    def set_active(self, user_id: str, is_active: bool) -> Dict[str, Any]:
        logger.info(f"Setting is_active={is_active} for {user_id}")
        return self._update_profile(user_id, {"is_active": is_active})
