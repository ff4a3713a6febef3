from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Dict, Any
from tutorcenter.config.permissions_config import UserRole


class InviteRequest(BaseModel):
    email: EmailStr
    full_name: str = Field(..., min_length=1)
    role: UserRole


class InvitedUser(BaseModel):
    id: str
    email: Optional[str] = None


class InviteResponse(BaseModel):
    success: bool = True
    user: Optional[InvitedUser] = None


class AdminUserList(BaseModel):
    users: List[Dict[str, Any]]


class RoleChange(BaseModel):
    role: UserRole


class ActiveChange(BaseModel):
    is_active: bool
