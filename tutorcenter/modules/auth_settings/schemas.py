from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime


class AuthSettingsUpdate(BaseModel):
    enable_2fa: Optional[bool] = None
    session_timeout_minutes: Optional[int] = Field(None, gt=0)
    require_password_change: Optional[bool] = None
    email_notifications: Optional[bool] = None
    login_notification: Optional[bool] = None
    allowed_ip_addresses: Optional[List[str]] = None
    security_questions_set: Optional[bool] = None
    backup_email: Optional[EmailStr] = None


class LockRequest(BaseModel):
    duration_minutes: Optional[int] = Field(None, gt=0)


class AuthSettingsResponse(BaseModel):
    id: str
    user_id: str
    enable_2fa: bool = False
    session_timeout_minutes: int = 60
    require_password_change: bool = False
    last_password_change: Optional[datetime] = None
    failed_login_attempts: int = 0
    account_locked_until: Optional[datetime] = None
    email_notifications: bool = True
    login_notification: bool = False
    allowed_ip_addresses: Optional[List[str]] = None
    security_questions_set: bool = False
    backup_email: Optional[str] = None
    updated_at: Optional[datetime] = None
    is_locked: bool = False

    class Config:
        from_attributes = True
