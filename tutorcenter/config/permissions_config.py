"""
Roles and Capabilities Configuration
Static allow-lists mapping every capability to the roles that hold it.
Used by the server-side authorization guard and returned to the frontend
(via /auth/me) so it can hide controls the user cannot use.
"""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Union


class UserRole(str, Enum):
    ADMINISTRATOR = "administrator"
    CONSULTANT = "konsultant"
    TEACHER = "nauczyciel"
    GUARDIAN = "opiekun"
    STUDENT = "uczen"


ADMIN_ONLY = frozenset({UserRole.ADMINISTRATOR.value})
ADMIN_AND_CONSULTANT = frozenset({UserRole.ADMINISTRATOR.value, UserRole.CONSULTANT.value})
STAFF = frozenset({
    UserRole.ADMINISTRATOR.value,
    UserRole.CONSULTANT.value,
    UserRole.TEACHER.value,
})
STAFF_AND_GUARDIANS = STAFF | {UserRole.GUARDIAN.value}

# Capability name -> roles allowed
ROLE_CAPABILITIES: Dict[str, FrozenSet[str]] = {
    "can_manage_users": ADMIN_ONLY,
    "can_assign_roles": ADMIN_ONLY,
    "can_view_all_students": ADMIN_AND_CONSULTANT,
    "is_admin_or_consultant": ADMIN_AND_CONSULTANT,
    "can_edit_students": STAFF,
    "can_create_students": STAFF,
    "can_delete_students": STAFF,
    "can_manage_classes": STAFF,
    "can_manage_payments": STAFF,
    "can_link_guardians": STAFF,
    "can_create_student_accounts": STAFF,
    "is_staff": STAFF,
    "can_view_payments": STAFF_AND_GUARDIANS,
    "can_view_students_menu": STAFF_AND_GUARDIANS,
}

ROLE_LABELS = {
    UserRole.ADMINISTRATOR.value: "Administrator",
    UserRole.CONSULTANT.value: "Konsultant",
    UserRole.TEACHER.value: "Nauczyciel",
    UserRole.GUARDIAN.value: "Opiekun",
    UserRole.STUDENT.value: "Uczeń",
}


def _role_value(role: Optional[Union[str, UserRole]]) -> Optional[str]:
    if isinstance(role, UserRole):
        return role.value
    return role


def has_capability(role: Optional[Union[str, UserRole]], capability: str) -> bool:
    """True if role is in the capability's allow-list. Absent role or unknown capability -> False."""
    value = _role_value(role)
    if not value:
        return False
    return value in ROLE_CAPABILITIES.get(capability, frozenset())


def get_capabilities(role: Optional[Union[str, UserRole]]) -> Dict[str, bool]:
    """Full capability map for a role (every capability False when role is absent or unknown)."""
    return {name: has_capability(role, name) for name in ROLE_CAPABILITIES}


def is_role(role: Optional[Union[str, UserRole]], target: Union[str, UserRole, Iterable[Union[str, UserRole]]]) -> bool:
    value = _role_value(role)
    if not value:
        return False
    if isinstance(target, (str, UserRole)):
        return value == _role_value(target)
    return value in {_role_value(t) for t in target}


def get_role_label(role: Optional[str]) -> str:
    if not role:
        return ""
    return ROLE_LABELS.get(role, role)
