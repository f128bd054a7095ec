# ============================================================================
# FILE: app/core/permissions.py
# ============================================================================
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Closed set of account roles"""
    MEMBER = "member"
    ADMIN = "admin"


class Capability(str, Enum):
    MANAGE_USERS = "manage_users"
    MODIFY_CONTENT = "modify_content"


@dataclass(frozen=True)
class Principal:
    """The verified caller of a request"""
    user_id: str
    role: Role
    session_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def authorize(principal: Principal, capability: Capability, owner_id: Optional[str] = None) -> bool:
    """
    Decide whether principal holds capability.

    MANAGE_USERS is admin only. MODIFY_CONTENT is granted to admins and to
    the creator of the resource (owner_id).
    """
    if principal.is_admin:
        return True
    if capability is Capability.MODIFY_CONTENT:
        return owner_id is not None and principal.user_id == owner_id
    return False
