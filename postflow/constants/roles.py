# app roles and the approval policies that gate each route
from dataclasses import dataclass
from typing import FrozenSet, Optional

ROLE_CREATOR = "creator"
ROLE_PUBLISHER = "publisher"
ROLE_ADMIN = "admin"

ALLOWED_ROLES = (ROLE_CREATOR, ROLE_PUBLISHER, ROLE_ADMIN)

USER_STATUS_PENDING = "pending"
USER_STATUS_APPROVED = "approved"


@dataclass(frozen=True)
class ApprovalPolicy:
    """
    Required directory state for a route.

    `roles=None` means any role is accepted once the record is approved.
    """
    name: str
    roles: Optional[FrozenSet[str]] = None

    def allows(self, user: dict) -> bool:
        if not user or user.get("status") != USER_STATUS_APPROVED:
            return False
        if self.roles is None:
            return True
        return user.get("role") in self.roles


ADMIN_ONLY = ApprovalPolicy("admin_only", frozenset({ROLE_ADMIN}))
ANY_APPROVED = ApprovalPolicy("any_approved")
CONTENT_EDITORS = ApprovalPolicy("content_editors", frozenset({ROLE_ADMIN, ROLE_CREATOR}))
