# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS (STAFF JOB ROLES)
# =========================================================
ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"
ROLE_ACCOUNTANT = "accountant"
ROLE_AGENT = "agent"

STAFF_ROLES = {
    ROLE_ADMIN,
    ROLE_MANAGER,
    ROLE_ACCOUNTANT,
    ROLE_AGENT,
}


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views protect capabilities, not raw roles.
CAP_RELATIONS_VIEW = "relations.view"
CAP_RELATIONS_EDIT = "relations.edit"
CAP_RELATIONS_DELETE = "relations.delete"

CAP_SEGMENTS_VIEW = "segments.view"
CAP_SEGMENTS_SAVE = "segments.save"

CAP_PROFIT_SHARING_MANAGE = "profit_sharing.manage"

CAP_ACCOUNTING_POST = "accounting.post"  # expense vouchers, manual postings
CAP_REPORTS_VIEW_ACCOUNTING = "reports.view_accounting"

CAP_AUDIT_VIEW = "audit.view"

ALL_CAPABILITIES = {
    CAP_RELATIONS_VIEW,
    CAP_RELATIONS_EDIT,
    CAP_RELATIONS_DELETE,
    CAP_SEGMENTS_VIEW,
    CAP_SEGMENTS_SAVE,
    CAP_PROFIT_SHARING_MANAGE,
    CAP_ACCOUNTING_POST,
    CAP_REPORTS_VIEW_ACCOUNTING,
    CAP_AUDIT_VIEW,
}


# =========================================================
# ROLE → CAPABILITY MAP
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        *ALL_CAPABILITIES,
    },
    ROLE_MANAGER: {
        CAP_RELATIONS_VIEW,
        CAP_RELATIONS_EDIT,
        CAP_RELATIONS_DELETE,
        CAP_SEGMENTS_VIEW,
        CAP_SEGMENTS_SAVE,
        CAP_PROFIT_SHARING_MANAGE,
        CAP_REPORTS_VIEW_ACCOUNTING,
        CAP_AUDIT_VIEW,
    },
    ROLE_ACCOUNTANT: {
        CAP_RELATIONS_VIEW,
        CAP_SEGMENTS_VIEW,
        CAP_SEGMENTS_SAVE,
        CAP_PROFIT_SHARING_MANAGE,
        CAP_ACCOUNTING_POST,
        CAP_REPORTS_VIEW_ACCOUNTING,
    },
    ROLE_AGENT: {
        CAP_RELATIONS_VIEW,
        CAP_RELATIONS_EDIT,
        CAP_SEGMENTS_VIEW,
    },
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def effective_capabilities_for(user) -> set[str]:
    if getattr(user, "is_superuser", False):
        return set(ALL_CAPABILITIES)
    return set(ROLE_CAPABILITIES.get(get_user_role(user), set()))


def user_has_capability(user, capability: str) -> bool:
    if not user or not getattr(user, "is_authenticated", False):
        return False
    return capability in effective_capabilities_for(user)


# =========================================================
# Base Role Permission (Internal Use)
# =========================================================
class BaseRolePermission(BasePermission):
    """
    Base permission for role-based access control.

    Subclasses must define:
    - allowed_roles (set)
    """

    allowed_roles: set[str] = set()

    def has_permission(self, request, view):
        user = request.user

        if not user or not user.is_authenticated:
            return False

        user_role = get_user_role(user)
        if not user_role:
            return False

        return user_role in self.allowed_roles


# =========================================================
# Capability Permissions
# =========================================================
class HasCapability(BasePermission):
    """
    Require a specific capability.

    Usage:
        permission_classes = [IsAuthenticated, HasCapability]
        required_capability = CAP_SEGMENTS_SAVE

    Views may also declare per-method capabilities:
        required_capabilities = {"GET": CAP_SEGMENTS_VIEW, "POST": CAP_SEGMENTS_SAVE}
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        per_method = getattr(view, "required_capabilities", None) or {}
        required = per_method.get(request.method) or getattr(
            view, "required_capability", None
        )
        if not required:
            # deny-by-default
            return False

        return required in effective_capabilities_for(user)


class IsAdmin(BaseRolePermission):
    allowed_roles = {ROLE_ADMIN}


class IsStaff(BaseRolePermission):
    allowed_roles = STAFF_ROLES
