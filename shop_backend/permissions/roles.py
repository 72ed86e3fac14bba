# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS
# =========================================================
# Mirrors users.User.role. Shoppers carry ROLE_USER.
ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"
ROLE_USER = "user"

STAFF_ROLES = {
    ROLE_ADMIN,
    ROLE_MANAGER,
}


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views should protect capabilities, not raw roles.
CAP_ORDERS_MANAGE = "orders.manage"            # availability, payment, dispatch, deliver, cancel
CAP_ORDERS_VIEW = "orders.view"                # see every order, not just your own
CAP_REPORTS_VIEW = "reports.view"              # dashboards
CAP_CATALOG_EDIT = "catalog.edit"              # products, categories, restock
CAP_SETTINGS_EDIT = "settings.edit"            # bank, hostels, spf, banner, delivery time
CAP_REIMBURSEMENT_CONFIRM = "reimbursement.confirm"

ALL_CAPABILITIES = {
    CAP_ORDERS_MANAGE,
    CAP_ORDERS_VIEW,
    CAP_REPORTS_VIEW,
    CAP_CATALOG_EDIT,
    CAP_SETTINGS_EDIT,
    CAP_REIMBURSEMENT_CONFIRM,
}


# =========================================================
# ROLE → CAPABILITY MAP
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        *ALL_CAPABILITIES,
    },
    ROLE_MANAGER: {
        CAP_ORDERS_VIEW,
        CAP_REPORTS_VIEW,
    },
    ROLE_USER: set(),
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def capabilities_for(user) -> set[str]:
    if not user or not getattr(user, "is_authenticated", False):
        return set()
    return set(ROLE_CAPABILITIES.get(get_user_role(user), set()))


def user_has_capability(user, capability: str) -> bool:
    """
    Service-layer check (no request/view needed).
    """
    return capability in capabilities_for(user)


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
        view.required_capability = CAP_ORDERS_MANAGE
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_capability", None)
        if not required:
            # deny-by-default
            return False

        return required in capabilities_for(user)


class HasAnyCapability(BasePermission):
    """
    Require ANY capability from a list.

    Usage:
        view.required_any_capabilities = {CAP_ORDERS_VIEW, CAP_ORDERS_MANAGE}
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_any_capabilities", None)
        if not required:
            return False

        caps = capabilities_for(user)
        return any(cap in caps for cap in set(required))


# =========================================================
# Role Permissions
# =========================================================
class IsAdmin(BaseRolePermission):
    allowed_roles = {ROLE_ADMIN}


class IsAdminOrManager(BaseRolePermission):
    allowed_roles = STAFF_ROLES
