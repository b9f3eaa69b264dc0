"""Role-based visibility and approver checks."""

from unified_approvals.auth.access import (
    AccessController,
    is_approver,
    is_module_visible,
    is_view_visible,
)
from unified_approvals.auth.roles import BUILTIN_ROLES, Module, PermissionLevel, Role

__all__ = [
    "AccessController",
    "BUILTIN_ROLES",
    "Module",
    "PermissionLevel",
    "Role",
    "is_approver",
    "is_module_visible",
    "is_view_visible",
]
