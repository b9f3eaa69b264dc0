"""Module visibility and approver checks."""

from __future__ import annotations

import logging

from unified_approvals.auth.roles import Module, PermissionLevel, Role
from unified_approvals.domain.entities import RequestEntity
from unified_approvals.errors import AuthorizationDenied

logger = logging.getLogger(__name__)

APPROVALS_VIEW = "approvals"

# Console views and the module that gates them. Views missing from this table
# are treated as visible.
VIEW_MODULES: dict[str, Module] = {
    "dashboard": Module.GENERAL,
    "chat": Module.GENERAL,
    APPROVALS_VIEW: Module.GENERAL,
    "lists": Module.CRM,
    "projects": Module.CRM,
    "tasks": Module.CRM,
    "customers": Module.CRM,
    "quotations": Module.CRM,
    "products": Module.CRM,
    "finance_dashboard": Module.FINANCE,
    "profit_loss": Module.FINANCE,
    "balance_sheet": Module.FINANCE,
    "chart_of_accounts": Module.FINANCE,
    "sales": Module.FINANCE,
    "invoices": Module.FINANCE,
    "bank": Module.FINANCE,
    "expenses": Module.FINANCE,
    "payments": Module.FINANCE,
    "billing": Module.FINANCE,
    "purchases": Module.FINANCE,
    "depreciation": Module.FINANCE,
    "hr_dashboard": Module.HR,
    "employees": Module.HR,
    "departments": Module.HR,
    "teams": Module.HR,
    "organogram": Module.HR,
    "payroll": Module.HR,
    "recruitment": Module.HR,
    "onboarding": Module.HR,
    "training": Module.HR,
    "claims": Module.HR,
    "letters": Module.HR,
    "attendance": Module.HR,
    "leave": Module.HR,
    "performance": Module.HR,
    "assets": Module.HR,
    "create_user": Module.HR,
    "roles": Module.SETTINGS,
    "settings": Module.SETTINGS,
}


def is_module_visible(role: Role, module: Module) -> bool:
    """General is always visible; unmapped modules fail open."""
    if module == Module.GENERAL:
        return True
    level = role.level_for(module)
    if level is None:
        return True
    return level != PermissionLevel.NONE


def is_view_visible(role: Role, view: str) -> bool:
    module = VIEW_MODULES.get(view.lower())
    if module is None:
        return True
    return is_module_visible(role, module)


def is_approver(entity: RequestEntity, acting_user_id: str) -> bool:
    """True whenever the acting user is not the entity's requester.

    This does not consult the role at all; department-attributed kinds
    (expenses, purchase orders) have no requester id and are always
    actionable.
    """
    return entity.requester_id != acting_user_id


class AccessController:
    """Refuses actions the presentation layer should not have offered."""

    def __init__(self, role: Role, acting_user_id: str) -> None:
        self._role = role
        self._acting_user_id = acting_user_id

    @property
    def role(self) -> Role:
        return self._role

    @property
    def acting_user_id(self) -> str:
        return self._acting_user_id

    def can_act(self, entity: RequestEntity) -> bool:
        return is_view_visible(self._role, APPROVALS_VIEW) and is_approver(
            entity, self._acting_user_id
        )

    def authorize(self, entity: RequestEntity) -> None:
        if not is_view_visible(self._role, APPROVALS_VIEW):
            logger.warning(
                "Role %s cannot see approvals; refusing action on %s",
                self._role.name,
                entity.id,
            )
            raise AuthorizationDenied(entity.id, "approvals are not visible to this role")
        if not is_approver(entity, self._acting_user_id):
            logger.warning(
                "User %s attempted to act on own request %s", self._acting_user_id, entity.id
            )
            raise AuthorizationDenied(entity.id, "requesters cannot act on their own requests")
