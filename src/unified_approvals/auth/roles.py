"""Roles and their per-module permission grants."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class Module(str, Enum):
    GENERAL = "General"
    CRM = "CRM"
    FINANCE = "Finance"
    HR = "HR"
    INVENTORY = "Inventory"
    SETTINGS = "Settings"


class PermissionLevel(str, Enum):
    NONE = "None"
    READ = "Read"
    WRITE = "Write"
    ADMIN = "Admin"


@dataclass(frozen=True)
class Role:
    """A role supplied by the host. Read-only from the engine's side."""

    id: str
    name: str
    permissions: Mapping[Module, PermissionLevel] = field(default_factory=dict)
    description: str = ""
    is_system: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "permissions", MappingProxyType(dict(self.permissions)))

    def level_for(self, module: Module) -> PermissionLevel | None:
        """Return the grant for ``module``, or None when the role has no mapping."""
        return self.permissions.get(module)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "Role":
        raw_permissions = data.get("permissions") or {}
        if not isinstance(raw_permissions, Mapping):
            kind = type(raw_permissions).__name__
            raise ValueError(f"Role permissions must be a mapping, got {kind}")
        permissions = {
            Module(str(module)): PermissionLevel(str(level))
            for module, level in raw_permissions.items()
        }
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            permissions=permissions,
            description=str(data.get("description", "")),
            is_system=bool(data.get("is_system", False)),
        )


def _grants(crm: str, finance: str, hr: str, inventory: str, settings: str) -> dict:
    return {
        Module.CRM: PermissionLevel(crm),
        Module.FINANCE: PermissionLevel(finance),
        Module.HR: PermissionLevel(hr),
        Module.INVENTORY: PermissionLevel(inventory),
        Module.SETTINGS: PermissionLevel(settings),
    }


BUILTIN_ROLES: tuple[Role, ...] = (
    Role(
        id="r1",
        name="Super Admin",
        description="Full access to all modules and system settings.",
        is_system=True,
        permissions=_grants("Admin", "Admin", "Admin", "Admin", "Admin"),
    ),
    Role(
        id="r2",
        name="Sales Manager",
        description="Manage leads, customers, and view sales reports.",
        permissions=_grants("Write", "Read", "None", "Read", "None"),
    ),
    Role(
        id="r3",
        name="HR Specialist",
        description="Manage employees, payroll, and recruitment.",
        permissions=_grants("None", "Read", "Write", "None", "None"),
    ),
    Role(
        id="r4",
        name="Accountant",
        description="Manage invoices, expenses, and banking.",
        permissions=_grants("Read", "Write", "Read", "Read", "None"),
    ),
    Role(
        id="r5",
        name="Viewer",
        description="Read-only access to basic modules.",
        is_system=True,
        permissions=_grants("Read", "None", "None", "Read", "None"),
    ),
)


def builtin_role(name: str) -> Role:
    for role in BUILTIN_ROLES:
        if role.name.lower() == name.lower() or role.id == name:
            return role
    raise KeyError(f"Unknown role '{name}'")
