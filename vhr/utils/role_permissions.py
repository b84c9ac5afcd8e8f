"""
Role and group permission utilities.

Users carry one of two roles. Non-admin users get their module-level access
from the user group they are assigned to: a fixed default-permissions record
plus a list of custom per-module overrides.
"""

from typing import Any, Dict, FrozenSet, List, Optional
from enum import Enum


# Central role constants to ensure consistency across the codebase
ROLE_SUPER_ADMIN = "super_admin"
ROLE_USER = "user"

ALLOWED_ROLES: FrozenSet[str] = frozenset({ROLE_SUPER_ADMIN, ROLE_USER})

# Route allow-lists
SUPER_ADMIN_ONLY: FrozenSet[str] = frozenset({ROLE_SUPER_ADMIN})
ALL_ROLES: FrozenSet[str] = ALLOWED_ROLES


class RoleEnum(str, Enum):
    """Enum for user roles used in schemas and validation."""
    super_admin = ROLE_SUPER_ADMIN
    user = ROLE_USER


class PermissionLevel(str, Enum):
    FULL_ACCESS = "Full Access"
    ACCESS_DENIED = "Access Denied"
    DATA_ENTRY = "Data Entry"
    READ_ONLY = "Read Only"


PERMISSION_MODULES = (
    "clientsAndMatter",
    "consultations",
    "accounts",
    "receiptBook",
    "contactBook",
    "logBook",
    "reports",
)

DEFAULT_PERMISSIONS: Dict[str, str] = {
    module: PermissionLevel.ACCESS_DENIED.value for module in PERMISSION_MODULES
}


def get_default_permissions() -> Dict[str, str]:
    """Return a fresh copy of the default (deny-all) permissions record."""
    return DEFAULT_PERMISSIONS.copy()


def validate_role(role: str) -> None:
    """
    Validate that a role is allowed.

    Raises:
        ValueError: If role is not allowed
    """
    if role not in ALLOWED_ROLES:
        raise ValueError(f"Invalid role '{role}'. Allowed roles: {sorted(ALLOWED_ROLES)}")


def validate_level(level: str) -> str:
    """Return `level` unchanged if it is a known permission level, else raise ValueError."""
    allowed = [lvl.value for lvl in PermissionLevel]
    if level not in allowed:
        raise ValueError(f"Invalid permission level '{level}'. Allowed levels: {allowed}")
    return level


def upsert_custom_permission(custom_permissions: Optional[List[Dict[str, Any]]], module: str, level: str) -> List[Dict[str, Any]]:
    """
    Add or replace the custom permission for `module`.

    An existing entry keeps its position and only its level changes; an
    unknown module is appended. Returns a new list, the input is not mutated.
    """
    validate_level(level)
    updated = [dict(entry) for entry in (custom_permissions or [])]
    for entry in updated:
        if entry.get("module") == module:
            entry["level"] = level
            return updated
    updated.append({"module": module, "level": level})
    return updated


def remove_custom_permission(custom_permissions: Optional[List[Dict[str, Any]]], module: str) -> Optional[List[Dict[str, Any]]]:
    """
    Remove the custom permission for `module`.

    Returns the filtered list, or None when the module was never present.
    """
    current = list(custom_permissions or [])
    remaining = [dict(entry) for entry in current if entry.get("module") != module]
    if not current or len(remaining) == len(current):
        return None
    return remaining


def effective_level(permissions: Optional[Dict[str, str]], custom_permissions: Optional[List[Dict[str, Any]]], module: str) -> str:
    """
    Resolve the access level for one module: a custom override wins over the
    group's default record; modules absent from both are denied.
    """
    for entry in custom_permissions or []:
        if entry.get("module") == module:
            return entry.get("level", PermissionLevel.ACCESS_DENIED.value)
    return (permissions or {}).get(module, PermissionLevel.ACCESS_DENIED.value)
