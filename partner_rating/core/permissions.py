"""
Role/Permission Resolver
partner_rating/core/permissions.py

Permissions are a pure function of role. There are no per-user overrides
and nothing is stored; unknown or missing roles get the `user` set.

| Capability               | user | manager | admin |
|--------------------------|------|---------|-------|
| view partners            |  x   |    x    |   x   |
| create partners          |      |    x    |   x   |
| edit partners            |      |    x    |   x   |
| delete (archive) partners|      |         |   x   |
| evaluate partners        |      |    x    |   x   |
| view evaluations         |      |    x    |   x   |
| manage users             |      |         |   x   |
| view admin area          |      |         |   x   |
| export data              |      |    x    |   x   |
| backup data              |      |         |   x   |
"""

from dataclasses import dataclass, fields
from typing import Dict, Optional, Union

from partner_rating.models.enumerations import UserRole


@dataclass(frozen=True)
class Permission:
    can_view_partners: bool = False
    can_create_partners: bool = False
    can_edit_partners: bool = False
    can_delete_partners: bool = False
    can_evaluate_partners: bool = False
    can_view_evaluations: bool = False
    can_manage_users: bool = False
    can_view_admin: bool = False
    can_export_data: bool = False
    can_backup_data: bool = False

    def as_dict(self) -> Dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


CAPABILITIES = tuple(f.name for f in fields(Permission))

_ROLE_PERMISSIONS: Dict[UserRole, Permission] = {
    UserRole.USER: Permission(
        can_view_partners=True,
    ),
    UserRole.MANAGER: Permission(
        can_view_partners=True,
        can_create_partners=True,
        can_edit_partners=True,
        can_evaluate_partners=True,
        can_view_evaluations=True,
        can_export_data=True,
    ),
    UserRole.ADMIN: Permission(
        can_view_partners=True,
        can_create_partners=True,
        can_edit_partners=True,
        can_delete_partners=True,
        can_evaluate_partners=True,
        can_view_evaluations=True,
        can_manage_users=True,
        can_view_admin=True,
        can_export_data=True,
        can_backup_data=True,
    ),
}


def coerce_role(role: Union[UserRole, str, None]) -> UserRole:
    """Unknown or missing roles fall back to the plain user role."""
    try:
        return UserRole(role)
    except ValueError:
        return UserRole.USER


def permissions_for(role: Union[UserRole, str, None]) -> Permission:
    return _ROLE_PERMISSIONS[coerce_role(role)]


def has_permission(permissions: Permission, capability: str) -> bool:
    return bool(getattr(permissions, capability, False))


def is_admin(role: Optional[Union[UserRole, str]]) -> bool:
    return coerce_role(role) == UserRole.ADMIN


def is_manager(role: Optional[Union[UserRole, str]]) -> bool:
    """Manager or above."""
    return coerce_role(role) in (UserRole.MANAGER, UserRole.ADMIN)
