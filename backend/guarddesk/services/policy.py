from __future__ import annotations
from typing import Iterable, Optional
from guarddesk.constants.permissions import ROLE_HIERARCHY, SUPER_ADMIN
from guarddesk.services.registry import RoleGrants, DEFAULT_GRANTS


class PermissionEvaluator:
    """Pure permission predicates over an injected RoleGrants table."""

    def __init__(self, grants: RoleGrants = DEFAULT_GRANTS):
        self.grants = grants

    def has_permission(self, role: Optional[str], permission: Optional[str]) -> bool:
        if not permission:
            return False
        return permission in self.grants.permissions_for(role)

    def has_any_permission(self, role: Optional[str], permissions: Iterable[str]) -> bool:
        # empty -> False
        return any(self.has_permission(role, p) for p in permissions)

    def has_all_permissions(self, role: Optional[str], permissions: Iterable[str]) -> bool:
        # empty -> True (vacuous); RouteGuard handles "no restriction" on its own
        return all(self.has_permission(role, p) for p in permissions)


default_evaluator = PermissionEvaluator()


def has_permission(role: Optional[str], permission: Optional[str]) -> bool:
    return default_evaluator.has_permission(role, permission)


def has_any_permission(role: Optional[str], permissions: Iterable[str]) -> bool:
    return default_evaluator.has_any_permission(role, permissions)


def has_all_permissions(role: Optional[str], permissions: Iterable[str]) -> bool:
    return default_evaluator.has_all_permissions(role, permissions)


def can_modify_user(actor_role: Optional[str], target_role: Optional[str]) -> bool:
    """Actors manage strictly lower roles only; super_admin manages anyone."""
    if actor_role == SUPER_ADMIN:
        return True
    actor_level = ROLE_HIERARCHY.get(actor_role, 0) if isinstance(actor_role, str) else 0
    target_level = ROLE_HIERARCHY.get(target_role, 0) if isinstance(target_role, str) else 0
    return actor_level > 0 and target_level < actor_level


def assignable_roles(actor_role: Optional[str]):
    return [r for r in ROLE_HIERARCHY if can_modify_user(actor_role, r)]
