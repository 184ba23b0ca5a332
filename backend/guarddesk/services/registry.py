"""Immutable role -> permission lookup.

RoleGrants is built once from ROLE_PERMISSIONS and handed to everything that evaluates access
(PermissionEvaluator, SessionReducer, RouteGuard). Unknown roles resolve to an empty set.
"""
from __future__ import annotations
from types import MappingProxyType
from typing import FrozenSet, Iterable, Iterator, Mapping, Optional

from guarddesk.constants.permissions import ROLE_PERMISSIONS

EMPTY: FrozenSet[str] = frozenset()


class RoleGrants(Mapping):
    def __init__(self, grants: Mapping[str, Iterable[str]]):
        self._grants = MappingProxyType({role: frozenset(perms) for role, perms in grants.items()})

    def __getitem__(self, role: str) -> FrozenSet[str]:
        return self._grants[role]

    def __iter__(self) -> Iterator[str]:
        return iter(self._grants)

    def __len__(self) -> int:
        return len(self._grants)

    def __repr__(self) -> str:
        return f"RoleGrants({sorted(self._grants)})"

    def permissions_for(self, role: Optional[str]) -> FrozenSet[str]:
        if not isinstance(role, str):
            return EMPTY
        return self._grants.get(role, EMPTY)

    def roles_with(self, permission: str):
        return sorted(r for r, perms in self._grants.items() if permission in perms)

    def override(self, **grants: Iterable[str]) -> 'RoleGrants':
        """Copy with the given roles replaced (or added)."""
        merged = {role: perms for role, perms in self._grants.items()}
        merged.update(grants)
        return RoleGrants(merged)


DEFAULT_GRANTS = RoleGrants(ROLE_PERMISSIONS)

__all__ = ['RoleGrants', 'DEFAULT_GRANTS']
