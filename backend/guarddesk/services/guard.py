"""Access decisions for protected views and gated fragments.

RouteGuard.check() returns a GuardDecision value; the caller acts on it (render, redirect or
show a placeholder). Order of evaluation:

  1. loading session       -> pending, no decision yet
  2. not authenticated     -> redirect to login, remembering the requested location
  3. no permissions needed -> allow
  4. any/all permissions   -> allow, else redirect to the unauthorized page

Fragment gates never redirect; they pick between content and a fallback.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from guarddesk.config.auth import LOGIN_URL, UNAUTHORIZED_URL
from guarddesk.errors import REASON_UNAUTHENTICATED, REASON_ACCESS_DENIED
from guarddesk.services.policy import PermissionEvaluator, default_evaluator
from guarddesk.services.session_state import SessionState, role_of

PENDING = 'pending'
ALLOW = 'allow'
REDIRECT = 'redirect'


@dataclass(frozen=True)
class GuardDecision:
    outcome: str
    redirect_to: Optional[str] = None
    reason: Optional[str] = None
    from_location: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.outcome == ALLOW

    @property
    def pending(self) -> bool:
        return self.outcome == PENDING


class RouteGuard:
    def __init__(
        self,
        evaluator: PermissionEvaluator = default_evaluator,
        login_url: str = LOGIN_URL,
        unauthorized_url: str = UNAUTHORIZED_URL,
    ):
        self.evaluator = evaluator
        self.login_url = login_url
        self.unauthorized_url = unauthorized_url

    def check(
        self,
        state: SessionState,
        permissions: Sequence[str] = (),
        require_all: bool = False,
        location: Optional[str] = None,
    ) -> GuardDecision:
        if state.is_loading:
            return GuardDecision(PENDING)
        if not state.is_authenticated:
            return GuardDecision(REDIRECT, self.login_url, REASON_UNAUTHENTICATED, location)
        permissions = list(permissions)
        if not permissions:
            return GuardDecision(ALLOW)
        role = role_of(state)
        if require_all:
            ok = self.evaluator.has_all_permissions(role, permissions)
        else:
            ok = self.evaluator.has_any_permission(role, permissions)
        if not ok:
            return GuardDecision(REDIRECT, self.unauthorized_url, REASON_ACCESS_DENIED, location)
        return GuardDecision(ALLOW)

    def check_roles(self, state: SessionState, roles: Iterable[str] = (), location: Optional[str] = None) -> GuardDecision:
        """Same flow keyed on role membership (empty roles = any authenticated user)."""
        if state.is_loading:
            return GuardDecision(PENDING)
        if not state.is_authenticated:
            return GuardDecision(REDIRECT, self.login_url, REASON_UNAUTHENTICATED, location)
        if not role_allows(role_of(state), roles):
            return GuardDecision(REDIRECT, self.unauthorized_url, REASON_ACCESS_DENIED, location)
        return GuardDecision(ALLOW)

    def permits(self, state: SessionState, permissions: Sequence[str] = (), require_all: bool = False) -> bool:
        """Non-redirecting predicate for fragments; empty permissions = no restriction."""
        permissions = list(permissions)
        if not permissions:
            return True
        role = role_of(state)
        if require_all:
            return self.evaluator.has_all_permissions(role, permissions)
        return self.evaluator.has_any_permission(role, permissions)


def role_allows(role: Optional[str], roles: Iterable[str] = ()) -> bool:
    roles = list(roles)
    if not roles:
        return True
    return role in roles


def role_gate(role: Optional[str], roles: Iterable[str], content: Any, fallback: Any = None) -> Any:
    return content if role_allows(role, roles) else fallback


def permission_gate(guard: RouteGuard, state: SessionState, permissions: Sequence[str], content: Any,
                    fallback: Any = None, require_all: bool = False) -> Any:
    return content if guard.permits(state, permissions, require_all) else fallback


__all__ = [
    'PENDING', 'ALLOW', 'REDIRECT', 'GuardDecision', 'RouteGuard',
    'role_allows', 'role_gate', 'permission_gate',
]
