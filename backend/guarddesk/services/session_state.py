"""Session states, events and the reducer that moves between them.

Three states: Loading (startup or login in flight), Unauthenticated, Authenticated. Every change
goes through SessionReducer(state, event) -> new state; AuthSessionManager owns the side effects
(durable store, notifications) and only calls the reducer once those are done.

Which events a state accepts is declared in SESSION_FSM. Anything else raises InvalidTransition,
which is a caller bug rather than a user-facing failure.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, FrozenSet, Mapping, Optional, Union

from guarddesk.errors import InvalidTransition
from guarddesk.models.identity import Identity
from guarddesk.services.registry import RoleGrants, DEFAULT_GRANTS
from guarddesk.utils.fsm import TransitionValidator

LOADING = 'loading'
UNAUTHENTICATED = 'unauthenticated'
AUTHENTICATED = 'authenticated'


# --- States ---
@dataclass(frozen=True)
class Loading:
    name: ClassVar[str] = LOADING
    is_authenticated: ClassVar[bool] = False
    is_loading: ClassVar[bool] = True
    identity: ClassVar[Optional[Identity]] = None
    permissions: ClassVar[FrozenSet[str]] = frozenset()


@dataclass(frozen=True)
class Unauthenticated:
    error: Optional[str] = None
    name: ClassVar[str] = UNAUTHENTICATED
    is_authenticated: ClassVar[bool] = False
    is_loading: ClassVar[bool] = False
    identity: ClassVar[Optional[Identity]] = None
    permissions: ClassVar[FrozenSet[str]] = frozenset()


@dataclass(frozen=True)
class Authenticated:
    identity: Identity
    token: str
    permissions: FrozenSet[str] = field(default_factory=frozenset)
    name: ClassVar[str] = AUTHENTICATED
    is_authenticated: ClassVar[bool] = True
    is_loading: ClassVar[bool] = False


SessionState = Union[Loading, Unauthenticated, Authenticated]


def role_of(state: SessionState) -> Optional[str]:
    return state.identity.role if state.identity is not None else None


# --- Events ---
@dataclass(frozen=True)
class LoginStarted:
    name: ClassVar[str] = 'login_started'


@dataclass(frozen=True)
class LoginSucceeded:
    identity: Identity
    token: str
    name: ClassVar[str] = 'login_succeeded'


@dataclass(frozen=True)
class LoginFailed:
    error: str
    name: ClassVar[str] = 'login_failed'


@dataclass(frozen=True)
class SessionRestored:
    identity: Identity
    token: str
    name: ClassVar[str] = 'session_restored'


@dataclass(frozen=True)
class RestoreFailed:
    name: ClassVar[str] = 'restore_failed'


@dataclass(frozen=True)
class LoggedOut:
    name: ClassVar[str] = 'logged_out'


@dataclass(frozen=True)
class ProfileUpdated:
    patch: Mapping[str, Any]
    name: ClassVar[str] = 'profile_updated'


SessionEvent = Union[LoginStarted, LoginSucceeded, LoginFailed, SessionRestored, RestoreFailed, LoggedOut, ProfileUpdated]

SESSION_FSM = TransitionValidator({
    LOADING: {
        LoginStarted.name, LoginSucceeded.name, LoginFailed.name,
        SessionRestored.name, RestoreFailed.name, LoggedOut.name,
    },
    UNAUTHENTICATED: {LoginStarted.name, LoginSucceeded.name, LoginFailed.name, LoggedOut.name},
    AUTHENTICATED: {LoginStarted.name, LoggedOut.name, ProfileUpdated.name},
}, field_name='session')


class SessionReducer:
    """(state, event) -> state. Permissions are derived here and only here."""

    def __init__(self, grants: RoleGrants = DEFAULT_GRANTS):
        self.grants = grants

    def __call__(self, state: SessionState, event: SessionEvent) -> SessionState:
        SESSION_FSM.assert_can_transition(state.name, event.name)
        if isinstance(event, LoginStarted):
            return Loading()
        if isinstance(event, (LoginSucceeded, SessionRestored)):
            return Authenticated(
                identity=event.identity,
                token=event.token,
                permissions=self.grants.permissions_for(event.identity.role),
            )
        if isinstance(event, LoginFailed):
            return Unauthenticated(error=event.error)
        if isinstance(event, (RestoreFailed, LoggedOut)):
            return Unauthenticated()
        if isinstance(event, ProfileUpdated):
            # role is not a profile field, so the permission set stays valid
            return replace(state, identity=state.identity.with_profile(event.patch))
        raise InvalidTransition(f"Unknown session event {event!r}")


transition = SessionReducer()

__all__ = [
    'LOADING', 'UNAUTHENTICATED', 'AUTHENTICATED',
    'Loading', 'Unauthenticated', 'Authenticated', 'SessionState', 'role_of',
    'LoginStarted', 'LoginSucceeded', 'LoginFailed', 'SessionRestored', 'RestoreFailed',
    'LoggedOut', 'ProfileUpdated', 'SessionEvent',
    'SESSION_FSM', 'SessionReducer', 'transition',
]
