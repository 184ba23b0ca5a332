"""AuthSessionManager: login / logout / profile update / restore for one client session.

Side effects happen in a fixed order: durable store first, then the reducer transition, then the
notification. A caller observing the new state can therefore rely on the store already holding
the same session.

No method raises for expected failures. Bad credentials and directory faults come back as a
failed AuthResult; malformed persisted state is discarded on restore.
"""
from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Iterable, Mapping, Optional

from guarddesk.config.auth import TOKEN_KEY, USER_KEY, PROFILE_FIELDS
from guarddesk.errors import AuthError, InvalidCredentials, MalformedSessionState
from guarddesk.models.identity import Identity
from guarddesk.services.directory import IdentityDirectory
from guarddesk.services.notifications import NotificationSink, LoggingNotificationSink
from guarddesk.services.policy import PermissionEvaluator
from guarddesk.services.registry import RoleGrants, DEFAULT_GRANTS
from guarddesk.services.session_state import (
    Authenticated, Loading, SessionReducer, SessionState, role_of,
    LoginStarted, LoginSucceeded, LoginFailed, SessionRestored, RestoreFailed, LoggedOut, ProfileUpdated,
)
from guarddesk.services.storage import SessionStore
from guarddesk.services.tokens import issue_opaque_token, verify_opaque_token

logger = logging.getLogger(__name__)

TokenIssuer = Callable[[Identity, FrozenSet[str]], str]
TokenVerifier = Callable[[str, Identity], None]


@dataclass(frozen=True)
class AuthResult:
    success: bool
    user: Optional[Identity] = None
    token: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self):
        payload = {'success': self.success}
        if self.user is not None:
            payload['user'] = self.user.to_dict()
        if self.token is not None:
            payload['token'] = self.token
        if self.error is not None:
            payload['error'] = self.error
        return payload


class AuthSessionManager:
    def __init__(
        self,
        directory: IdentityDirectory,
        store: SessionStore,
        notifier: Optional[NotificationSink] = None,
        grants: RoleGrants = DEFAULT_GRANTS,
        token_issuer: TokenIssuer = issue_opaque_token,
        token_verifier: TokenVerifier = verify_opaque_token,
        login_delay: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.directory = directory
        self.store = store
        self.notifier = notifier or LoggingNotificationSink()
        self.grants = grants
        self.evaluator = PermissionEvaluator(grants)
        self.reducer = SessionReducer(grants)
        self.token_issuer = token_issuer
        self.token_verifier = token_verifier
        self.login_delay = login_delay
        self._sleep = sleep
        self.state: SessionState = Loading()

    # --- state accessors ---
    @property
    def is_authenticated(self) -> bool:
        return self.state.is_authenticated

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def user(self) -> Optional[Identity]:
        return self.state.identity

    @property
    def role(self) -> Optional[str]:
        return role_of(self.state)

    @property
    def permissions(self) -> FrozenSet[str]:
        return self.state.permissions

    def dispatch(self, event) -> SessionState:
        self.state = self.reducer(self.state, event)
        return self.state

    # --- transitions ---
    def restore(self) -> SessionState:
        """Rebuild the session from the durable store. Only acts while Loading."""
        if not self.is_loading:
            return self.state
        token = self.store.get(TOKEN_KEY)
        raw_user = self.store.get(USER_KEY)
        if token is None or raw_user is None:
            return self.dispatch(RestoreFailed())
        try:
            if not isinstance(token, str):
                raise MalformedSessionState('session token must be a string')
            identity = Identity.from_json(raw_user)
            self.token_verifier(token, identity)
        except MalformedSessionState as e:
            logger.warning('Discarding stored session: %s', e)
            self.store.clear()
            return self.dispatch(RestoreFailed())
        logger.debug('Restored session for user %s', identity.id)
        return self.dispatch(SessionRestored(identity=identity, token=token))

    def login(self, email: str, password: str) -> AuthResult:
        self.dispatch(LoginStarted())
        if self.login_delay:
            self._sleep(self.login_delay)
        try:
            identity = self.directory.find_by_credentials(email, password)
            if identity is None:
                raise InvalidCredentials()
        except AuthError as e:
            message = str(e) or 'Login failed'
            logger.warning('Login failed for %r: %s', email, message)
            self.store.clear()
            self.dispatch(LoginFailed(error=message))
            self.notifier.error(message)
            return AuthResult(success=False, error=message)

        token = self.token_issuer(identity, self.grants.permissions_for(identity.role))
        self.store.set(TOKEN_KEY, token)
        self.store.set(USER_KEY, identity.to_json())
        self.dispatch(LoginSucceeded(identity=identity, token=token))
        logger.info('User %s logged in as %s', identity.id, identity.role)
        self.notifier.success(f'Welcome back, {identity.name}!')
        return AuthResult(success=True, user=identity, token=token)

    def logout(self) -> SessionState:
        previous = self.user
        self.store.clear()
        self.dispatch(LoggedOut())
        if previous is not None:
            logger.info('User %s logged out', previous.id)
        self.notifier.success('Logged out successfully')
        return self.state

    def update_profile(self, patch: Mapping[str, Any]) -> AuthResult:
        if not isinstance(self.state, Authenticated):
            return AuthResult(success=False, error='Not signed in')
        ignored = sorted(k for k in patch if k not in PROFILE_FIELDS)
        if ignored:
            logger.info('Ignoring non-profile fields in update: %s', ignored)
        updated = self.state.identity.with_profile(patch)
        self.store.set(USER_KEY, updated.to_json())
        self.dispatch(ProfileUpdated(patch=dict(patch)))
        self.notifier.success('Profile updated successfully')
        return AuthResult(success=True, user=self.user, token=self.state.token)

    # --- permission checks against the current session ---
    def check_permission(self, permission: str) -> bool:
        return self.evaluator.has_permission(self.role, permission)

    def check_any_permission(self, permissions: Iterable[str]) -> bool:
        return self.evaluator.has_any_permission(self.role, permissions)

    def check_all_permissions(self, permissions: Iterable[str]) -> bool:
        return self.evaluator.has_all_permissions(self.role, permissions)


__all__ = ['AuthResult', 'AuthSessionManager']
