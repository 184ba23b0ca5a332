from functools import wraps
from urllib.parse import urlencode
from flask import current_app, g, redirect, request
from guarddesk import EXTENSION_KEY
from guarddesk.services.auth import AuthSessionManager
from guarddesk.services.guard import GuardDecision, RouteGuard
from guarddesk.services.notifications import FlashNotificationSink
from guarddesk.services.storage import FlaskSessionStore
from guarddesk.services.tokens import issue_access_token, verify_access_token


def get_components():
    return current_app.extensions[EXTENSION_KEY]


def get_route_guard() -> RouteGuard:
    return get_components()['guard']


def get_auth_manager() -> AuthSessionManager:
    """Per-request manager bound to the client's session cookie, restored on first use."""
    manager = g.get('auth_manager')
    if manager is None:
        comps = get_components()
        manager = AuthSessionManager(
            directory=comps['directory'],
            store=FlaskSessionStore(),
            notifier=FlashNotificationSink(),
            grants=comps['grants'],
            token_issuer=issue_access_token,
            token_verifier=verify_access_token,
            login_delay=current_app.config.get('LOGIN_DELAY_SECONDS', 0),
        )
        manager.restore()
        g.auth_manager = manager
    return manager


def requested_location() -> str:
    qs = request.query_string.decode('utf-8', 'replace')
    return f"{request.path}?{qs}" if qs else request.path


def decision_response(decision: GuardDecision):
    """Translate a non-allow decision into an HTTP response."""
    if decision.pending:
        return {'status': 'pending'}, 202
    target = decision.redirect_to
    if decision.from_location and target == get_route_guard().login_url:
        target = f"{target}?{urlencode({'next': decision.from_location})}"
    return redirect(target)


def require_permissions(*codes: str, require_all: bool = False):
    """Guard a view; no codes means any signed-in user."""
    def outer(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            decision = get_route_guard().check(
                get_auth_manager().state, codes, require_all=require_all, location=requested_location()
            )
            if not decision.allowed:
                return decision_response(decision)
            return fn(*args, **kwargs)
        return wrapper
    return outer


def require_roles(*roles: str):
    def outer(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            decision = get_route_guard().check_roles(get_auth_manager().state, roles, location=requested_location())
            if not decision.allowed:
                return decision_response(decision)
            return fn(*args, **kwargs)
        return wrapper
    return outer
