"""Defaults for session handling. Runtime overrides go through app.config (see create_app)."""
from __future__ import annotations
from typing import Optional

# Durable store keys
TOKEN_KEY = 'token'
USER_KEY = 'user'
SESSION_KEYS = (TOKEN_KEY, USER_KEY)

LOGIN_URL = '/login'
UNAUTHORIZED_URL = '/unauthorized'
DEFAULT_LANDING = '/dashboard'

# Simulated credential-check latency (seconds)
DEFAULT_LOGIN_DELAY = 0.5
DEFAULT_SESSION_TTL_HOURS = 8

# Identity fields a user may change about themselves
PROFILE_FIELDS = ('name', 'phone', 'avatar')


def safe_next(target: Optional[str], default: str = DEFAULT_LANDING) -> str:
    """Return target if it is a local absolute path, else default (no open redirects)."""
    if not target or not isinstance(target, str):
        return default
    if not target.startswith('/') or target.startswith('//') or '\\' in target:
        return default
    return target
