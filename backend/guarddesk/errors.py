"""Exception taxonomy for the access layer.

Only InvalidCredentials and MalformedSessionState are raised in normal operation and both are
recovered inside AuthSessionManager. Access denial and missing sessions are guard decisions,
see REASON_* below; they never surface as exceptions.
"""
from __future__ import annotations

REASON_UNAUTHENTICATED = 'unauthenticated'
REASON_ACCESS_DENIED = 'access_denied'


class AuthError(Exception):
    """Base class for recoverable auth failures."""


class InvalidCredentials(AuthError):
    def __init__(self, message: str = 'Invalid email or password'):
        super().__init__(message)


class MalformedSessionState(AuthError):
    pass


class DirectoryUnavailable(AuthError):
    pass


class InvalidTransition(Exception):
    """Event not accepted by the session state machine in its current state."""


__all__ = [
    'REASON_UNAUTHENTICATED', 'REASON_ACCESS_DENIED',
    'AuthError', 'InvalidCredentials', 'MalformedSessionState', 'DirectoryUnavailable',
    'InvalidTransition',
]
