"""Session token issuing and verification.

A token is issued for (identity, permissions) at login and verified against the stored identity
on restore. Verification failures raise MalformedSessionState so restore discards the session.
"""
from __future__ import annotations
import re
import secrets
from typing import FrozenSet

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from guarddesk.errors import MalformedSessionState
from guarddesk.models.identity import Identity

_OPAQUE_RE = re.compile(r'^session-(\d+)-[0-9a-f]{32}$')


def issue_opaque_token(identity: Identity, permissions: FrozenSet[str]) -> str:
    return f"session-{identity.id}-{secrets.token_hex(16)}"


def verify_opaque_token(token: str, identity: Identity) -> None:
    m = _OPAQUE_RE.match(token or '')
    if not m or int(m.group(1)) != identity.id:
        raise MalformedSessionState('session token does not match identity')


def issue_access_token(identity: Identity, permissions: FrozenSet[str]) -> str:
    """Signed JWT; needs an app context (flask-jwt-extended reads JWT_* config)."""
    # JWT identity must be a string (flask-jwt-extended v4 requirement)
    return create_access_token(
        identity=str(identity.id),
        additional_claims={'role': identity.role, 'perms': sorted(permissions)},
    )


def verify_access_token(token: str, identity: Identity) -> None:
    try:
        claims = decode_token(token)
    except (JWTExtendedException, PyJWTError) as e:
        raise MalformedSessionState(f'session token rejected: {e}') from e
    if claims.get('sub') != str(identity.id) or claims.get('role') != identity.role:
        raise MalformedSessionState('session token does not match identity')


__all__ = ['issue_opaque_token', 'verify_opaque_token', 'issue_access_token', 'verify_access_token']
