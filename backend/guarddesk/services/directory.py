"""Identity directories: read-only credential lookup used by AuthSessionManager.

find_by_credentials matches email exactly (case-sensitive), the secret, and status == active.
Anything else is "no match"; callers turn that into InvalidCredentials.
"""
from __future__ import annotations
import hmac
import logging
from typing import Any, Iterable, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from guarddesk.data.users import USERS
from guarddesk.errors import DirectoryUnavailable
from guarddesk.models.authz import User
from guarddesk.models.identity import Identity

logger = logging.getLogger(__name__)


class IdentityDirectory:
    def find_by_credentials(self, email: str, secret: str) -> Optional[Identity]:
        raise NotImplementedError

    def list_identities(self) -> List[Identity]:
        raise NotImplementedError


class StaticIdentityDirectory(IdentityDirectory):
    def __init__(self, entries: Iterable[Mapping[str, Any]] = USERS):
        self.entries = [dict(e) for e in entries]

    def find_by_credentials(self, email, secret):
        if not isinstance(email, str) or not isinstance(secret, str):
            return None
        for entry in self.entries:
            if entry.get('email') != email:
                continue
            if not hmac.compare_digest(str(entry.get('password', '')).encode(), secret.encode()):
                continue
            identity = Identity.from_directory_entry(entry)
            if identity.is_active:
                return identity
        return None

    def list_identities(self):
        return [Identity.from_directory_entry(e) for e in self.entries]


class SqlIdentityDirectory(IdentityDirectory):
    """users table with werkzeug password hashes (seed via scripts/seed_users.py)."""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def find_by_credentials(self, email, secret):
        if not isinstance(email, str) or not isinstance(secret, str):
            return None
        session = self.session_factory()
        try:
            user = session.execute(
                select(User).where(User.email == email)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.exception('identity lookup failed')
            raise DirectoryUnavailable('Identity directory unavailable') from e
        if not user or not user.verify_password(secret):
            return None
        identity = Identity.from_dict(user.to_identity_dict())
        return identity if identity.is_active else None

    def list_identities(self):
        session = self.session_factory()
        try:
            rows = session.execute(select(User).order_by(User.id.asc())).scalars().all()
        except SQLAlchemyError as e:
            raise DirectoryUnavailable('Identity directory unavailable') from e
        return [Identity.from_dict(u.to_identity_dict()) for u in rows]


__all__ = ['IdentityDirectory', 'StaticIdentityDirectory', 'SqlIdentityDirectory']
