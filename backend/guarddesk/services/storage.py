"""Durable session store port.

AuthSessionManager only needs get/set/clear over string keys (TOKEN_KEY, USER_KEY). Three
backings:

  MemorySessionStore  - dict, for tests and embedding
  FlaskSessionStore   - the signed session cookie of the current request (browser clients)
  SqlSessionStore     - session_entries table, survives process restarts (scripts/authctl.py)

clear() only removes the keys this store manages, so unrelated cookie data (flash messages)
survives a logout.
"""
from __future__ import annotations
from typing import Dict, Iterable, Optional

from sqlalchemy import select, delete

from guarddesk.config.auth import SESSION_KEYS
from guarddesk.models.authz import SessionEntry


class SessionStore:
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class MemorySessionStore(SessionStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def clear(self):
        self.data.clear()


class FlaskSessionStore(SessionStore):
    def __init__(self, prefix: str = 'auth.', keys: Iterable[str] = SESSION_KEYS):
        self.prefix = prefix
        self.keys = tuple(keys)

    def _session(self):
        from flask import session
        return session

    def get(self, key):
        return self._session().get(self.prefix + key)

    def set(self, key, value):
        self._session()[self.prefix + key] = value

    def clear(self):
        sess = self._session()
        for key in self.keys:
            sess.pop(self.prefix + key, None)


class SqlSessionStore(SessionStore):
    """Key/value rows scoped by namespace; each call commits (single-row writes)."""

    def __init__(self, db_session, namespace: str = 'default'):
        self.db = db_session
        self.namespace = namespace

    def get(self, key):
        row = self.db.execute(
            select(SessionEntry).where(SessionEntry.namespace == self.namespace, SessionEntry.key == key)
        ).scalar_one_or_none()
        return row.value if row else None

    def set(self, key, value):
        row = self.db.execute(
            select(SessionEntry).where(SessionEntry.namespace == self.namespace, SessionEntry.key == key)
        ).scalar_one_or_none()
        if row:
            row.value = value
        else:
            self.db.add(SessionEntry(namespace=self.namespace, key=key, value=value))
        self.db.commit()

    def clear(self):
        self.db.execute(delete(SessionEntry).where(SessionEntry.namespace == self.namespace))
        self.db.commit()


__all__ = ['SessionStore', 'MemorySessionStore', 'FlaskSessionStore', 'SqlSessionStore']
