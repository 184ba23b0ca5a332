"""Sanitized identity carried by sessions.

The directory may know a secret for each account; an Identity never does. It is the shape written
to the durable session store (as JSON under USER_KEY) and returned by /auth/me.
"""
from __future__ import annotations
import json
from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Mapping, Optional

from guarddesk.config.auth import PROFILE_FIELDS
from guarddesk.errors import MalformedSessionState

STATUS_ACTIVE = 'active'

# Credential-bearing keys that must never reach a session
SECRET_FIELDS = ('password', 'password_hash')


@dataclass(frozen=True)
class Identity:
    id: int
    name: str
    email: str
    role: str
    status: str = STATUS_ACTIVE
    phone: Optional[str] = None
    avatar: Optional[str] = None
    created_at: Optional[str] = None
    last_login: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    def with_profile(self, patch: Mapping[str, Any]) -> 'Identity':
        """Return a copy with profile fields from patch applied; everything else is left alone."""
        changes = {k: v for k, v in patch.items() if k in PROFILE_FIELDS}
        return replace(self, **changes) if changes else self

    @classmethod
    def from_dict(cls, raw: Any) -> 'Identity':
        if not isinstance(raw, Mapping):
            raise MalformedSessionState('identity payload must be an object')
        ident = raw.get('id')
        if not isinstance(ident, int) or isinstance(ident, bool):
            raise MalformedSessionState('identity id must be an integer')
        for key in ('name', 'email', 'role'):
            if not isinstance(raw.get(key), str) or not raw.get(key):
                raise MalformedSessionState(f'identity {key} missing')
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in raw.items() if k in known})

    @classmethod
    def from_json(cls, blob: Any) -> 'Identity':
        if not isinstance(blob, (str, bytes)):
            raise MalformedSessionState('identity payload must be serialized JSON')
        try:
            raw = json.loads(blob)
        except ValueError as e:
            raise MalformedSessionState(f'identity payload is not JSON: {e}') from e
        return cls.from_dict(raw)

    @classmethod
    def from_directory_entry(cls, entry: Mapping[str, Any]) -> 'Identity':
        """Strip secrets from a directory record."""
        clean = {k: v for k, v in entry.items() if k not in SECRET_FIELDS}
        return cls.from_dict(clean)


__all__ = ['Identity', 'STATUS_ACTIVE', 'SECRET_FIELDS']
