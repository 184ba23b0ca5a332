"""Audit logging decorator for auth route handlers.

Usage:

@audit_log('AUTH.LOGIN', entity='User', meta_builder=lambda data, rv, a, kw: {'success': data.get('success')})
def login(): ...

Parameters:
  action: required audit action code (e.g. AUTH.LOGIN)
  entity: optional entity label (User); entity_id is the session user's id when there is one.
  meta_builder: callable returning a meta dict; receives (data, original_return_value, args, kwargs).
  actor_before: record the session user as it was before the handler ran (logout), instead of after.

Return handling: views return dict, (dict, status) or a Response; the first element is inspected
when it is a dict. The original return value is always passed through untouched.
"""
from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Optional

from guarddesk import get_db
from guarddesk.decorators.auth import get_auth_manager
from guarddesk.services.audit import add_audit

logger = logging.getLogger(__name__)


def _response_body(rv: Any) -> dict:
    data = rv[0] if isinstance(rv, tuple) and rv else rv
    return data if isinstance(data, dict) else {}


def audit_log(
    action: str,
    *,
    entity: Optional[str] = None,
    meta_builder: Optional[Callable[[dict, Any, tuple, dict], dict]] = None,
    actor_before: bool = False,
):
    def outer(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            actor = get_auth_manager().user if actor_before else None
            rv = fn(*args, **kwargs)
            try:
                if not actor_before:
                    actor = get_auth_manager().user
                meta = meta_builder(_response_body(rv), rv, args, kwargs) if meta_builder else None
                entity_id = actor.id if actor is not None else None
                add_audit(action, entity, entity_id, meta, actor=actor)
                get_db().commit()
            except Exception:
                # audit must not interfere with the main response
                logger.exception('Audit write failed for %s', action)
                get_db().rollback()
            return rv
        return wrapper
    return outer
