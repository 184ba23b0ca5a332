from __future__ import annotations
from typing import Any, Dict, Optional
from flask import has_request_context, request
from guarddesk import get_db
from guarddesk.models.audit import AuthEvent
from guarddesk.models.identity import Identity


def add_audit(action: str, entity: Optional[str] = None, entity_id: Optional[Any] = None,
              meta: Optional[Dict[str, Any]] = None, actor: Optional[Identity] = None) -> AuthEvent:
    """Stage an auth activity row in the current DB session (caller commits).

    actor is the signed-in Identity, or None for anonymous events such as a rejected login.
    The client address is captured when called inside a request.
    """
    event = AuthEvent(
        actor_user_id=actor.id if actor is not None else None,
        actor_role=actor.role if actor is not None else None,
        action=action,
        entity=entity,
        entity_id=str(entity_id) if entity_id is not None else None,
        remote_addr=request.remote_addr if has_request_context() else None,
        meta=dict(meta or {}),
    )
    get_db().add(event)
    return event


def audit_row(e: AuthEvent) -> Dict[str, Any]:
    return {
        'id': e.id,
        'actor_user_id': e.actor_user_id,
        'actor_role': e.actor_role,
        'action': e.action,
        'entity': e.entity,
        'entity_id': e.entity_id,
        'remote_addr': e.remote_addr,
        'meta': e.meta,
        'created_at': e.created_at.isoformat() if e.created_at else None,
    }
