"""Request payload validation helpers with consistent 400 error semantics."""
from __future__ import annotations
from typing import Any, Dict
from flask import abort


def require_json_object(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        abort(400, description='JSON object body required')
    return data


def validate_credentials(data: Dict[str, Any]):
    """Return (email, password) or abort 400. Matching is left to the identity directory."""
    email = data.get('email'); password = data.get('password')
    if not email or not password:
        abort(400, description='email & password required')
    if not isinstance(email, str) or not isinstance(password, str):
        abort(400, description='email & password must be strings')
    return email.strip(), password


def validate_profile_patch(data: Dict[str, Any]) -> Dict[str, Any]:
    if 'name' in data:
        name = data['name']
        if not isinstance(name, str) or not (2 <= len(name.strip()) <= 100):
            abort(400, description='name must be 2-100 characters')
    for key in ('phone', 'avatar'):
        if key in data and data[key] is not None and not isinstance(data[key], str):
            abort(400, description=f'{key} must be a string')
    return data

__all__ = ['require_json_object', 'validate_credentials', 'validate_profile_patch']
