from flask import Blueprint, request, get_flashed_messages
from guarddesk.config.auth import safe_next
from guarddesk.constants.permissions import get_role_label
from guarddesk.decorators.auth import get_auth_manager, require_permissions
from guarddesk.decorators.audit import audit_log
from guarddesk.utils.validation import require_json_object, validate_credentials, validate_profile_patch

auth_bp = Blueprint('auth', __name__)


def _session_payload(manager):
    user = manager.user
    return {
        'user': user.to_dict(),
        'role': user.role,
        'role_label': get_role_label(user.role),
        'permissions': sorted(manager.permissions),
        'token': manager.state.token,
    }


@auth_bp.get('/login')
def login_page():
    # Login entry point; `next` is where the client returns after signing in
    manager = get_auth_manager()
    target = safe_next(request.args.get('next'))
    if manager.is_authenticated:
        return {'view': 'login', 'authenticated': True, 'redirect_to': target}
    return {'view': 'login', 'authenticated': False, 'next': target}


@auth_bp.post('/auth/login')
@audit_log(
    'AUTH.LOGIN',
    entity='User',
    meta_builder=lambda data, rv, a, kw: {
        'success': bool(data.get('success')),
        'email': (request.get_json(silent=True) or {}).get('email'),
    },
)
def login():
    data = require_json_object(request.get_json(silent=True))
    email, password = validate_credentials(data)
    result = get_auth_manager().login(email, password)
    payload = result.to_dict()
    if not result.success:
        return payload, 401
    payload['redirect_to'] = safe_next(data.get('next') or request.args.get('next'))
    return payload


@auth_bp.post('/auth/logout')
@audit_log('AUTH.LOGOUT', entity='User', actor_before=True)
def logout():
    get_auth_manager().logout()
    return {'success': True, 'message': 'Logged out successfully'}


@auth_bp.get('/auth/me')
@require_permissions()
def me():
    payload = _session_payload(get_auth_manager())
    payload['notifications'] = [
        {'level': level, 'message': message}
        for level, message in get_flashed_messages(with_categories=True)
    ]
    return payload


@auth_bp.put('/auth/profile')
@require_permissions()
@audit_log(
    'AUTH.PROFILE.UPDATE',
    entity='User',
    meta_builder=lambda data, rv, a, kw: {'fields': sorted((request.get_json(silent=True) or {}).keys())},
)
def update_profile():
    patch = validate_profile_patch(require_json_object(request.get_json(silent=True)))
    result = get_auth_manager().update_profile(patch)
    if not result.success:
        return result.to_dict(), 401
    payload = result.to_dict()
    payload['permissions'] = sorted(get_auth_manager().permissions)
    return payload


@auth_bp.get('/unauthorized')
def unauthorized():
    manager = get_auth_manager()
    body = {
        'view': 'unauthorized',
        'error': {
            'status': 403,
            'title': 'Access Denied',
            'detail': "You don't have permission to access this page.",
        },
    }
    if manager.user is not None:
        body['user'] = {'name': manager.user.name, 'role': manager.user.role, 'role_label': get_role_label(manager.user.role)}
    return body, 403
