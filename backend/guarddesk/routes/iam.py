from flask import Blueprint, request, abort
from guarddesk import get_db
from guarddesk.config.pagination import normalize_pagination, paginate, build_list_payload
from guarddesk.constants.permissions import ROLE_CONFIG, ROLE_HIERARCHY, SUPER_ADMIN, ADMIN, MANAGE_ROLES, VIEW_USERS
from guarddesk.decorators.auth import get_auth_manager, require_permissions, require_roles, get_components
from guarddesk.models.audit import AuthEvent
from guarddesk.services.audit import audit_row
from guarddesk.services.policy import assignable_roles, can_modify_user

iam_bp = Blueprint('iam', __name__)


def _pagination():
    try:
        return normalize_pagination(request.args.get('limit'), request.args.get('offset'))
    except ValueError as e:
        abort(400, description=str(e))


@iam_bp.get('/roles')
@require_permissions(MANAGE_ROLES)
def list_roles():
    grants = get_components()['grants']
    actor_role = get_auth_manager().role
    data = [
        {
            'name': role,
            'label': ROLE_CONFIG.get(role, {}).get('label', role),
            'description': ROLE_CONFIG.get(role, {}).get('description'),
            'level': ROLE_HIERARCHY.get(role, 0),
            'permissions': sorted(grants.permissions_for(role)),
        }
        for role in grants
    ]
    return {'data': data, 'assignable_roles': assignable_roles(actor_role)}


@iam_bp.get('/users')
@require_permissions(VIEW_USERS)
def list_users():
    limit, offset = _pagination()
    role_filter = request.args.get('role')
    actor_role = get_auth_manager().role
    identities = get_components()['directory'].list_identities()
    if role_filter:
        identities = [i for i in identities if i.role == role_filter]
    page, total = paginate(identities, limit, offset)
    rows = [dict(i.to_dict(), manageable=can_modify_user(actor_role, i.role)) for i in page]
    return build_list_payload(rows, total, limit, offset)


@iam_bp.get('/audit/logs')
@require_roles(SUPER_ADMIN, ADMIN)
def list_audit_logs():
    session = get_db()
    q = session.query(AuthEvent)
    actor = request.args.get('actor_user_id')
    action = request.args.get('action')
    if actor:
        try:
            q = q.filter(AuthEvent.actor_user_id==int(actor))
        except ValueError:
            abort(400, description='actor_user_id must be int')
    if action:
        q = q.filter(AuthEvent.action==action)
    limit, offset = _pagination()
    total = q.count()
    rows = q.order_by(AuthEvent.id.desc()).offset(offset).limit(limit).all()
    return build_list_payload([audit_row(r) for r in rows], total, limit, offset)
