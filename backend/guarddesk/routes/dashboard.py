from flask import Blueprint, redirect
from guarddesk.constants import permissions as P
from guarddesk.constants.permissions import NAV_ITEMS, get_role_label
from guarddesk.decorators.auth import get_auth_manager, get_route_guard, require_permissions
from guarddesk.services.guard import permission_gate, role_gate

views_bp = Blueprint('views', __name__)

# view -> [(action key, permission)]; an action is listed only if the session holds its permission
VIEW_ACTIONS = {
    'dashboard': [('analytics', P.VIEW_ANALYTICS)],
    'guards': [('create', P.CREATE_GUARD), ('edit', P.EDIT_GUARD), ('delete', P.DELETE_GUARD), ('export', P.EXPORT_GUARDS)],
    'clients': [('create', P.CREATE_CLIENT), ('edit', P.EDIT_CLIENT), ('delete', P.DELETE_CLIENT), ('export', P.EXPORT_CLIENTS)],
    'deployments': [('create', P.CREATE_DEPLOYMENT), ('edit', P.EDIT_DEPLOYMENT), ('delete', P.DELETE_DEPLOYMENT)],
    'attendance': [('mark', P.MARK_ATTENDANCE), ('edit', P.EDIT_ATTENDANCE), ('export', P.EXPORT_ATTENDANCE)],
    'payroll': [('create', P.CREATE_PAYROLL), ('edit', P.EDIT_PAYROLL), ('process', P.PROCESS_PAYROLL), ('export', P.EXPORT_PAYROLL)],
    'reports': [('export', P.EXPORT_REPORTS)],
    'users': [('create', P.CREATE_USER), ('edit', P.EDIT_USER), ('delete', P.DELETE_USER), ('manage_roles', P.MANAGE_ROLES)],
    'settings': [('edit_company', P.EDIT_COMPANY_SETTINGS), ('edit_system', P.EDIT_SYSTEM_SETTINGS)],
}


def _view(name: str, **extra):
    manager = get_auth_manager()
    guard = get_route_guard()
    actions = [
        permission_gate(guard, manager.state, [perm], key)
        for key, perm in VIEW_ACTIONS.get(name, [])
    ]
    payload = {
        'view': name,
        'user': manager.user.name,
        'role': manager.role,
        'role_label': get_role_label(manager.role),
        'actions': [a for a in actions if a is not None],
    }
    payload.update(extra)
    return payload


@views_bp.get('/')
@require_permissions()
def index():
    return redirect('/dashboard')


@views_bp.get('/navigation')
@require_permissions()
def navigation():
    manager = get_auth_manager()
    items = [
        {'key': key, 'label': label, 'path': path}
        for key, label, path, perm in NAV_ITEMS
        if manager.check_permission(perm)
    ]
    return {'items': items}


@views_bp.get('/dashboard')
@require_permissions(P.VIEW_DASHBOARD)
def dashboard():
    role = get_auth_manager().role
    widgets = ['stats', 'recent_activities']
    for w in (
        role_gate(role, [P.SUPER_ADMIN, P.ADMIN, P.ACCOUNTANT], 'revenue_chart'),
        role_gate(role, [P.SUPER_ADMIN], 'system_health'),
    ):
        if w:
            widgets.append(w)
    return _view('dashboard', widgets=widgets)


@views_bp.get('/guards')
@require_permissions(P.VIEW_GUARDS)
def guards():
    return _view('guards')


@views_bp.get('/clients')
@require_permissions(P.VIEW_CLIENTS)
def clients():
    return _view('clients')


@views_bp.get('/deployments')
@require_permissions(P.VIEW_DEPLOYMENTS)
def deployments():
    return _view('deployments')


@views_bp.get('/attendance')
@require_permissions(P.VIEW_ATTENDANCE)
def attendance():
    return _view('attendance')


@views_bp.get('/payroll')
@require_permissions(P.VIEW_PAYROLL)
def payroll():
    return _view('payroll')


@views_bp.get('/reports')
@require_permissions(P.VIEW_REPORTS)
def reports():
    return _view('reports')


@views_bp.get('/users')
@require_permissions(P.VIEW_USERS)
def users():
    return _view('users')


@views_bp.get('/settings')
@require_permissions(P.VIEW_SETTINGS)
def settings():
    manager = get_auth_manager()
    guard = get_route_guard()
    tabs = [
        permission_gate(guard, manager.state, [], 'profile'),
        permission_gate(guard, manager.state, [P.EDIT_COMPANY_SETTINGS], 'company'),
        permission_gate(guard, manager.state, [P.EDIT_SYSTEM_SETTINGS], 'system'),
        permission_gate(guard, manager.state, [P.CREATE_USER, P.MANAGE_ROLES], 'security', require_all=True),
    ]
    return _view('settings', tabs=[t for t in tabs if t])
