"""Central enum-like definitions for roles and permission codes.
Extend cautiously; never rename codes silently, views and stored tokens reference them.
"""
from __future__ import annotations
from typing import List, Dict

# --- Roles ---
SUPER_ADMIN = 'super_admin'
ADMIN = 'admin'
MANAGER = 'manager'
SUPERVISOR = 'supervisor'
STAFF = 'staff'
ACCOUNTANT = 'accountant'

ROLES = [SUPER_ADMIN, ADMIN, MANAGER, SUPERVISOR, STAFF, ACCOUNTANT]

# --- Permissions ---
VIEW_DASHBOARD = 'view_dashboard'
VIEW_ANALYTICS = 'view_analytics'

VIEW_GUARDS = 'view_guards'
CREATE_GUARD = 'create_guard'
EDIT_GUARD = 'edit_guard'
DELETE_GUARD = 'delete_guard'
EXPORT_GUARDS = 'export_guards'

VIEW_CLIENTS = 'view_clients'
CREATE_CLIENT = 'create_client'
EDIT_CLIENT = 'edit_client'
DELETE_CLIENT = 'delete_client'
EXPORT_CLIENTS = 'export_clients'

VIEW_DEPLOYMENTS = 'view_deployments'
CREATE_DEPLOYMENT = 'create_deployment'
EDIT_DEPLOYMENT = 'edit_deployment'
DELETE_DEPLOYMENT = 'delete_deployment'

VIEW_ATTENDANCE = 'view_attendance'
MARK_ATTENDANCE = 'mark_attendance'
EDIT_ATTENDANCE = 'edit_attendance'
EXPORT_ATTENDANCE = 'export_attendance'

VIEW_PAYROLL = 'view_payroll'
CREATE_PAYROLL = 'create_payroll'
EDIT_PAYROLL = 'edit_payroll'
PROCESS_PAYROLL = 'process_payroll'
EXPORT_PAYROLL = 'export_payroll'

VIEW_REPORTS = 'view_reports'
EXPORT_REPORTS = 'export_reports'

VIEW_USERS = 'view_users'
CREATE_USER = 'create_user'
EDIT_USER = 'edit_user'
DELETE_USER = 'delete_user'
MANAGE_ROLES = 'manage_roles'

VIEW_SETTINGS = 'view_settings'
EDIT_COMPANY_SETTINGS = 'edit_company_settings'
EDIT_SYSTEM_SETTINGS = 'edit_system_settings'

# Feature area -> permission codes (order matters for listings)
FEATURE_PERMISSIONS: Dict[str, List[str]] = {
    'dashboard': [VIEW_DASHBOARD, VIEW_ANALYTICS],
    'guards': [VIEW_GUARDS, CREATE_GUARD, EDIT_GUARD, DELETE_GUARD, EXPORT_GUARDS],
    'clients': [VIEW_CLIENTS, CREATE_CLIENT, EDIT_CLIENT, DELETE_CLIENT, EXPORT_CLIENTS],
    'deployments': [VIEW_DEPLOYMENTS, CREATE_DEPLOYMENT, EDIT_DEPLOYMENT, DELETE_DEPLOYMENT],
    'attendance': [VIEW_ATTENDANCE, MARK_ATTENDANCE, EDIT_ATTENDANCE, EXPORT_ATTENDANCE],
    'payroll': [VIEW_PAYROLL, CREATE_PAYROLL, EDIT_PAYROLL, PROCESS_PAYROLL, EXPORT_PAYROLL],
    'reports': [VIEW_REPORTS, EXPORT_REPORTS],
    'users': [VIEW_USERS, CREATE_USER, EDIT_USER, DELETE_USER, MANAGE_ROLES],
    'settings': [VIEW_SETTINGS, EDIT_COMPANY_SETTINGS, EDIT_SYSTEM_SETTINGS],
}


def build_all_permission_codes() -> List[str]:
    codes: List[str] = []
    for perms in FEATURE_PERMISSIONS.values():
        codes.extend(perms)
    return codes

ALL_PERMISSION_CODES = build_all_permission_codes()

ROLE_PERMISSIONS: Dict[str, List[str]] = {
    SUPER_ADMIN: list(ALL_PERMISSION_CODES),
    ADMIN: [
        VIEW_DASHBOARD, VIEW_ANALYTICS,
        VIEW_GUARDS, CREATE_GUARD, EDIT_GUARD, DELETE_GUARD, EXPORT_GUARDS,
        VIEW_CLIENTS, CREATE_CLIENT, EDIT_CLIENT, DELETE_CLIENT, EXPORT_CLIENTS,
        VIEW_DEPLOYMENTS, CREATE_DEPLOYMENT, EDIT_DEPLOYMENT, DELETE_DEPLOYMENT,
        VIEW_ATTENDANCE, MARK_ATTENDANCE, EDIT_ATTENDANCE, EXPORT_ATTENDANCE,
        VIEW_PAYROLL, CREATE_PAYROLL, EDIT_PAYROLL, PROCESS_PAYROLL, EXPORT_PAYROLL,
        VIEW_REPORTS, EXPORT_REPORTS,
        VIEW_USERS, CREATE_USER, EDIT_USER,
        VIEW_SETTINGS, EDIT_COMPANY_SETTINGS,
    ],
    # Manager: operations without deletes, payroll processing or user admin
    MANAGER: [
        VIEW_DASHBOARD, VIEW_ANALYTICS,
        VIEW_GUARDS, CREATE_GUARD, EDIT_GUARD, EXPORT_GUARDS,
        VIEW_CLIENTS, CREATE_CLIENT, EDIT_CLIENT, EXPORT_CLIENTS,
        VIEW_DEPLOYMENTS, CREATE_DEPLOYMENT, EDIT_DEPLOYMENT,
        VIEW_ATTENDANCE, MARK_ATTENDANCE, EDIT_ATTENDANCE, EXPORT_ATTENDANCE,
        VIEW_PAYROLL,
        VIEW_REPORTS, EXPORT_REPORTS,
        VIEW_SETTINGS,
    ],
    SUPERVISOR: [
        VIEW_DASHBOARD,
        VIEW_GUARDS,
        VIEW_CLIENTS,
        VIEW_DEPLOYMENTS, CREATE_DEPLOYMENT, EDIT_DEPLOYMENT,
        VIEW_ATTENDANCE, MARK_ATTENDANCE, EDIT_ATTENDANCE,
        VIEW_SETTINGS,
    ],
    STAFF: [
        VIEW_DASHBOARD,
        VIEW_GUARDS,
        VIEW_DEPLOYMENTS,
        VIEW_ATTENDANCE, MARK_ATTENDANCE,
        VIEW_SETTINGS,
    ],
    ACCOUNTANT: [
        VIEW_DASHBOARD,
        VIEW_GUARDS,
        VIEW_CLIENTS,
        VIEW_PAYROLL, CREATE_PAYROLL, EDIT_PAYROLL, PROCESS_PAYROLL, EXPORT_PAYROLL,
        VIEW_REPORTS, EXPORT_REPORTS,
        VIEW_SETTINGS,
    ],
}

ROLE_CONFIG: Dict[str, Dict[str, str]] = {
    SUPER_ADMIN: {'label': 'Super Admin', 'description': 'Full system access with all permissions'},
    ADMIN: {'label': 'Admin', 'description': 'Administrative access with user management'},
    MANAGER: {'label': 'Manager', 'description': 'Manage guards, clients, and operations'},
    SUPERVISOR: {'label': 'Supervisor', 'description': 'Supervise deployments and attendance'},
    STAFF: {'label': 'Staff', 'description': 'Basic access for daily operations'},
    ACCOUNTANT: {'label': 'Accountant', 'description': 'Financial and payroll management'},
}

# Higher level may manage strictly lower levels (super_admin manages everyone)
ROLE_HIERARCHY: Dict[str, int] = {
    SUPER_ADMIN: 6,
    ADMIN: 5,
    MANAGER: 4,
    SUPERVISOR: 3,
    ACCOUNTANT: 2,
    STAFF: 1,
}

# Sidebar entries: (key, label, path, permission)
NAV_ITEMS = [
    ('dashboard', 'Dashboard', '/dashboard', VIEW_DASHBOARD),
    ('guards', 'Guards', '/guards', VIEW_GUARDS),
    ('clients', 'Clients', '/clients', VIEW_CLIENTS),
    ('deployments', 'Deployments', '/deployments', VIEW_DEPLOYMENTS),
    ('attendance', 'Attendance', '/attendance', VIEW_ATTENDANCE),
    ('payroll', 'Payroll', '/payroll', VIEW_PAYROLL),
    ('reports', 'Reports', '/reports', VIEW_REPORTS),
    ('users', 'Users', '/users', VIEW_USERS),
    ('settings', 'Settings', '/settings', VIEW_SETTINGS),
]


def get_role_label(role) -> str:
    cfg = ROLE_CONFIG.get(role) if isinstance(role, str) else None
    return cfg['label'] if cfg else (role or '')
