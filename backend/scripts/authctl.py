#!/usr/bin/env python
"""Command line session client for the dashboard's access layer.

The session lives in the session_entries table, so it survives between invocations.

Usage:
    python backend/scripts/authctl.py login admin@nehasecurity.com          # prompts for password
    python backend/scripts/authctl.py login admin@nehasecurity.com -p admin123
    python backend/scripts/authctl.py whoami
    python backend/scripts/authctl.py can view_payroll process_payroll --all
    python backend/scripts/authctl.py roles
    python backend/scripts/authctl.py logout

Exit codes: 0 ok, 1 denied / not signed in / bad credentials.
"""
from __future__ import annotations
import os, sys, argparse, getpass, logging, textwrap

# Allow running from repo root or from backend/
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from guarddesk import create_app, get_db  # type: ignore
from guarddesk.constants.permissions import ROLE_CONFIG, get_role_label
from guarddesk.services.auth import AuthSessionManager
from guarddesk.services.notifications import LoggingNotificationSink
from guarddesk.services.storage import SqlSessionStore
from guarddesk.services.tokens import issue_access_token, verify_access_token

logger = logging.getLogger('authctl')


def build_manager(app, namespace: str) -> AuthSessionManager:
    comps = app.extensions['guarddesk']
    manager = AuthSessionManager(
        directory=comps['directory'],
        store=SqlSessionStore(get_db(), namespace=namespace),
        notifier=LoggingNotificationSink(),
        grants=comps['grants'],
        token_issuer=issue_access_token,
        token_verifier=verify_access_token,
        login_delay=app.config['LOGIN_DELAY_SECONDS'],
    )
    manager.restore()
    return manager


def cmd_login(manager, args) -> int:
    password = args.password if args.password is not None else getpass.getpass('Password: ')
    result = manager.login(args.email, password)
    if not result.success:
        print(f"[FAIL] {result.error}")
        return 1
    print(f"[OK] Signed in as {result.user.name} ({get_role_label(result.user.role)})")
    return 0


def cmd_logout(manager, args) -> int:
    manager.logout()
    print('[OK] Signed out')
    return 0


def cmd_whoami(manager, args) -> int:
    if not manager.is_authenticated:
        print('[INFO] Not signed in')
        return 1
    user = manager.user
    print(f"{user.name} <{user.email}>")
    print(f"role: {user.role} ({get_role_label(user.role)})")
    print(f"permissions ({len(manager.permissions)}): {', '.join(sorted(manager.permissions))}")
    return 0


def cmd_can(manager, args) -> int:
    if not manager.is_authenticated:
        print('[INFO] Not signed in')
        return 1
    if args.all:
        ok = manager.check_all_permissions(args.permissions)
    else:
        ok = manager.check_any_permission(args.permissions)
    mode = 'all of' if args.all else 'any of'
    print(f"{'[ALLOW]' if ok else '[DENY]'} {manager.role}: {mode} {', '.join(args.permissions)}")
    return 0 if ok else 1


def cmd_roles(manager, args) -> int:
    grants = manager.grants
    name_w = max(len(r) for r in grants)
    print(f"{'Role'.ljust(name_w)} | Count | Label")
    print('-' * (name_w + 30))
    for role in grants:
        label = ROLE_CONFIG.get(role, {}).get('label', role)
        print(f"{role.ljust(name_w)} | {str(len(grants.permissions_for(role))).rjust(5)} | {label}")
    return 0


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description='Sign in, inspect and check permissions from the command line',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""Examples:\n  authctl.py login staff@nehasecurity.com -p staff123\n  authctl.py can mark_attendance\n"""),
    )
    p.add_argument('--profile', default=os.getenv('AUTHCTL_PROFILE', 'default'),
                   help='Session namespace, one signed-in user per profile')
    p.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    sub = p.add_subparsers(dest='command', required=True)

    s = sub.add_parser('login', help='Sign in with email and password')
    s.add_argument('email')
    s.add_argument('-p', '--password', help='Password (prompted when omitted)')
    s.set_defaults(func=cmd_login)

    s = sub.add_parser('logout', help='Discard the stored session')
    s.set_defaults(func=cmd_logout)

    s = sub.add_parser('whoami', help='Show the signed-in user and permissions')
    s.set_defaults(func=cmd_whoami)

    s = sub.add_parser('can', help='Check permissions for the signed-in user')
    s.add_argument('permissions', nargs='+')
    s.add_argument('--all', action='store_true', help='Require every permission (default: any)')
    s.set_defaults(func=cmd_can)

    s = sub.add_parser('roles', help='Print the role -> permission counts')
    s.set_defaults(func=cmd_roles)
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='[%(levelname)s] %(message)s')
    app = create_app()
    with app.app_context():
        manager = build_manager(app, args.profile)
        return args.func(manager, args)


if __name__ == '__main__':
    sys.exit(main())
