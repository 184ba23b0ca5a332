#!/usr/bin/env python
"""Idempotent seed script for the SQL identity directory (IDENTITY_DIRECTORY=sql).

Copies the built-in demo accounts into the users table with werkzeug password hashes.
Existing emails are left alone unless --reset-passwords is given.

Usage:
    python backend/scripts/seed_users.py                    # seed normally
    python backend/scripts/seed_users.py --show-users       # print users after ensuring seed
    python backend/scripts/seed_users.py --dry-run          # run logic then rollback (no DB changes)
    python backend/scripts/seed_users.py --reset-passwords  # re-hash passwords of existing demo users
"""
from __future__ import annotations
import os, sys, argparse, textwrap
from sqlalchemy import select

# Allow running from repo root or from backend/
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from guarddesk import create_app, get_db  # type: ignore
from guarddesk.constants.permissions import ROLES, get_role_label
from guarddesk.data.users import USERS
from guarddesk.models.authz import User

USER_FIELDS = ('name', 'phone', 'role', 'status', 'avatar', 'created_at', 'last_login')


def ensure_users(session, entries=USERS, reset_passwords: bool = False):
    """Return (created, updated) counts."""
    existing = {u.email: u for u in session.execute(select(User)).scalars().all()}
    created = updated = 0
    for entry in entries:
        if entry['role'] not in ROLES:
            print(f"[WARN] Skipping {entry['email']}: unknown role {entry['role']!r}")
            continue
        user = existing.get(entry['email'])
        if user is None:
            user = User(email=entry['email'], **{k: entry.get(k) for k in USER_FIELDS})
            user.set_password(entry['password'])
            session.add(user)
            created += 1
        elif reset_passwords:
            user.set_password(entry['password'])
            updated += 1
    session.flush()
    return created, updated


def print_user_summary(session):
    rows = session.execute(select(User).order_by(User.id.asc())).scalars().all()
    if not rows:
        print('[INFO] No users present.')
        return
    email_w = max(len(u.email) for u in rows)
    print(f"{'Email'.ljust(email_w)} | {'Role'.ljust(12)} | Status")
    print('-' * (email_w + 30))
    for u in rows:
        print(f"{u.email.ljust(email_w)} | {get_role_label(u.role).ljust(12)} | {u.status}")


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description='Seed dashboard users into the SQL identity directory',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""Examples:\n  seed normally: seed_users.py\n  dry run: seed_users.py --dry-run\n  show users: seed_users.py --show-users\n"""),
    )
    p.add_argument('--show-users', action='store_true', help='Print users after seeding')
    p.add_argument('--dry-run', action='store_true', help='Rollback after operations (no commit)')
    p.add_argument('--reset-passwords', action='store_true', help='Re-hash demo passwords for existing users')
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    app = create_app()
    with app.app_context():
        session = get_db()
        created, updated = ensure_users(session, reset_passwords=args.reset_passwords)
        if args.dry_run:
            session.rollback()
            print(f"[DRY-RUN] (rolled back) Users would create: {created}, update: {updated}")
        else:
            session.commit()
            print(f"[DONE] Users created: {created}, updated: {updated}")
        if args.show_users:
            print_user_summary(session)
    return 0


if __name__ == '__main__':
    sys.exit(main())
