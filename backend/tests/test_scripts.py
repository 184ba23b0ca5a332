from argparse import Namespace
from guarddesk import get_db
from guarddesk.models.authz import User
from guarddesk.services.directory import SqlIdentityDirectory
from scripts import authctl, seed_users


def test_seed_users_is_idempotent(app_instance):
    with app_instance.app_context():
        session = get_db()
        assert seed_users.ensure_users(session) == (6, 0)
        session.commit()
        assert seed_users.ensure_users(session) == (0, 0)
        assert seed_users.ensure_users(session, reset_passwords=True) == (0, 6)
        session.commit()
        assert session.query(User).count() == 6
        ident = SqlIdentityDirectory(get_db).find_by_credentials('accountant@nehasecurity.com', 'accountant123')
        assert ident.role == 'accountant'


def test_seed_skips_unknown_roles(app_instance):
    entries = [{'email': 'x@x.com', 'name': 'X', 'password': 'pw', 'role': 'pilot'}]
    with app_instance.app_context():
        assert seed_users.ensure_users(get_db(), entries=entries) == (0, 0)


def test_authctl_session_persists_between_runs(app_instance, capsys):
    with app_instance.app_context():
        mgr = authctl.build_manager(app_instance, 'ops')
        assert authctl.cmd_whoami(mgr, Namespace()) == 1
        assert authctl.cmd_login(mgr, Namespace(email='manager@nehasecurity.com', password='manager123')) == 0
    with app_instance.app_context():
        mgr = authctl.build_manager(app_instance, 'ops')
        assert mgr.is_authenticated
        assert authctl.cmd_can(mgr, Namespace(permissions=['edit_guard'], all=False)) == 0
        assert authctl.cmd_can(mgr, Namespace(permissions=['edit_guard', 'delete_guard'], all=True)) == 1
        assert authctl.cmd_roles(mgr, Namespace()) == 0
        assert authctl.cmd_logout(mgr, Namespace()) == 0
    with app_instance.app_context():
        assert not authctl.build_manager(app_instance, 'ops').is_authenticated
    out = capsys.readouterr().out
    assert 'Signed in as Rahul Manager (Manager)' in out
    assert '[DENY] manager' in out


def test_authctl_bad_password(app_instance, capsys):
    with app_instance.app_context():
        mgr = authctl.build_manager(app_instance, 'ops')
        assert authctl.cmd_login(mgr, Namespace(email='manager@nehasecurity.com', password='x')) == 1
    assert '[FAIL] Invalid email or password' in capsys.readouterr().out
