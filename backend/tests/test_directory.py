import pytest
from sqlalchemy.exc import SQLAlchemyError
from guarddesk import get_db
from guarddesk.data.users import USERS
from guarddesk.errors import DirectoryUnavailable
from guarddesk.models.authz import User
from guarddesk.services.directory import StaticIdentityDirectory, SqlIdentityDirectory


def test_static_directory_lookup():
    directory = StaticIdentityDirectory()
    ident = directory.find_by_credentials('manager@nehasecurity.com', 'manager123')
    assert ident.role == 'manager'
    assert 'password' not in ident.to_dict()
    assert directory.find_by_credentials('manager@nehasecurity.com', 'admin123') is None
    assert directory.find_by_credentials(' manager@nehasecurity.com', 'manager123') is None
    assert directory.find_by_credentials(None, 'x') is None
    assert len(directory.list_identities()) == len(USERS)


def test_static_directory_skips_inactive():
    directory = StaticIdentityDirectory([
        {'id': 1, 'name': 'Old', 'email': 'old@x.com', 'password': 'pw', 'role': 'staff', 'status': 'inactive'},
    ])
    assert directory.find_by_credentials('old@x.com', 'pw') is None


def _seed(session, **kw):
    u = User(name=kw.get('name', 'Sql User'), email=kw['email'], role=kw.get('role', 'supervisor'),
             status=kw.get('status', 'active'), password_hash='')
    u.set_password(kw.get('password', 'pw'))
    session.add(u)
    session.commit()
    return u


def test_sql_directory_lookup(app_instance):
    with app_instance.app_context():
        _seed(get_db(), email='sql@x.com')
        _seed(get_db(), email='off@x.com', status='inactive')
        directory = SqlIdentityDirectory(get_db)
        ident = directory.find_by_credentials('sql@x.com', 'pw')
        assert ident.email == 'sql@x.com' and ident.role == 'supervisor'
        assert 'password_hash' not in ident.to_dict()
        assert directory.find_by_credentials('sql@x.com', 'nope') is None
        assert directory.find_by_credentials('off@x.com', 'pw') is None
        assert [i.email for i in directory.list_identities()] == ['sql@x.com', 'off@x.com']


def test_sql_directory_fault():
    class Boom:
        def execute(self, *a, **k):
            raise SQLAlchemyError('down')
    directory = SqlIdentityDirectory(lambda: Boom())
    with pytest.raises(DirectoryUnavailable):
        directory.find_by_credentials('a@x.com', 'pw')
    with pytest.raises(DirectoryUnavailable):
        directory.list_identities()
