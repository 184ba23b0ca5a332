from flask import session
from guarddesk import get_db
from guarddesk.config.auth import TOKEN_KEY, USER_KEY
from guarddesk.models.authz import SessionEntry
from guarddesk.services.storage import MemorySessionStore, FlaskSessionStore, SqlSessionStore


def test_memory_store():
    store = MemorySessionStore({TOKEN_KEY: 't'})
    store.set(USER_KEY, '{}')
    assert store.get(TOKEN_KEY) == 't' and store.get(USER_KEY) == '{}'
    store.clear()
    assert store.get(TOKEN_KEY) is None


def test_flask_store_only_clears_own_keys(app_instance):
    with app_instance.test_request_context('/'):
        session['_flashes'] = [('success', 'hi')]
        store = FlaskSessionStore()
        store.set(TOKEN_KEY, 't')
        assert session['auth.token'] == 't'
        store.clear()
        assert store.get(TOKEN_KEY) is None
        assert session['_flashes'] == [('success', 'hi')]


def test_sql_store_namespaces(app_instance):
    with app_instance.app_context():
        a = SqlSessionStore(get_db(), namespace='a')
        b = SqlSessionStore(get_db(), namespace='b')
        a.set(TOKEN_KEY, 'one')
        a.set(TOKEN_KEY, 'two')
        b.set(TOKEN_KEY, 'other')
        assert a.get(TOKEN_KEY) == 'two'
        assert get_db().query(SessionEntry).filter_by(namespace='a').count() == 1
        a.clear()
        assert a.get(TOKEN_KEY) is None
        assert b.get(TOKEN_KEY) == 'other'


def test_sql_store_survives_new_session(app_instance):
    with app_instance.app_context():
        SqlSessionStore(get_db(), namespace='cli').set(USER_KEY, '{"id": 1}')
    with app_instance.app_context():
        assert SqlSessionStore(get_db(), namespace='cli').get(USER_KEY) == '{"id": 1}'
