import os, sys, pytest
# Ensure backend directory is on path so 'guarddesk' and 'scripts' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from guarddesk import create_app

TEST_CONFIG = {
    'DATABASE_URL': 'sqlite+pysqlite:///:memory:',
    'SECRET_KEY': 'test-secret-key',
    'JWT_SECRET_KEY': 'test-jwt-secret-key-with-at-least-32-bytes',
    'LOGIN_DELAY_SECONDS': 0,
    'IDENTITY_DIRECTORY': 'static',
}

PASSWORDS = {
    'superadmin@nehasecurity.com': 'super123',
    'admin@nehasecurity.com': 'admin123',
    'manager@nehasecurity.com': 'manager123',
    'supervisor@nehasecurity.com': 'supervisor123',
    'staff@nehasecurity.com': 'staff123',
    'accountant@nehasecurity.com': 'accountant123',
}


def build_app(**kwargs):
    config = dict(TEST_CONFIG)
    config.update(kwargs.pop('config', {}))
    # create_app builds the schema on the fresh engine
    return create_app(config, **kwargs)


@pytest.fixture()
def app_instance():
    # Fresh in-memory database per test
    yield build_app()


@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()


@pytest.fixture()
def login(client):
    def _login(email, password=None, **extra):
        body = {'email': email, 'password': password if password is not None else PASSWORDS[email]}
        body.update(extra)
        return client.post('/auth/login', json=body)
    return _login
