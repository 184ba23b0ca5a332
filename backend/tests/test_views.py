from urllib.parse import urlparse, parse_qs
import pytest
from guarddesk.routes.dashboard import VIEW_ACTIONS


def test_protected_view_redirects_to_login_with_location(client):
    resp = client.get('/payroll?month=3')
    assert resp.status_code == 302
    loc = urlparse(resp.headers['Location'])
    assert loc.path == '/login'
    assert parse_qs(loc.query)['next'] == ['/payroll?month=3']


def test_index_redirects(client, login):
    assert urlparse(client.get('/').headers['Location']).path == '/login'
    login('staff@nehasecurity.com')
    assert client.get('/').headers['Location'].endswith('/dashboard')


@pytest.mark.parametrize('email,path,expected', [
    ('staff@nehasecurity.com', '/payroll', 302),
    ('staff@nehasecurity.com', '/attendance', 200),
    ('accountant@nehasecurity.com', '/payroll', 200),
    ('accountant@nehasecurity.com', '/deployments', 302),
    ('manager@nehasecurity.com', '/users', 302),
    ('admin@nehasecurity.com', '/users', 200),
    ('supervisor@nehasecurity.com', '/reports', 302),
])
def test_view_access_by_role(client, login, email, path, expected):
    login(email)
    resp = client.get(path)
    assert resp.status_code == expected
    if expected == 302:
        assert resp.headers['Location'].endswith('/unauthorized')


def test_view_actions_are_gated(client, login):
    login('staff@nehasecurity.com')
    body = client.get('/attendance').get_json()
    assert body['view'] == 'attendance'
    assert body['role_label'] == 'Staff'
    assert body['actions'] == ['mark']

    client.post('/auth/logout')
    login('manager@nehasecurity.com')
    assert client.get('/guards').get_json()['actions'] == ['create', 'edit', 'export']


def test_super_admin_sees_every_action(client, login):
    login('superadmin@nehasecurity.com')
    for view, actions in VIEW_ACTIONS.items():
        body = client.get(f'/{view}').get_json()
        assert body['actions'] == [key for key, _ in actions]


def test_navigation_filtered_by_role(client, login):
    login('staff@nehasecurity.com')
    keys = [i['key'] for i in client.get('/navigation').get_json()['items']]
    assert keys == ['dashboard', 'guards', 'deployments', 'attendance', 'settings']


def test_dashboard_widgets_by_role(client, login):
    login('accountant@nehasecurity.com')
    assert client.get('/dashboard').get_json()['widgets'] == ['stats', 'recent_activities', 'revenue_chart']
    login('superadmin@nehasecurity.com')
    assert client.get('/dashboard').get_json()['widgets'] == [
        'stats', 'recent_activities', 'revenue_chart', 'system_health',
    ]
    login('staff@nehasecurity.com')
    assert client.get('/dashboard').get_json()['widgets'] == ['stats', 'recent_activities']


@pytest.mark.parametrize('email,tabs', [
    ('staff@nehasecurity.com', ['profile']),
    ('admin@nehasecurity.com', ['profile', 'company']),
    ('superadmin@nehasecurity.com', ['profile', 'company', 'system', 'security']),
])
def test_settings_tabs(client, login, email, tabs):
    login(email)
    assert client.get('/settings').get_json()['tabs'] == tabs


def test_pending_decision_response(app_instance):
    from guarddesk.decorators.auth import decision_response
    from guarddesk.services.guard import GuardDecision, PENDING
    with app_instance.test_request_context('/dashboard'):
        assert decision_response(GuardDecision(PENDING)) == ({'status': 'pending'}, 202)


def test_custom_grants_and_urls():
    from conftest import build_app
    from guarddesk.services.registry import DEFAULT_GRANTS
    app = build_app(
        grants=DEFAULT_GRANTS.override(staff=['view_dashboard', 'view_payroll']),
        config={'UNAUTHORIZED_URL': '/denied'},
    )
    client = app.test_client()
    client.post('/auth/login', json={'email': 'staff@nehasecurity.com', 'password': 'staff123'})
    assert client.get('/payroll').status_code == 200
    assert client.get('/attendance').headers['Location'].endswith('/denied')
