from guarddesk.constants.permissions import ROLES, ROLE_PERMISSIONS


def test_roles_requires_manage_roles(client, login):
    login('admin@nehasecurity.com')
    resp = client.get('/iam/roles')
    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/unauthorized')


def test_roles_matrix(client, login):
    login('superadmin@nehasecurity.com')
    body = client.get('/iam/roles').get_json()
    assert [r['name'] for r in body['data']] == ROLES
    by_name = {r['name']: r for r in body['data']}
    assert by_name['accountant']['permissions'] == sorted(ROLE_PERMISSIONS['accountant'])
    assert by_name['super_admin']['level'] == 6
    assert by_name['staff']['label'] == 'Staff'
    assert 'super_admin' in body['assignable_roles']


def test_users_listing(client, login):
    login('admin@nehasecurity.com')
    body = client.get('/iam/users').get_json()
    assert body['pagination']['total'] == 6
    assert all('password' not in u for u in body['data'])
    manageable = {u['role']: u['manageable'] for u in body['data']}
    assert manageable['super_admin'] is False
    assert manageable['admin'] is False
    assert manageable['manager'] is True


def test_users_filter_and_pagination(client, login):
    login('admin@nehasecurity.com')
    body = client.get('/iam/users?role=staff').get_json()
    assert [u['email'] for u in body['data']] == ['staff@nehasecurity.com']
    page = client.get('/iam/users?limit=2&offset=4').get_json()
    assert page['pagination'] == {'total': 6, 'limit': 2, 'offset': 4, 'returned': 2}
    assert client.get('/iam/users?limit=abc').status_code == 400


def test_users_hidden_from_staff(client, login):
    login('staff@nehasecurity.com')
    assert client.get('/iam/users').status_code == 302


def test_audit_logs_by_role(client, login):
    login('manager@nehasecurity.com')
    assert client.get('/iam/audit/logs').headers['Location'].endswith('/unauthorized')
    login('admin@nehasecurity.com')
    body = client.get('/iam/audit/logs?action=AUTH.LOGIN').get_json()
    assert body['pagination']['total'] == 2
    assert body['data'][0]['actor_role'] == 'admin'
    only_admin = client.get('/iam/audit/logs?actor_user_id=2').get_json()
    assert {r['actor_user_id'] for r in only_admin['data']} == {2}
    assert client.get('/iam/audit/logs?actor_user_id=abc').status_code == 400
