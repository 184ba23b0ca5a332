import pytest
from guarddesk.errors import MalformedSessionState
from guarddesk.models.identity import Identity
from guarddesk.services.tokens import (
    issue_opaque_token, verify_opaque_token, issue_access_token, verify_access_token,
)

ALICE = Identity(id=3, name='Alice', email='a@x.com', role='manager')


def test_opaque_token():
    token = issue_opaque_token(ALICE, frozenset())
    assert token.startswith('session-3-')
    verify_opaque_token(token, ALICE)
    assert issue_opaque_token(ALICE, frozenset()) != token
    with pytest.raises(MalformedSessionState):
        verify_opaque_token(token, Identity(id=4, name='B', email='b@x.com', role='manager'))
    with pytest.raises(MalformedSessionState):
        verify_opaque_token('garbage', ALICE)


def test_access_token(app_instance):
    with app_instance.app_context():
        token = issue_access_token(ALICE, frozenset({'view_guards'}))
        verify_access_token(token, ALICE)
        with pytest.raises(MalformedSessionState):
            verify_access_token(token, Identity(id=3, name='Alice', email='a@x.com', role='super_admin'))
        with pytest.raises(MalformedSessionState):
            verify_access_token(token[:-4] + 'AAAA', ALICE)
        with pytest.raises(MalformedSessionState):
            verify_access_token('not-a-jwt', ALICE)


def test_expired_access_token(app_instance):
    from datetime import timedelta
    app_instance.config['JWT_ACCESS_TOKEN_EXPIRES'] = timedelta(seconds=-1)
    with app_instance.app_context():
        token = issue_access_token(ALICE, frozenset())
        with pytest.raises(MalformedSessionState):
            verify_access_token(token, ALICE)
