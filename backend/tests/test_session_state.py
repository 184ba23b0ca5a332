import pytest
from guarddesk.constants.permissions import ADMIN, STAFF, VIEW_DASHBOARD, VIEW_GUARDS
from guarddesk.errors import InvalidTransition
from guarddesk.models.identity import Identity
from guarddesk.services.registry import DEFAULT_GRANTS
from guarddesk.services.session_state import (
    Loading, Unauthenticated, Authenticated, SessionReducer, transition, role_of,
    LoginStarted, LoginSucceeded, LoginFailed, SessionRestored, RestoreFailed, LoggedOut, ProfileUpdated,
)

ADMIN_ID = Identity(id=1, name='Admin', email='admin@x.com', role=ADMIN)


def test_restore_paths_from_loading():
    restored = transition(Loading(), SessionRestored(identity=ADMIN_ID, token='t'))
    assert isinstance(restored, Authenticated)
    assert restored.permissions == DEFAULT_GRANTS.permissions_for(ADMIN)
    assert transition(Loading(), RestoreFailed()) == Unauthenticated()


def test_login_cycle():
    state = transition(Unauthenticated(), LoginStarted())
    assert state.is_loading
    state = transition(state, LoginSucceeded(identity=ADMIN_ID, token='t'))
    assert state.is_authenticated and role_of(state) == ADMIN
    state = transition(state, LoggedOut())
    assert state == Unauthenticated()
    assert role_of(state) is None


def test_login_failure_keeps_error():
    state = transition(Loading(), LoginFailed(error='Invalid email or password'))
    assert isinstance(state, Unauthenticated)
    assert state.error == 'Invalid email or password'
    assert state.permissions == frozenset()


def test_reducer_derives_permissions_from_injected_grants():
    reducer = SessionReducer(DEFAULT_GRANTS.override(admin=[VIEW_DASHBOARD, VIEW_GUARDS]))
    state = reducer(Loading(), LoginSucceeded(identity=ADMIN_ID, token='t'))
    assert state.permissions == {VIEW_DASHBOARD, VIEW_GUARDS}


def test_profile_update_keeps_role_and_permissions():
    state = transition(Loading(), SessionRestored(identity=ADMIN_ID, token='t'))
    updated = transition(state, ProfileUpdated(patch={'name': 'Boss', 'role': STAFF}))
    assert updated.identity.name == 'Boss'
    assert updated.identity.role == ADMIN
    assert updated.permissions == state.permissions
    assert updated.token == 't'
    # previous state value untouched
    assert state.identity.name == 'Admin'


@pytest.mark.parametrize('state,event', [
    (Unauthenticated(), ProfileUpdated(patch={'name': 'x'})),
    (Unauthenticated(), SessionRestored(identity=ADMIN_ID, token='t')),
    (Loading(), ProfileUpdated(patch={})),
    (Authenticated(identity=ADMIN_ID, token='t'), SessionRestored(identity=ADMIN_ID, token='t')),
    (Authenticated(identity=ADMIN_ID, token='t'), LoginSucceeded(identity=ADMIN_ID, token='t')),
])
def test_rejected_events_raise(state, event):
    with pytest.raises(InvalidTransition):
        transition(state, event)
