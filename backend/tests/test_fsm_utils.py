from guarddesk.errors import InvalidTransition
from guarddesk.utils.fsm import TransitionValidator
import pytest


def test_transition_validator_allows_valid():
    fsm = TransitionValidator({'A': {'B'}, 'B': set()})
    assert fsm.assert_can_transition('A', 'B') is True


def test_transition_validator_blocks_invalid():
    fsm = TransitionValidator({'A': {'B'}, 'B': set()}, field_name='door')
    assert not fsm.can_transition('B', 'A')
    assert not fsm.can_transition('Z', 'A')
    with pytest.raises(InvalidTransition) as exc:
        fsm.assert_can_transition('A', 'C')
    assert str(exc.value) == 'Invalid door transition A -> C'
