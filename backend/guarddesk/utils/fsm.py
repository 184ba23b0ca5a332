"""Small finite state machine helper for enforcing allowed transitions.

The graph maps a current state to the set of accepted targets. Targets may be states or, as
the session reducer uses it, event names accepted while in that state:

    SESSION_FSM = TransitionValidator({
        'loading': {'session_restored', 'restore_failed'},
        'authenticated': {'logged_out'},
    }, field_name='session')
    SESSION_FSM.assert_can_transition('loading', 'session_restored')

Raises InvalidTransition if the target is not accepted.
"""
from __future__ import annotations
from typing import Dict, Set
from guarddesk.errors import InvalidTransition

class TransitionValidator:
    def __init__(self, graph: Dict[str, Set[str]], field_name: str = 'status'):
        self.graph = graph
        self.field_name = field_name

    def can_transition(self, current: str, target: str) -> bool:
        return target in self.graph.get(current, set())

    def assert_can_transition(self, current: str, target: str):
        if not self.can_transition(current, target):
            raise InvalidTransition(f"Invalid {self.field_name} transition {current} -> {target}")
        return True

__all__ = ['TransitionValidator']
