"""
Per-instance transition store.

Holds everything a machine instance needs between transitions: the current
state name, the snapshot of the initial properties and the enter/leave
callbacks. The machine keeps its store in a private attribute; subclasses
never see it through the public API.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from propstate.core.merge import deep_clone
from propstate.core.types import INITIAL, EnterCallback, LeaveCallback, Props, Unsubscribe


class _CallbackRegistry:
    """
    Internal ordered lists of callbacks keyed by state name. Removal is by
    registration, not by callable, so the same function registered twice can
    be dropped once without touching the other copy.
    """

    def __init__(self) -> None:
        self._callbacks: Dict[str, List[List[Any]]] = {}

    def register(self, state_name: str, callback: Any) -> Unsubscribe:
        # Each registration gets its own cell so identity comparison is exact.
        entry = [callback]
        entries = self._callbacks.setdefault(state_name, [])
        entries.append(entry)

        def unsubscribe() -> None:
            for index, candidate in enumerate(entries):
                if candidate is entry:
                    del entries[index]
                    return

        return unsubscribe

    def get(self, state_name: str) -> List[Any]:
        """Return a snapshot of the callbacks for ``state_name`` in registration order."""
        return [entry[0] for entry in self._callbacks.get(state_name, ())]


class TransitionStore:
    """
    Live transition data for one machine instance.
    """

    def __init__(self) -> None:
        self.current_state: str = INITIAL
        self.transitioning: bool = False
        self._initial_state: Optional[Props] = None
        self._enter_callbacks = _CallbackRegistry()
        self._leave_callbacks = _CallbackRegistry()

    def remember_initial_state(self, props: Mapping[str, Any]) -> None:
        """Store a deep copy of ``props`` as the base for every overlay."""
        self._initial_state = deep_clone(dict(props))

    @property
    def initial_state(self) -> Props:
        """The snapshot taken at construction. Never mutated."""
        if self._initial_state is None:
            raise RuntimeError("Initial state has not been remembered yet")
        return self._initial_state

    @property
    def is_initial_state(self) -> bool:
        return self.current_state == INITIAL

    def register_enter_callback(self, state_name: str, callback: EnterCallback) -> Unsubscribe:
        """Register ``callback(prev_state, *args)`` for entering ``state_name``."""
        return self._enter_callbacks.register(state_name, callback)

    def register_leave_callback(self, state_name: str, callback: LeaveCallback) -> Unsubscribe:
        """Register ``callback(target_state)`` for leaving ``state_name``."""
        return self._leave_callbacks.register(state_name, callback)

    def call_enter_callbacks(self, prev_state: str, state_name: str, args: Sequence[Any] = ()) -> None:
        for callback in self._enter_callbacks.get(state_name):
            callback(prev_state, *args)

    def call_leave_callbacks(self, target_state: str) -> None:
        for callback in self._leave_callbacks.get(self.current_state):
            callback(target_state)
