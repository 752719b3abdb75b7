# propstate/core/machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Iterable, List, Optional, Union

from propstate.core.errors import (
    ConfigurationError,
    InheritanceCycleError,
    RecursiveTransitionError,
    StateNotFoundError,
)
from propstate.core.merge import deep_merge, reset
from propstate.core.registry import StateDeclaration, StateRegistry, declare_state, find_overlay
from propstate.core.store import TransitionStore
from propstate.core.types import (
    INITIAL,
    EnterCallback,
    LeaveCallback,
    PartialProps,
    Props,
    TransitionFailure,
    Unsubscribe,
)
from propstate.core.validations import Validator

logger = logging.getLogger(__name__)


class StateMachine:
    """
    Base class for declarative state machines.

    Subclasses declare their states as class attributes with ``declare_state``
    (also available as ``StateMachine.extend``). Each state names the state it
    inherits properties from and the states that may follow it. Moving to a
    state rebuilds ``props`` from the initial values plus the overlays of the
    state and all of its ancestors, most specific last.
    """

    INITIAL = INITIAL
    extend = staticmethod(declare_state)

    def __init__(
        self,
        initial_transitions: Union[str, Iterable[str]],
        props: Optional[Mapping] = None,
        logging: bool = False,
    ):
        """
        :param initial_transitions: States the machine may move to from ``initial``.
        :param props: Initial property values. The same dict is kept as ``self.props``.
        :param logging: Log rejected transitions through the module logger.
        :raises ConfigurationError: If there are no initial transitions or props is not a mapping.
        """
        if isinstance(initial_transitions, str):
            initial_transitions = [initial_transitions]
        self._initial_transitions: List[str] = list(initial_transitions or ())
        if not self._initial_transitions:
            raise ConfigurationError("initial_transitions must contain at least one valid transition string")

        if props is None:
            props = {}
        if not isinstance(props, Mapping):
            raise ConfigurationError(f"props must be a mapping, got {type(props).__name__}")
        if not isinstance(props, MutableMapping):
            props = dict(props)

        self._logging = bool(logging)
        self.props: Props = props
        self.__store.remember_initial_state(props)

    @property
    def __store(self) -> TransitionStore:
        """Per-instance store, created on first access. Private to this class."""
        try:
            return self.__transition_store
        except AttributeError:
            self.__transition_store = TransitionStore()
            return self.__transition_store

    def _log_error(self, message: str) -> None:
        if self._logging:
            logger.error(message)

    @staticmethod
    def _next_state_restricted(current_state: str, state_name: str) -> str:
        return f"Navigate to {state_name} restricted by 'to' argument of state {current_state}"

    def _get_declaration(self, state_name: str) -> Optional[StateDeclaration]:
        return StateRegistry.get_state(type(self), state_name)

    def _require_declaration(self, state_name: str) -> StateDeclaration:
        declaration = self._get_declaration(state_name)
        if declaration is None:
            raise StateNotFoundError(f"State '{state_name}' is not declared on {type(self).__name__}")
        return declaration

    def transit_to(self, target_state: str, *args: Any) -> Optional[TransitionFailure]:
        """
        Move the machine to ``target_state``.

        :param target_state: Name of the state to move to.
        :param args: Extra arguments passed to the target's enter callbacks.
        :return: None on success, otherwise the reason the request was rejected.
        :raises RecursiveTransitionError: If called from an enter or leave callback.
        :raises StateNotFoundError: If the target's parent chain is broken.
        """
        store = self.__store
        if store.transitioning:
            raise RecursiveTransitionError("Calling transit_to from an on_enter/on_leave callback is not supported")

        store.transitioning = True
        try:
            return self._transit_to(target_state, *args)
        finally:
            store.transitioning = False

    def _transit_to(self, target_state: str, *args: Any) -> Optional[TransitionFailure]:
        store = self.__store

        # Resolve the target's overlay
        state_to_apply = self._resolve_overlay(target_state)
        if state_to_apply is None:
            self._log_error(f"No state '{target_state}' for navigation registered")
            return TransitionFailure.STATE_NOT_REGISTERED

        # Check the transition is permitted
        if not self.can(target_state):
            self._log_error(self._next_state_restricted(store.current_state, target_state))
            return TransitionFailure.INVALID_TRANSITION

        state_chain = self._build_state_chain(target_state, state_to_apply)

        store.call_leave_callbacks(target_state)

        reset(self.props, store.initial_state)
        for overlay in state_chain:
            deep_merge(self.props, overlay)

        prev_state = store.current_state
        store.current_state = target_state
        if self._logging:
            logger.debug("Transitioned from %s to %s", prev_state, target_state)

        store.call_enter_callbacks(prev_state, target_state, args)
        return None

    def _resolve_overlay(self, state_name: str) -> Optional[PartialProps]:
        if state_name == INITIAL:
            return self.__store.initial_state
        if self._get_declaration(state_name) is None:
            return None
        return find_overlay(type(self), state_name)

    def _build_state_chain(self, target_state: str, state_to_apply: PartialProps) -> List[PartialProps]:
        """
        Collect overlays from the target up to ``initial``, ordered base first.

        :raises StateNotFoundError: If an ancestor is not declared.
        :raises InheritanceCycleError: If the chain never reaches ``initial``.
        """
        state_chain = [state_to_apply]
        if target_state == INITIAL:
            return state_chain

        visited = {target_state}
        parent_state = self._require_declaration(target_state).parent_state
        while parent_state != INITIAL:
            if parent_state in visited:
                raise InheritanceCycleError(f"State '{target_state}' has a cyclic parent chain through '{parent_state}'")
            declaration = self._require_declaration(parent_state)
            overlay = find_overlay(type(self), parent_state)
            if overlay is None:
                raise StateNotFoundError(f"State '{parent_state}' has no overlay on {type(self).__name__}")
            state_chain.insert(0, overlay)
            visited.add(parent_state)
            parent_state = declaration.parent_state
        return state_chain

    def on_enter(self, state_name: str, callback: EnterCallback) -> Unsubscribe:
        """
        Call ``callback(prev_state, *args)`` whenever ``state_name`` is entered.

        :return: A function removing exactly this registration.
        """
        return self.__store.register_enter_callback(state_name, callback)

    def on_leave(self, state_name: str, callback: LeaveCallback) -> Unsubscribe:
        """
        Call ``callback(target_state)`` whenever ``state_name`` is left.

        :return: A function removing exactly this registration.
        """
        return self.__store.register_leave_callback(state_name, callback)

    @property
    def current_state(self) -> str:
        """Name of the active state."""
        return self.__store.current_state

    def is_(self, state_name: str) -> bool:
        return self.current_state == state_name

    def can(self, state_name: str) -> bool:
        """Return True if ``state_name`` is permitted from the current state."""
        if self.__store.is_initial_state:
            return state_name in self._initial_transitions
        return self._require_declaration(self.current_state).permits(state_name)

    def transitions(self) -> List[str]:
        """Return the states permitted from the current state, as a new list."""
        if self.__store.is_initial_state:
            return list(self._initial_transitions)
        return list(self._require_declaration(self.current_state).to)

    def validate(self) -> List[str]:
        """Check this machine's declared hierarchy. Returns a list of problems."""
        return Validator().validate_machine_type(type(self), self._initial_transitions)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(current_state={self.current_state!r})"
