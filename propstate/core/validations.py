# propstate/core/validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Dict, Iterable, List

from propstate.core.registry import StateDeclaration, StateRegistry, find_overlay
from propstate.core.types import INITIAL


class Validator:
    """
    Checks the state declarations of a machine type for consistency. Never run
    implicitly: a broken hierarchy otherwise only surfaces when a transition
    walks through it.
    """

    def __init__(self) -> None:
        self._rules_engine = _ValidationRulesEngine()

    def validate_machine_type(self, machine_type: type, initial_transitions: Iterable[str] = ()) -> List[str]:
        """
        Check the declarations visible to ``machine_type``.

        :param machine_type: The StateMachine subclass to inspect.
        :param initial_transitions: States the machine may leave ``initial`` for.
        :return: Human-readable problems; empty if the hierarchy is sound.
        """
        states = StateRegistry.get_states(machine_type)
        return self._rules_engine.validate(machine_type, states, list(initial_transitions))


class _ValidationRulesEngine:
    """
    Internal engine applying each rule in turn and collecting their messages.
    """

    def __init__(self) -> None:
        self._default_rules = _DefaultValidationRules

    def validate(
        self, machine_type: type, states: Dict[str, StateDeclaration], initial_transitions: List[str]
    ) -> List[str]:
        errors: List[str] = []
        errors.extend(self._default_rules.validate_overlays(machine_type, states))
        errors.extend(self._default_rules.validate_parents(states))
        errors.extend(self._default_rules.validate_targets(states, initial_transitions))
        return errors


class _DefaultValidationRules:
    """
    Built-in rules covering the ways a declared hierarchy can break.
    """

    @staticmethod
    def validate_overlays(machine_type: type, states: Dict[str, StateDeclaration]) -> List[str]:
        """
        Every declared state needs an overlay attribute of the same name.
        """
        return [
            f"State '{name}' is declared but has no overlay attribute."
            for name in states
            if find_overlay(machine_type, name) is None
        ]

    @staticmethod
    def validate_parents(states: Dict[str, StateDeclaration]) -> List[str]:
        """
        Every parent chain must reach ``initial`` through declared states.
        """
        errors: List[str] = []
        for name, declaration in states.items():
            seen = {name}
            parent = declaration.parent_state
            while parent != INITIAL:
                if parent in seen:
                    errors.append(f"State '{name}' has a cyclic parent chain through '{parent}'.")
                    break
                if parent not in states:
                    errors.append(f"State '{name}' extends undeclared state '{parent}'.")
                    break
                seen.add(parent)
                parent = states[parent].parent_state
        return errors

    @staticmethod
    def validate_targets(states: Dict[str, StateDeclaration], initial_transitions: List[str]) -> List[str]:
        """
        Every permitted next state must be declared (or be ``initial``).
        """
        errors: List[str] = []
        for target in initial_transitions:
            if target != INITIAL and target not in states:
                errors.append(f"Initial transition targets undeclared state '{target}'.")
        for name, declaration in states.items():
            for target in declaration.to:
                if target != INITIAL and target not in states:
                    errors.append(f"State '{name}' permits undeclared state '{target}'.")
        return errors
