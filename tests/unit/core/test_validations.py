# tests/unit/core/test_validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from propstate import INITIAL, StateMachine, StateRegistry, Validator, declare_state


@pytest.fixture
def validator():
    return Validator()


def test_sound_hierarchy_has_no_errors(validator, request_machine):
    assert validator.validate_machine_type(type(request_machine), ["mainState"]) == []


def test_undeclared_parent(validator):
    class Machine(StateMachine):
        Child = declare_state("Ghost", to=[])

    errors = validator.validate_machine_type(Machine)
    assert errors == ["State 'Child' extends undeclared state 'Ghost'."]


def test_cyclic_parent_chain(validator):
    class Machine(StateMachine):
        A = declare_state("B", to=[])
        B = declare_state("A", to=[])

    errors = validator.validate_machine_type(Machine)
    assert "State 'A' has a cyclic parent chain through 'A'." in errors
    assert "State 'B' has a cyclic parent chain through 'B'." in errors


def test_undeclared_targets(validator):
    class Machine(StateMachine):
        A = declare_state(INITIAL, to=["Nowhere", INITIAL])

    errors = validator.validate_machine_type(Machine, ["A", "Elsewhere"])
    assert errors == [
        "Initial transition targets undeclared state 'Elsewhere'.",
        "State 'A' permits undeclared state 'Nowhere'.",
    ]


def test_declaration_without_overlay(validator):
    class Machine(StateMachine):
        pass

    StateRegistry.define_state(Machine, "Bare", INITIAL, [])
    assert validator.validate_machine_type(Machine) == ["State 'Bare' is declared but has no overlay attribute."]


def test_machine_validate_uses_initial_transitions():
    class Machine(StateMachine):
        A = declare_state(INITIAL, to=[])

    m = Machine(initial_transitions=["A", "Missing"], props={})
    assert m.validate() == ["Initial transition targets undeclared state 'Missing'."]
