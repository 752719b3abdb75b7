# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from propstate import INITIAL, StateMachine, declare_state


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")
    config.addinivalue_line("markers", "integration: mark test as an end-to-end scenario")


class RequestMachine(StateMachine):
    """Form-submission machine with a two-level inheritance chain."""

    mainState = declare_state(INITIAL, to=["requestState"])
    requestState = declare_state("mainState", to=["successState", "errorState"], text="request")
    # Base state for extending only
    doneState = declare_state("mainState", to=[], text="done", alert={"visible": True})
    successState = declare_state("doneState", to=["mainState"], alert={"text": "success"})
    errorState = declare_state("doneState", to=["mainState"], alert={"text": "error"})

    def __init__(self, **kwargs):
        super().__init__(
            initial_transitions=["mainState"],
            props={"text": "do", "alert": {"text": "alert", "visible": False}},
            **kwargs,
        )


class TrafficLight(StateMachine):
    Red = declare_state(INITIAL, to=["Green"], message="STOP")
    Orange = declare_state(INITIAL, to=["Green", "Red"], message="CAUTION")
    Green = declare_state(INITIAL, to="Orange", message="GO", safe=True)

    def __init__(self, **kwargs):
        super().__init__(initial_transitions=["Green"], props={"message": "OFF", "safe": False}, **kwargs)


@pytest.fixture
def request_machine():
    """A fresh RequestMachine in its initial state."""
    return RequestMachine()


@pytest.fixture
def traffic_light():
    """A fresh TrafficLight in its initial state."""
    return TrafficLight()


@pytest.fixture
def machine_factory():
    """Returns a factory building machines of either test type."""

    def _factory(kind="request", **kwargs):
        return {"request": RequestMachine, "traffic": TrafficLight}[kind](**kwargs)

    return _factory


@pytest.fixture
def mock_callback():
    """A callback mock for enter/leave registration."""
    return MagicMock()


@pytest.fixture
def initial_props():
    """Initial property values of RequestMachine."""
    return {"text": "do", "alert": {"text": "alert", "visible": False}}
