"""propstate: declarative finite state machines with inherited state properties

This package provides a base class that application classes extend to gain
validated state transitions, per-state property inheritance and enter/leave
lifecycle callbacks.

Responsibilities:
    - Class-level state declaration (parent state, permitted next states)
    - Transition validation
    - Property overlay resolution along a state's ancestry
    - Ordered enter/leave callback dispatch
    - Re-entrancy protection

Interactions:
    - Client code subclasses StateMachine and reads ``props`` directly
    - Logging system for optional diagnostics

Cross-cutting Concerns:
    Error Handling:
        - Rejected transitions are returned as TransitionFailure values
        - Programming errors raise StateMachineError subclasses

    Logging:
        - Standard library logging, one logger per module
        - Silent unless enabled per machine instance

    Thread Safety:
        - None; a machine instance belongs to one thread
"""

from propstate.core import (
    INITIAL,
    ConfigurationError,
    DeclaredState,
    InheritanceCycleError,
    RecursiveTransitionError,
    StateDeclaration,
    StateMachine,
    StateMachineError,
    StateNotFoundError,
    StateRegistry,
    TransitionFailure,
    Validator,
    declare_state,
)

__version__ = "0.1.0"

__all__ = [
    "INITIAL",
    "ConfigurationError",
    "DeclaredState",
    "InheritanceCycleError",
    "RecursiveTransitionError",
    "StateDeclaration",
    "StateMachine",
    "StateMachineError",
    "StateNotFoundError",
    "StateRegistry",
    "TransitionFailure",
    "Validator",
    "declare_state",
]
