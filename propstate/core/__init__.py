"""
Core package providing the state machine functionality.

Architecture:
- registry: class-level state declarations
- store: per-instance current state, initial snapshot and callbacks
- merge: deep clone and field-level overlay merge
- machine: transition engine and query surface
- validations: opt-in consistency checks of a declared hierarchy
"""

# Import order matters to avoid circular dependencies
from .types import INITIAL, TransitionFailure
from .errors import (
    ConfigurationError,
    InheritanceCycleError,
    RecursiveTransitionError,
    StateMachineError,
    StateNotFoundError,
)
from .registry import DeclaredState, StateDeclaration, StateRegistry, declare_state
from .store import TransitionStore
from .validations import Validator
from .machine import StateMachine

__all__ = [
    # Constants and enums
    "INITIAL",
    "TransitionFailure",
    # Errors
    "StateMachineError",
    "ConfigurationError",
    "RecursiveTransitionError",
    "StateNotFoundError",
    "InheritanceCycleError",
    # Declarations
    "StateDeclaration",
    "StateRegistry",
    "DeclaredState",
    "declare_state",
    # Runtime
    "TransitionStore",
    "Validator",
    "StateMachine",
]
