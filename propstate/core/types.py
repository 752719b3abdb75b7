"""
Type definitions and enums for the state machine.

This module contains shared type definitions used across the state machine
implementation. It breaks circular dependencies between the registry, the
per-instance store and the machine itself.

Design:
- No runtime dependencies on other modules
- Only contains constants, enums and type aliases
- Used by registry.py, store.py and machine.py
"""

from enum import Enum
from typing import Any, Callable, Dict, Mapping

# Name of the implicit start state. Root of every inheritance chain.
INITIAL = "initial"


class TransitionFailure(str, Enum):
    """Reasons a transition request was rejected.

    Returned from ``StateMachine.transit_to`` instead of being raised. A
    rejected request never changes the current state or the properties, so
    the caller may retry with another target.
    """

    INVALID_TRANSITION = "InvalidTransition"  # Target not permitted from current state
    STATE_NOT_REGISTERED = "StateNotRegistered"  # Target has no declaration

    def __str__(self) -> str:
        return self.value


# Type aliases for common types
Props = Dict[str, Any]
PartialProps = Mapping[str, Any]
EnterCallback = Callable[..., None]
LeaveCallback = Callable[[str], None]
Unsubscribe = Callable[[], None]
