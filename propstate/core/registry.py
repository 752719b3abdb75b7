"""
State declaration registry.

Architecture:
- Each machine type (a ``StateMachine`` subclass) owns a table mapping state
  names to their declarations
- Tables are filled while the class body is executed and are read-only
  afterwards
- Lookups follow the class MRO so subclasses see the states of their bases

A state is declared by assigning ``declare_state(...)`` to a class attribute.
The attribute name becomes the state name and the attribute value is the
state's overlay, the partial properties applied while the state is active::

    class TrafficLight(StateMachine):
        Red = declare_state(INITIAL, to=["Green"], message="STOP")
        Green = declare_state(INITIAL, to="Red", message="GO", safe=True)
"""

import weakref
from collections import abc
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from propstate.core.merge import deep_clone
from propstate.core.types import PartialProps


def _normalize_names(names: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    if names is None:
        return ()
    if isinstance(names, str):
        return (names,)
    return tuple(names)


@dataclass(frozen=True)
class StateDeclaration:
    """Static metadata attached to a named state."""

    parent_state: str
    to: Tuple[str, ...] = field(default_factory=tuple)

    def permits(self, state_name: str) -> bool:
        """Return True if ``state_name`` may follow this state."""
        return state_name in self.to


class StateRegistry:
    """Process-wide association from machine type to its state declarations.

    Keys are classes, held weakly so machine types created at runtime (for
    example inside tests) can be garbage collected.
    """

    _states_by_machine: "weakref.WeakKeyDictionary[type, Dict[str, StateDeclaration]]" = (
        weakref.WeakKeyDictionary()
    )

    @classmethod
    def define_state(
        cls,
        machine_type: type,
        state_name: str,
        parent_state: str,
        to: Union[str, Iterable[str], None] = (),
    ) -> StateDeclaration:
        """Record a declaration, replacing any earlier one with the same name.

        Args:
            machine_type: Class owning the state
            state_name: Name of the declared state
            parent_state: Name of the state whose overlay this state extends
            to: State name or names reachable from this state

        Returns:
            The stored declaration
        """
        declaration = StateDeclaration(parent_state=parent_state, to=_normalize_names(to))
        cls._states_by_machine.setdefault(machine_type, {})[state_name] = declaration
        return declaration

    @classmethod
    def find_owner(cls, machine_type: type, state_name: str) -> Optional[type]:
        """Return the class in ``machine_type``'s MRO that declares ``state_name``."""
        for klass in machine_type.__mro__:
            states = cls._states_by_machine.get(klass)
            if states and state_name in states:
                return klass
        return None

    @classmethod
    def get_state(cls, machine_type: type, state_name: str) -> Optional[StateDeclaration]:
        """Return the declaration visible to ``machine_type``, or None."""
        owner = cls.find_owner(machine_type, state_name)
        if owner is None:
            return None
        return cls._states_by_machine[owner][state_name]

    @classmethod
    def get_states(cls, machine_type: type) -> Dict[str, StateDeclaration]:
        """Return a snapshot of every declaration visible to ``machine_type``."""
        result: Dict[str, StateDeclaration] = {}
        for klass in reversed(machine_type.__mro__):
            result.update(cls._states_by_machine.get(klass, {}))
        return result


class DeclaredState:
    """Class attribute holding a state's overlay.

    On assignment inside a class body it registers itself with the
    ``StateRegistry`` under the attribute name. Reading the attribute from an
    instance gives a read-only view of the overlay.
    """

    def __init__(self, parent_state: str, to: Union[str, Iterable[str], None], overlay: PartialProps) -> None:
        self.parent_state = parent_state
        self.to = _normalize_names(to)
        self.overlay: Dict[str, Any] = deep_clone(dict(overlay))
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        StateRegistry.define_state(owner, name, self.parent_state, self.to)

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return MappingProxyType(deep_clone(self.overlay))

    def __repr__(self) -> str:
        return f"DeclaredState(name={self.name!r}, parent_state={self.parent_state!r}, to={self.to!r})"


def declare_state(
    parent_state: str,
    to: Union[str, Iterable[str], None] = (),
    props: Optional[Mapping[str, Any]] = None,
    **fields: Any,
) -> DeclaredState:
    """Declare a state on a machine class.

    Args:
        parent_state: State whose overlay this one extends, usually ``INITIAL``
        to: State name or names permitted after this state
        props: Overlay values, for keys that are not valid identifiers
        **fields: Overlay values given as keywords

    Returns:
        A descriptor to assign to a class attribute named after the state
    """
    overlay: Dict[str, Any] = dict(props or {})
    overlay.update(fields)
    return DeclaredState(parent_state, to, overlay)


def find_overlay(machine_type: type, state_name: str) -> Optional[Mapping[str, Any]]:
    """Return the overlay stored under ``state_name`` on ``machine_type``.

    Only the class that declares the state is consulted, so a same-named
    attribute on a subclass never replaces a base class's overlay. The
    attribute is either a ``DeclaredState`` or, for states registered by
    calling ``StateRegistry.define_state`` directly, a plain mapping. Any
    other attribute (methods, ``props`` and so on) is not an overlay.
    """
    owner = StateRegistry.find_owner(machine_type, state_name)
    if owner is None:
        return None
    attr = owner.__dict__.get(state_name)
    if isinstance(attr, DeclaredState):
        return attr.overlay
    if isinstance(attr, abc.Mapping):
        return attr
    return None
