# propstate/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


class StateMachineError(Exception):
    """
    Base exception class for fatal errors within the state machine library.

    Ordinary transition rejections are not exceptions; they are returned from
    ``transit_to`` as ``TransitionFailure`` values.
    """


class ConfigurationError(StateMachineError):
    """
    Raised when a machine is constructed with invalid options, such as an
    empty list of initial transitions.
    """


class RecursiveTransitionError(StateMachineError):
    """
    Raised when ``transit_to`` is called from inside an enter or leave
    callback of a transition that is still in progress.
    """


class StateNotFoundError(StateMachineError):
    """
    Raised when a state's parent chain refers to a state that was never
    declared on the machine type.
    """


class InheritanceCycleError(StateNotFoundError):
    """
    Raised when a state's parent chain loops back on itself and so never
    reaches the initial state.
    """
