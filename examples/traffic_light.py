"""
Traffic light example.

Run with ``python examples/traffic_light.py``. Each entered state is printed
along with the machine's properties; the final request names a colour that
was never declared and is rejected.
"""

import logging

from propstate import INITIAL, StateMachine, declare_state

logger = logging.getLogger("traffic_light")


class TrafficLightStateMachine(StateMachine):
    """A traffic light that can be Red, Orange or Green."""

    Red = declare_state(INITIAL, to=["Green"], message="STOP")
    Orange = declare_state(INITIAL, to=["Green", "Red"], message="CAUTION")
    Green = declare_state(INITIAL, to="Orange", message="GO", safe=True)

    def __init__(self, logging: bool = False):
        super().__init__(
            # States the machine may move to first
            initial_transitions=["Green"],
            # Property values before any transition
            props={"message": "OFF", "safe": False},
            logging=logging,
        )


def log_machine_state(machine: StateMachine, colour: str) -> None:
    logger.info("Entered %s state.", colour)
    logger.info(
        'Light is %s. Message is "%s". Safe: %s',
        machine.current_state,
        machine.props["message"],
        machine.props["safe"],
    )


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)-8s | %(name)s | %(message)s")

    machine = TrafficLightStateMachine(logging=True)
    log_machine_state(machine, INITIAL)

    for colour in ("Red", "Orange", "Green"):
        machine.on_enter(colour, lambda prev_state, colour=colour: log_machine_state(machine, colour))

    machine.transit_to("Green")
    machine.transit_to("Orange")
    machine.transit_to("Red")

    invalid_state_name = "Blue"
    fail_reason = machine.transit_to(invalid_state_name)
    if fail_reason:
        logger.info("Transition to %s failed. Reason: %s", invalid_state_name, fail_reason)


if __name__ == "__main__":
    main()
