"""
State machine for the BEAR RUN session flow.

States:
    IDLE: Waiting for the first input (nothing advances)
    RUNNING: Every tick advances the simulation
    DEAD: Runner crashed; only a restart input is accepted
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    """Session states."""
    IDLE = auto()
    RUNNING = auto()
    DEAD = auto()


Listener = Callable[[State, State], None]


class StateMachine:
    """
    Manages session state and transitions.

    Invalid transitions (restart while running, crash while idle...) are
    rejected and reported through the return value, never raised.
    """

    # Valid state transitions
    VALID_TRANSITIONS: list[tuple[State, State]] = [
        (State.IDLE, State.RUNNING),     # First input
        (State.RUNNING, State.DEAD),     # Collision
        (State.DEAD, State.RUNNING),     # Restart
    ]

    def __init__(self, initial_state: State = State.IDLE) -> None:
        self._state = initial_state
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> State:
        """Get current state."""
        return self._state

    def can_transition(self, to_state: State) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: State) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.debug(
                f"Ignored transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")
        self._notify(old_state, to_state)
        return True

    def add_listener(self, callback: Listener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def _notify(self, old_state: State, new_state: State) -> None:
        for listener in list(self._listeners):
            try:
                listener(old_state, new_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")
