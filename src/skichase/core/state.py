"""
Table-driven state machine used by the game entities.

The skier and the rhino each own one of these. A machine is built from the
enum of its states and the list of (from, to) transitions it accepts;
anything outside that table is refused and logged.
"""

from enum import Enum
from typing import Callable, Generic, Iterable, TypeVar
import logging

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=Enum)

Listener = Callable[[S, S], None]


class StateMachine(Generic[S]):
    """
    Tracks the current state of one entity and validates transitions.

    Listeners are notified with (old_state, new_state) after every
    successful transition; a failing listener is logged and skipped.
    """

    def __init__(
        self,
        name: str,
        initial_state: S,
        transitions: Iterable[tuple[S, S]],
    ) -> None:
        self.name = name
        self._state = initial_state
        self._valid_transitions = set(transitions)
        self._listeners: list[Listener] = []
        logger.debug(f"StateMachine {name} initialized with state: {initial_state.name}")

    @property
    def state(self) -> S:
        """Get current state."""
        return self._state

    def can_transition(self, to_state: S) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: S) -> bool:
        """
        Attempt to transition to a new state.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"{self.name}: invalid transition {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        logger.info(f"{self.name}: {old_state.name} -> {to_state.name}")
        self._notify(old_state, to_state)
        return True

    def add_listener(self, callback: Listener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def _notify(self, old_state: S, new_state: S) -> None:
        for listener in self._listeners:
            try:
                listener(old_state, new_state)
            except Exception as e:
                logger.error(f"Error in {self.name} state listener: {e}")
