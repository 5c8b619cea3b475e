"""Canonical state transition helpers for lifecycle entities."""

from __future__ import annotations

from app.models.enums import NotificationStatus


class InvalidTransitionError(ValueError):
    """Raised when a disallowed state transition is attempted."""


class StateMachine:
    """Simple in-memory state machine over string states."""

    def __init__(self, transitions: dict[str, set[str]]) -> None:
        self._transitions = transitions

    def can_transition(self, current: str, target: str) -> bool:
        return target in self._transitions.get(current, set())

    def assert_transition(self, current: str, target: str) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidTransitionError(f"Transition not allowed: {current} -> {target}")

    def is_terminal(self, state: str) -> bool:
        return not self._transitions.get(state)


# Forward-only; acknowledged is terminal.
NOTIFICATION_LIFECYCLE = StateMachine(
    {
        NotificationStatus.UNREAD.value: {NotificationStatus.READ.value, NotificationStatus.ACKNOWLEDGED.value},
        NotificationStatus.READ.value: {NotificationStatus.ACKNOWLEDGED.value},
        NotificationStatus.ACKNOWLEDGED.value: set(),
    }
)
