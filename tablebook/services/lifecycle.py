"""Reservation state machine rules"""

from typing import Dict, FrozenSet

from tablebook.errors import ConflictError
from tablebook.models.reservation import ReservationStatus as S

TRANSITIONS: Dict[S, FrozenSet[S]] = {
    S.PENDING: frozenset({S.CONFIRMED, S.DENIED, S.CANCELLED}),
    S.CONFIRMED: frozenset({S.SEATED, S.COMPLETED, S.CANCELLED, S.NO_SHOW}),
    S.SEATED: frozenset({S.COMPLETED}),
    S.COMPLETED: frozenset(),
    S.CANCELLED: frozenset(),
    S.DENIED: frozenset(),
    S.NO_SHOW: frozenset(),
}

# Transitions that only a PENDING reservation may take
DECISIONS = frozenset({S.CONFIRMED, S.DENIED})


def sources_for(target: S) -> FrozenSet[S]:
    """All states from which ``target`` can be reached"""
    return frozenset(source for source, targets in TRANSITIONS.items() if target in targets)


def can_transition(current: S, target: S) -> bool:
    return target in TRANSITIONS[current]


def ensure_transition(current: S, target: S) -> None:
    """Raise ConflictError unless ``current -> target`` is allowed"""
    if can_transition(current, target):
        return
    if target in DECISIONS:
        verb = "approved" if target == S.CONFIRMED else "denied"
        raise ConflictError(
            f"Only PENDING reservations can be {verb} (current status: {current.value})"
        )
    if target == S.CANCELLED and current == S.COMPLETED:
        raise ConflictError("Cannot cancel completed reservations")
    raise ConflictError(
        f"Reservation cannot move from {current.value} to {target.value}"
    )


def is_terminal(status: S) -> bool:
    return not TRANSITIONS[status]
