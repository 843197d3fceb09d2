# attendly/services/rsvp.py
# RSVP status transition rules.

from __future__ import annotations

from typing import Dict, FrozenSet

from attendly.models.invitation import RsvpStatus

FREE = "free"
GUARDED = "guarded"
MODES = (FREE, GUARDED)

# guarded mode: rescinded is terminal, nobody goes back to pending
GUARDED_TRANSITIONS: Dict[RsvpStatus, FrozenSet[RsvpStatus]] = {
    RsvpStatus.pending: frozenset({RsvpStatus.confirmed, RsvpStatus.declined, RsvpStatus.rescinded}),
    RsvpStatus.confirmed: frozenset({RsvpStatus.declined, RsvpStatus.rescinded}),
    RsvpStatus.declined: frozenset({RsvpStatus.confirmed, RsvpStatus.rescinded}),
    RsvpStatus.rescinded: frozenset(),
}


class RsvpTransitions:
    """
    free    - any status to any status (admins can override anything);
    guarded - GUARDED_TRANSITIONS. Writing the current status again is
              allowed in both modes.
    """

    def __init__(self, mode: str = FREE):
        if mode not in MODES:
            raise ValueError(f"unknown RSVP transition mode: {mode!r}")
        self.mode = mode

    def allows(self, current: RsvpStatus, requested: RsvpStatus) -> bool:
        if self.mode == FREE or current == requested:
            return True
        return requested in GUARDED_TRANSITIONS[current]

    def allowed_from(self, current: RsvpStatus) -> FrozenSet[RsvpStatus]:
        if self.mode == FREE:
            return frozenset(RsvpStatus)
        return GUARDED_TRANSITIONS[current] | {current}
