"""Escrow Lifecycle State Machine Guard.

Uses python-statemachine to enforce legal lifecycle transitions at the domain
level. The ledger picks the error kind from its own ordered precondition
checks, then fires the event here; whatever path led to the call, an illegal
transition (e.g., released -> refunded) raises TransitionNotAllowed.

A stored record has only three statuses. The machine adds a fourth lifecycle
state, "disputed", which stands for status "deposited" with the dispute flag
set. Use lifecycle_state() to map a record onto the machine.

Transition table:
    deposited -> released   (release)
    deposited -> refunded   (refund)
    deposited -> disputed   (flag_dispute)
    disputed  -> released   (resolve_for_guide)
    disputed  -> refunded   (resolve_for_traveler)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from statemachine import State, StateMachine

from booking_escrow.domain.enums import EscrowStatus

if TYPE_CHECKING:
    from booking_escrow.domain.models import EscrowRecord

DISPUTED = "disputed"


class EscrowStateMachine(StateMachine):
    """State machine that guards escrow record lifecycle transitions.

    Usage:
        sm = EscrowStateMachine(current_status="deposited")
        sm.flag_dispute()   # transitions to disputed
        sm.status           # "disputed"
    """

    # --- States ---
    deposited = State("Deposited", value=EscrowStatus.DEPOSITED.value, initial=True)
    disputed = State("Disputed", value=DISPUTED)
    released = State("Released", value=EscrowStatus.RELEASED.value, final=True)
    refunded = State("Refunded", value=EscrowStatus.REFUNDED.value, final=True)

    # --- Events / Transitions ---

    # Traveler settles directly
    release = deposited.to(released)
    refund = deposited.to(refunded)

    # Disputes
    flag_dispute = deposited.to(disputed)
    resolve_for_guide = disputed.to(released)
    resolve_for_traveler = disputed.to(refunded)

    EVENT_NAMES = (
        "release",
        "refund",
        "flag_dispute",
        "resolve_for_guide",
        "resolve_for_traveler",
    )

    def __init__(self, current_status: str = EscrowStatus.DEPOSITED.value) -> None:
        """Initialize the state machine at a given lifecycle state.

        Args:
            current_status: An EscrowStatus value or "disputed".
        """
        valid_values = {s.value for s in self.states}
        if current_status not in valid_values:
            valid = ", ".join(sorted(valid_values))
            raise ValueError(
                f"Unknown status '{current_status}'. Valid states: {valid}"
            )
        super().__init__(start_value=str(current_status))

    @property
    def status(self) -> str:
        """Return the current lifecycle state value."""
        return str(self.current_state.value)

    @property
    def is_terminal(self) -> bool:
        return bool(self.current_state.final)

    def get_allowed_events(self) -> list[str]:
        """Return the event ids that can fire from the current state.

        Uses the event id rather than its display name, so the result matches
        EVENT_NAMES and the method names on the machine.
        """
        return [event.id for event in self.allowed_events]


def lifecycle_state(record: EscrowRecord) -> str:
    """Map a stored record onto its state machine state."""
    if record.dispute_active:
        return DISPUTED
    return record.status.value


def validate_transition(current_status: str, event_name: str) -> str:
    """Validate a transition and return the new lifecycle state.

    Creates a temporary state machine, fires the named event, and returns the
    resulting state value.

    Raises:
        TransitionNotAllowed: If the transition is illegal.
        ValueError: If the status or event name is unknown.
    """
    sm = EscrowStateMachine(current_status=current_status)
    if event_name not in sm.EVENT_NAMES:
        raise ValueError(
            f"Unknown event '{event_name}'. "
            f"Allowed events from {current_status}: {sm.get_allowed_events()}"
        )
    sm.send(event_name)
    return sm.status
