"""Domain value objects held and emitted by the escrow ledger.

All models are frozen dataclasses. The ledger replaces a stored record on
every transition instead of mutating it, so a record returned by a read is a
stable snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from booking_escrow.domain.enums import BookingStatus, EscrowStatus, EventType


@dataclass(frozen=True)
class EscrowRecord:
    """Funds held in escrow for a single booking.

    Attributes:
        traveler: Identity of the payer.
        guide: Identity of the payee, resolved from the booking.
        amount: Net amount held, after the platform fee.
        status: Stored EscrowStatus.
        dispute_active: Whether the traveler has flagged a dispute.
        deposit_time: Block height at which the deposit was made.
        fee_amount: Platform fee collected at deposit time.
    """

    traveler: str
    guide: str
    amount: int
    status: EscrowStatus = EscrowStatus.DEPOSITED
    dispute_active: bool = False
    deposit_time: int = 0
    fee_amount: int = 0

    @property
    def gross_amount(self) -> int:
        """The amount originally deposited by the traveler."""
        return self.amount + self.fee_amount

    @property
    def is_terminal(self) -> bool:
        return self.status in (EscrowStatus.RELEASED, EscrowStatus.REFUNDED)


@dataclass(frozen=True)
class Booking:
    """A booking as reported by the booking validator."""

    status: BookingStatus
    guide: str


@dataclass(frozen=True)
class Transfer:
    """A single fund movement emitted by the ledger."""

    amount: int
    sender: str
    recipient: str


@dataclass(frozen=True)
class LedgerEvent:
    """An entry in the ledger's append-only audit trail."""

    sequence: int
    event_type: EventType
    actor: str
    block_height: int
    booking_id: int | None = None
    old_status: str | None = None
    new_status: str | None = None
    metadata: dict = field(default_factory=dict)
