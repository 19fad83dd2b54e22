"""Domain enumerations for the booking escrow ledger.

These enums define the canonical states, event types and error kinds used
throughout the ledger. They are framework-agnostic.
"""

import enum


class EscrowStatus(enum.StrEnum):
    """Stored status of an escrow record.

    A disputed escrow keeps status DEPOSITED with its dispute flag set.
    RELEASED and REFUNDED are terminal.
    """

    DEPOSITED = "deposited"
    RELEASED = "released"
    REFUNDED = "refunded"


class BookingStatus(enum.StrEnum):
    """Status of a booking as reported by the booking validator."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class EventType(enum.StrEnum):
    """Types of audit events appended to the ledger's event trail.

    Every successful mutation produces exactly one event.
    """

    # Escrow lifecycle
    ESCROW_DEPOSITED = "ESCROW_DEPOSITED"
    PAYMENT_RELEASED = "PAYMENT_RELEASED"
    PAYMENT_REFUNDED = "PAYMENT_REFUNDED"

    # Disputes
    DISPUTE_RAISED = "DISPUTE_RAISED"
    DISPUTE_RESOLVED_GUIDE = "DISPUTE_RESOLVED_GUIDE"
    DISPUTE_RESOLVED_TRAVELER = "DISPUTE_RESOLVED_TRAVELER"

    # Administration
    PLATFORM_FEE_CHANGED = "PLATFORM_FEE_CHANGED"
    BOOKING_CONTRACT_SET = "BOOKING_CONTRACT_SET"


class ErrorKind(enum.IntEnum):
    """Failure kinds returned by ledger operations.

    The numeric values are a stable external contract; callers match on them.
    DISPUTE_ACTIVE is shared by "dispute already flagged" and "no dispute to
    resolve".
    """

    NOT_AUTHORIZED = 100
    INVALID_BOOKING = 101
    ALREADY_DEPOSITED = 102
    NO_DEPOSIT = 103
    DISPUTE_ACTIVE = 104
    INVALID_AMOUNT = 105
    INVALID_STATUS = 106
    INVALID_FEE = 107
    NOT_ADMIN = 109
