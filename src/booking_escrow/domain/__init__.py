"""Domain layer — pure business logic with zero infrastructure dependencies."""

from booking_escrow.domain.collaborator_protocol import (
    BookingValidation,
    BookingValidator,
    FundTransfer,
)
from booking_escrow.domain.enums import (
    BookingStatus,
    ErrorKind,
    EscrowStatus,
    EventType,
)
from booking_escrow.domain.exceptions import LedgerError
from booking_escrow.domain.models import Booking, EscrowRecord, LedgerEvent, Transfer
from booking_escrow.domain.results import LedgerResult
from booking_escrow.domain.state_machine import (
    EscrowStateMachine,
    lifecycle_state,
    validate_transition,
)

__all__ = [
    "Booking",
    "BookingStatus",
    "BookingValidation",
    "BookingValidator",
    "ErrorKind",
    "EscrowRecord",
    "EscrowStateMachine",
    "EscrowStatus",
    "EventType",
    "FundTransfer",
    "LedgerError",
    "LedgerEvent",
    "LedgerResult",
    "Transfer",
    "lifecycle_state",
    "validate_transition",
]
