"""Application services — escrow ledger and its collaborators."""

from booking_escrow.services.booking_service import (
    BookingContractRegistry,
    RegistryBookingValidator,
    StaticBookingValidator,
)
from booking_escrow.services.ledger_service import EscrowLedger
from booking_escrow.services.transfer_service import RecordingFundTransfer

__all__ = [
    "BookingContractRegistry",
    "EscrowLedger",
    "RecordingFundTransfer",
    "RegistryBookingValidator",
    "StaticBookingValidator",
]
