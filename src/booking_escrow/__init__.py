"""Booking escrow ledger: traveler deposits, guide payouts and admin dispute resolution."""

from booking_escrow.domain.enums import ErrorKind, EscrowStatus
from booking_escrow.domain.results import LedgerResult
from booking_escrow.services.ledger_service import EscrowLedger

__version__ = "0.1.0"

__all__ = ["ErrorKind", "EscrowLedger", "EscrowStatus", "LedgerResult", "__version__"]
