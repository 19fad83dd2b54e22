"""Collaborator protocols consumed by the escrow ledger.

The ledger talks to the outside world through two narrow interfaces: a
booking validator and a fund-transfer primitive. Both are Protocols
(structural subtyping) so implementations only need to match the shape.

The domain layer has ZERO imports from any booking registry or payment rail.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from booking_escrow.domain.models import Booking


@dataclass(frozen=True)
class BookingValidation:
    """Output from a booking validator.

    Attributes:
        is_valid: Whether the booking authorizes a deposit.
        booking: The resolved booking when valid.
        error: Reason the booking was rejected.
    """

    is_valid: bool
    booking: Booking | None = None
    error: str | None = None

    @classmethod
    def accepted(cls, booking: Booking) -> BookingValidation:
        return cls(is_valid=True, booking=booking)

    @classmethod
    def rejected(cls, error: str) -> BookingValidation:
        return cls(is_valid=False, error=error)


@runtime_checkable
class BookingValidator(Protocol):
    """Protocol that all booking validators must satisfy.

    Concrete implementations:
        - services/booking_service.py RegistryBookingValidator (reference mock)
        - services/booking_service.py StaticBookingValidator (lookup table)
    """

    def validate(self, booking_id: int) -> BookingValidation:
        """Resolve and authorize a booking.

        Args:
            booking_id: The booking a deposit is being made for.

        Returns:
            A BookingValidation. Anything not valid rejects the deposit.
        """
        ...


@runtime_checkable
class FundTransfer(Protocol):
    """Protocol for the side-effecting fund movement primitive.

    The ledger emits transfers and never reads a result back.
    """

    def transfer(self, amount: int, sender: str, recipient: str) -> None:
        ...
