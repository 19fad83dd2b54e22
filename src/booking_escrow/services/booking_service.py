"""Booking Service — booking-contract registry and booking validators.

The registry maps contract ids to collaborator addresses and is only used to
authorize deposits. Two validators satisfy the BookingValidator protocol:

    - RegistryBookingValidator: accepts any booking once a contract is
      registered under a fixed id, and reports a confirmed booking for a
      fixed guide. This is the reference collaborator the ledger uses when
      none is supplied.
    - StaticBookingValidator: resolves bookings from an in-memory table.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from booking_escrow.domain.collaborator_protocol import BookingValidation
from booking_escrow.domain.enums import BookingStatus
from booking_escrow.domain.models import Booking
from booking_escrow.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

logger = get_logger(__name__)


class BookingContractRegistry:
    """Mapping of contract id to collaborator address."""

    def __init__(self, contracts: Mapping[int, str] | None = None) -> None:
        self._contracts: dict[int, str] = dict(contracts or {})

    def register(self, contract_id: int, address: str) -> None:
        """Register or overwrite the address for a contract id."""
        self._contracts[contract_id] = address

    def get(self, contract_id: int) -> str | None:
        return self._contracts.get(contract_id)

    def as_dict(self) -> dict[int, str]:
        return dict(self._contracts)

    def __contains__(self, contract_id: object) -> bool:
        return contract_id in self._contracts

    def __len__(self) -> int:
        return len(self._contracts)

    def __iter__(self) -> Iterator[int]:
        return iter(self._contracts)


class RegistryBookingValidator:
    """Validator that only checks a booking contract is registered.

    Every booking id resolves to the same confirmed booking. A real
    implementation would look up the booking held by the registered contract.
    """

    def __init__(
        self,
        registry: BookingContractRegistry,
        contract_id: int = 1,
        guide: str = "ST1GUIDE",
    ) -> None:
        self._registry = registry
        self._contract_id = contract_id
        self._guide = guide

    def validate(self, booking_id: int) -> BookingValidation:
        if self._registry.get(self._contract_id) is None:
            logger.info(
                "booking.validation_failed",
                booking_id=booking_id,
                reason="contract_not_registered",
                contract_id=self._contract_id,
            )
            return BookingValidation.rejected(
                f"No booking contract registered under id {self._contract_id}"
            )
        return BookingValidation.accepted(
            Booking(status=BookingStatus.CONFIRMED, guide=self._guide)
        )


class StaticBookingValidator:
    """Validator backed by a fixed booking table."""

    def __init__(self, bookings: Mapping[int, Booking] | None = None) -> None:
        self._bookings: dict[int, Booking] = dict(bookings or {})

    def add_booking(self, booking_id: int, booking: Booking) -> None:
        self._bookings[booking_id] = booking

    def validate(self, booking_id: int) -> BookingValidation:
        booking = self._bookings.get(booking_id)
        if booking is None:
            logger.info(
                "booking.validation_failed",
                booking_id=booking_id,
                reason="unknown_booking",
            )
            return BookingValidation.rejected(f"Unknown booking {booking_id}")
        return BookingValidation.accepted(booking)
