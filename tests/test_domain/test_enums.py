"""Tests for domain enumerations."""

from __future__ import annotations

from booking_escrow.domain.enums import BookingStatus, ErrorKind, EscrowStatus, EventType


class TestEscrowStatus:
    def test_all_statuses_exist(self) -> None:
        actual = {s.value for s in EscrowStatus}
        assert actual == {"deposited", "released", "refunded"}

    def test_status_is_str_enum(self) -> None:
        assert isinstance(EscrowStatus.DEPOSITED, str)
        assert EscrowStatus.DEPOSITED == "deposited"


class TestErrorKind:
    def test_codes_are_stable(self) -> None:
        assert ErrorKind.NOT_AUTHORIZED == 100
        assert ErrorKind.INVALID_BOOKING == 101
        assert ErrorKind.ALREADY_DEPOSITED == 102
        assert ErrorKind.NO_DEPOSIT == 103
        assert ErrorKind.DISPUTE_ACTIVE == 104
        assert ErrorKind.INVALID_AMOUNT == 105
        assert ErrorKind.INVALID_STATUS == 106
        assert ErrorKind.INVALID_FEE == 107
        assert ErrorKind.NOT_ADMIN == 109

    def test_codes_are_unique(self) -> None:
        codes = [kind.value for kind in ErrorKind]
        assert len(codes) == len(set(codes))


class TestEventType:
    def test_all_event_types_exist(self) -> None:
        # 3 lifecycle + 3 dispute + 2 administration
        assert len(EventType) == 8

    def test_event_type_is_str_enum(self) -> None:
        assert isinstance(EventType.ESCROW_DEPOSITED, str)


class TestBookingStatus:
    def test_confirmed_value(self) -> None:
        assert BookingStatus.CONFIRMED == "confirmed"
