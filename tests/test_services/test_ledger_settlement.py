"""Tests for EscrowLedger.release_payment and refund_payment.

Error precedence: NO_DEPOSIT, NOT_AUTHORIZED, INVALID_STATUS, DISPUTE_ACTIVE.
"""

from __future__ import annotations

from booking_escrow.domain.enums import ErrorKind, EscrowStatus, EventType
from booking_escrow.domain.models import Transfer
from booking_escrow.services.ledger_service import EscrowLedger
from conftest import ADMIN, BOOKING_ID, GUIDE, HOLDING, OUTSIDER, TRAVELER


class TestRelease:
    def test_release_pays_guide(self, deposited: EscrowLedger) -> None:
        result = deposited.release_payment(BOOKING_ID, caller=TRAVELER)

        assert result.ok is True
        record = deposited.get_escrow_details(BOOKING_ID)
        assert record is not None
        assert record.status == EscrowStatus.RELEASED
        assert deposited.transfers[-1] == Transfer(amount=900, sender=HOLDING, recipient=GUIDE)

    def test_release_twice(self, deposited: EscrowLedger) -> None:
        deposited.release_payment(BOOKING_ID, caller=TRAVELER)
        result = deposited.release_payment(BOOKING_ID, caller=TRAVELER)

        assert result.error == ErrorKind.INVALID_STATUS
        assert len(deposited.transfers) == 3

    def test_no_deposit(self, ledger: EscrowLedger) -> None:
        result = ledger.release_payment(BOOKING_ID, caller=TRAVELER)
        assert result.error == ErrorKind.NO_DEPOSIT

    def test_non_traveler(self, deposited: EscrowLedger) -> None:
        result = deposited.release_payment(BOOKING_ID, caller=OUTSIDER)
        assert result.error == ErrorKind.NOT_AUTHORIZED

    def test_admin_cannot_release(self, deposited: EscrowLedger) -> None:
        result = deposited.release_payment(BOOKING_ID, caller=ADMIN)
        assert result.error == ErrorKind.NOT_AUTHORIZED

    def test_guide_cannot_release(self, deposited: EscrowLedger) -> None:
        result = deposited.release_payment(BOOKING_ID, caller=GUIDE)
        assert result.error == ErrorKind.NOT_AUTHORIZED

    def test_blocked_by_dispute(self, disputed: EscrowLedger) -> None:
        result = disputed.release_payment(BOOKING_ID, caller=TRAVELER)

        assert result.error == ErrorKind.DISPUTE_ACTIVE
        record = disputed.get_escrow_details(BOOKING_ID)
        assert record is not None
        assert record.status == EscrowStatus.DEPOSITED

    def test_authorization_checked_before_status(self, deposited: EscrowLedger) -> None:
        deposited.refund_payment(BOOKING_ID, caller=TRAVELER)
        result = deposited.release_payment(BOOKING_ID, caller=OUTSIDER)
        assert result.error == ErrorKind.NOT_AUTHORIZED

    def test_records_event(self, deposited: EscrowLedger) -> None:
        deposited.release_payment(BOOKING_ID, caller=TRAVELER)
        event = deposited.get_events(BOOKING_ID)[-1]
        assert event.event_type == EventType.PAYMENT_RELEASED
        assert (event.old_status, event.new_status) == ("deposited", "released")
        assert event.metadata == {"amount": 900, "recipient": GUIDE}


class TestRefund:
    def test_traveler_refund(self, deposited: EscrowLedger) -> None:
        result = deposited.refund_payment(BOOKING_ID, caller=TRAVELER)

        assert result.ok is True
        record = deposited.get_escrow_details(BOOKING_ID)
        assert record is not None
        assert record.status == EscrowStatus.REFUNDED
        assert deposited.transfers[-1] == Transfer(amount=900, sender=HOLDING, recipient=TRAVELER)

    def test_admin_refund(self, deposited: EscrowLedger) -> None:
        result = deposited.refund_payment(BOOKING_ID, caller=ADMIN)

        assert result.ok is True
        assert deposited.transfers[-1] == Transfer(amount=900, sender=HOLDING, recipient=TRAVELER)
        assert deposited.get_events(BOOKING_ID)[-1].actor == ADMIN

    def test_non_traveler(self, deposited: EscrowLedger) -> None:
        result = deposited.refund_payment(BOOKING_ID, caller=OUTSIDER)
        assert result.error == ErrorKind.NOT_AUTHORIZED

    def test_no_deposit(self, ledger: EscrowLedger) -> None:
        assert ledger.refund_payment(BOOKING_ID, caller=ADMIN).error == ErrorKind.NO_DEPOSIT

    def test_refund_after_release(self, deposited: EscrowLedger) -> None:
        deposited.release_payment(BOOKING_ID, caller=TRAVELER)
        result = deposited.refund_payment(BOOKING_ID, caller=ADMIN)
        assert result.error == ErrorKind.INVALID_STATUS

    def test_blocked_by_dispute_even_for_admin(self, disputed: EscrowLedger) -> None:
        result = disputed.refund_payment(BOOKING_ID, caller=ADMIN)
        assert result.error == ErrorKind.DISPUTE_ACTIVE


class TestTerminalStates:
    def test_nothing_succeeds_after_release(self, deposited: EscrowLedger) -> None:
        deposited.release_payment(BOOKING_ID, caller=TRAVELER)
        transfers_before = deposited.transfers

        assert deposited.release_payment(BOOKING_ID, TRAVELER).error == ErrorKind.INVALID_STATUS
        assert deposited.refund_payment(BOOKING_ID, TRAVELER).error == ErrorKind.INVALID_STATUS
        assert deposited.flag_dispute(BOOKING_ID, TRAVELER).error == ErrorKind.INVALID_STATUS
        assert deposited.resolve_dispute(BOOKING_ID, ADMIN, True).error == ErrorKind.DISPUTE_ACTIVE
        assert deposited.transfers == transfers_before

    def test_nothing_succeeds_after_refund(self, deposited: EscrowLedger) -> None:
        deposited.refund_payment(BOOKING_ID, caller=TRAVELER)

        assert deposited.release_payment(BOOKING_ID, TRAVELER).error == ErrorKind.INVALID_STATUS
        assert deposited.refund_payment(BOOKING_ID, ADMIN).error == ErrorKind.INVALID_STATUS
        assert deposited.flag_dispute(BOOKING_ID, TRAVELER).error == ErrorKind.INVALID_STATUS
        assert deposited.resolve_dispute(BOOKING_ID, ADMIN, False).error == ErrorKind.DISPUTE_ACTIVE
