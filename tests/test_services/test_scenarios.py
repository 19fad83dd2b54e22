"""End-to-end ledger scenarios mirroring the documented walkthroughs."""

from __future__ import annotations

from booking_escrow.domain.enums import ErrorKind, EscrowStatus
from booking_escrow.domain.models import Transfer
from booking_escrow.services.ledger_service import EscrowLedger
from conftest import ADMIN, GUIDE, HOLDING, TRAVELER


class TestReleaseScenario:
    def test_deposit_release_release(self, ledger: EscrowLedger) -> None:
        assert ledger.get_platform_fee() == 100

        assert ledger.deposit_payment(1, 1000, caller=TRAVELER).ok
        record = ledger.get_escrow_details(1)
        assert record is not None
        assert (record.amount, record.fee_amount, record.status) == (
            900,
            100,
            EscrowStatus.DEPOSITED,
        )

        assert ledger.release_payment(1, caller=TRAVELER).ok
        record = ledger.get_escrow_details(1)
        assert record is not None
        assert record.status == EscrowStatus.RELEASED
        assert Transfer(amount=900, sender=HOLDING, recipient=GUIDE) in ledger.transfers

        assert ledger.release_payment(1, caller=TRAVELER).error == ErrorKind.INVALID_STATUS


class TestDisputeScenario:
    def test_deposit_flag_resolve_refund(self, ledger: EscrowLedger) -> None:
        assert ledger.deposit_payment(1, 1000, caller=TRAVELER).ok
        assert ledger.flag_dispute(1, caller=TRAVELER).ok

        record = ledger.get_escrow_details(1)
        assert record is not None
        assert record.dispute_active is True

        assert ledger.resolve_dispute(1, caller=ADMIN, release_to_guide=False).ok
        record = ledger.get_escrow_details(1)
        assert record is not None
        assert record.status == EscrowStatus.REFUNDED
        assert record.dispute_active is False
        assert ledger.transfers == (
            Transfer(amount=100, sender=TRAVELER, recipient=ADMIN),
            Transfer(amount=900, sender=TRAVELER, recipient=HOLDING),
            Transfer(amount=900, sender=HOLDING, recipient=TRAVELER),
        )
