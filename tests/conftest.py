"""Shared test fixtures for the booking escrow test suite.

Provides:
    - A ledger with the reference booking contract registered
    - Identities for the traveler, guide, admin and an outsider
    - A helper that puts a booking into the deposited state
"""

from __future__ import annotations

import pytest

from booking_escrow.services.ledger_service import EscrowLedger

ADMIN = "ST1ADMIN"
TRAVELER = "ST1TRAVELER"
GUIDE = "ST1GUIDE"
OUTSIDER = "ST2FAKE"
HOLDING = "contract"
BOOKING_ID = 1


# ---------------------------------------------------------------------------
# Ledger Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def bare_ledger() -> EscrowLedger:
    """Return a ledger with no booking contract registered."""
    return EscrowLedger(admin=ADMIN, platform_fee=100)


@pytest.fixture
def ledger(bare_ledger: EscrowLedger) -> EscrowLedger:
    """Return a ledger whose registry authorizes deposits."""
    result = bare_ledger.set_booking_contract(ADMIN, 1, "ST1BOOKING")
    assert result.ok
    return bare_ledger


@pytest.fixture
def deposited(ledger: EscrowLedger) -> EscrowLedger:
    """Return a ledger holding a 1000 deposit for BOOKING_ID."""
    result = ledger.deposit_payment(BOOKING_ID, 1000, caller=TRAVELER)
    assert result.ok
    return ledger


@pytest.fixture
def disputed(deposited: EscrowLedger) -> EscrowLedger:
    """Return a ledger whose BOOKING_ID escrow is under dispute."""
    result = deposited.flag_dispute(BOOKING_ID, caller=TRAVELER)
    assert result.ok
    return deposited
