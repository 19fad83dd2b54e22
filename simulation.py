#!/usr/bin/env python3
"""Booking Escrow — End-to-End Simulation.

Simulates four scenarios with TravelerBot and AdminBot actors against a fresh
ledger each time:

    Scenario 1: Happy Path
        - Traveler deposits 1000 for booking 1 (fee 100)
        - Traveler releases -> guide receives 900
        - A second release is rejected with INVALID_STATUS

    Scenario 2: Dispute Refunded
        - Traveler deposits, then flags a dispute
        - Release attempt is blocked with DISPUTE_ACTIVE
        - Admin resolves in favour of the traveler -> refund of 900

    Scenario 3: Admin Refund
        - Traveler deposits
        - An outsider's refund attempt fails with NOT_AUTHORIZED
        - Admin refunds the traveler directly

    Scenario 4: Fee Change Before Deposit
        - Admin raises the platform fee to 250
        - Traveler deposits 1000 -> 750 held, 250 collected

Usage:
    python simulation.py
    python simulation.py --scenario 2
    python simulation.py --json-logs
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from booking_escrow.config import get_settings
from booking_escrow.logging_config import get_logger, setup_logging_from_settings
from booking_escrow.schemas.escrow import (
    EscrowDetailsResponse,
    LedgerEventResponse,
    OperationResponse,
    PlatformStatusResponse,
    TransferResponse,
)
from booking_escrow.services.ledger_service import EscrowLedger

logger = get_logger("simulation")

BOOKING_ID = 1


# ---------------------------------------------------------------------------
# Actors
# ---------------------------------------------------------------------------
@dataclass
class TravelerBot:
    """Simulated traveler that pays into escrow and settles bookings."""

    identity: str = "ST1TRAVELER"

    def deposit(self, ledger: EscrowLedger, booking_id: int, amount: int) -> OperationResponse:
        result = ledger.deposit_payment(booking_id, amount, caller=self.identity)
        logger.info("TRAVELER: deposit", booking_id=booking_id, amount=amount, ok=result.ok)
        return OperationResponse.from_result(result)

    def release(self, ledger: EscrowLedger, booking_id: int) -> OperationResponse:
        result = ledger.release_payment(booking_id, caller=self.identity)
        logger.info("TRAVELER: release", booking_id=booking_id, ok=result.ok)
        return OperationResponse.from_result(result)

    def refund(self, ledger: EscrowLedger, booking_id: int) -> OperationResponse:
        result = ledger.refund_payment(booking_id, caller=self.identity)
        logger.info("TRAVELER: refund", booking_id=booking_id, ok=result.ok)
        return OperationResponse.from_result(result)

    def dispute(self, ledger: EscrowLedger, booking_id: int) -> OperationResponse:
        result = ledger.flag_dispute(booking_id, caller=self.identity)
        logger.info("TRAVELER: dispute", booking_id=booking_id, ok=result.ok)
        return OperationResponse.from_result(result)


@dataclass
class AdminBot:
    """Simulated platform administrator."""

    identity: str = "ST1ADMIN"

    def register_booking_contract(
        self, ledger: EscrowLedger, contract_id: int, address: str
    ) -> OperationResponse:
        result = ledger.set_booking_contract(self.identity, contract_id, address)
        logger.info("ADMIN: booking contract", contract_id=contract_id, address=address)
        return OperationResponse.from_result(result)

    def set_fee(self, ledger: EscrowLedger, fee: int) -> OperationResponse:
        result = ledger.set_platform_fee(self.identity, fee)
        logger.info("ADMIN: platform fee", fee=fee, ok=result.ok)
        return OperationResponse.from_result(result)

    def refund(self, ledger: EscrowLedger, booking_id: int) -> OperationResponse:
        result = ledger.refund_payment(booking_id, caller=self.identity)
        logger.info("ADMIN: refund", booking_id=booking_id, ok=result.ok)
        return OperationResponse.from_result(result)

    def resolve(
        self, ledger: EscrowLedger, booking_id: int, release_to_guide: bool
    ) -> OperationResponse:
        result = ledger.resolve_dispute(booking_id, self.identity, release_to_guide)
        logger.info(
            "ADMIN: resolve dispute",
            booking_id=booking_id,
            release_to_guide=release_to_guide,
            ok=result.ok,
        )
        return OperationResponse.from_result(result)


# ---------------------------------------------------------------------------
# Print helpers
# ---------------------------------------------------------------------------
def banner(text: str) -> None:
    """Print a prominent banner."""
    width = 70
    print("\n" + "=" * width)
    print(f"  {text}")
    print("=" * width + "\n")


def section(text: str) -> None:
    """Print a section header."""
    print(f"\n--- {text} ---\n")


def print_result(response: OperationResponse) -> None:
    if response.ok:
        print("  OK")
    else:
        print(f"  REJECTED: {response.error_name} ({response.error_code})")


def print_escrow(ledger: EscrowLedger, booking_id: int) -> None:
    record = ledger.get_escrow_details(booking_id)
    if record is None:
        print(f"  No escrow for booking {booking_id}")
        return
    details = EscrowDetailsResponse.from_record(booking_id, record)
    print(f"  {details.model_dump_json()}")


def print_transfers(ledger: EscrowLedger) -> None:
    section("Transfers")
    for transfer in ledger.transfers:
        row = TransferResponse.model_validate(transfer)
        print(f"  {row.amount:>6}  {row.sender} -> {row.recipient}")


def print_audit_trail(ledger: EscrowLedger, booking_id: int) -> None:
    section("Audit Trail")
    for event in ledger.get_events(booking_id):
        row = LedgerEventResponse.from_event(event)
        print(f"  #{row.sequence} {row.event_type} by {row.actor} ({row.old_status} -> {row.new_status})")


def fresh_ledger(admin: AdminBot) -> EscrowLedger:
    """Build a ledger from settings with the booking contract registered."""
    ledger = EscrowLedger.from_settings()
    admin.register_booking_contract(ledger, get_settings().booking_contract_id, "ST1BOOKING")
    return ledger


# ===========================================================================
# Scenarios
# ===========================================================================
def scenario_1_happy_path() -> None:
    banner("SCENARIO 1: Happy Path (deposit -> release)")
    traveler, admin = TravelerBot(), AdminBot()
    ledger = fresh_ledger(admin)

    section("Step 1: Deposit")
    print_result(traveler.deposit(ledger, BOOKING_ID, 1000))
    print_escrow(ledger, BOOKING_ID)

    section("Step 2: Release to guide")
    print_result(traveler.release(ledger, BOOKING_ID))
    print_escrow(ledger, BOOKING_ID)

    section("Step 3: Release again")
    print_result(traveler.release(ledger, BOOKING_ID))

    print_transfers(ledger)
    print_audit_trail(ledger, BOOKING_ID)


def scenario_2_dispute_refunded() -> None:
    banner("SCENARIO 2: Dispute resolved for the traveler")
    traveler, admin = TravelerBot(), AdminBot()
    ledger = fresh_ledger(admin)

    section("Step 1: Deposit and flag dispute")
    print_result(traveler.deposit(ledger, BOOKING_ID, 1000))
    print_result(traveler.dispute(ledger, BOOKING_ID))

    section("Step 2: Release while disputed")
    print_result(traveler.release(ledger, BOOKING_ID))

    section("Step 3: Admin resolves")
    print_result(admin.resolve(ledger, BOOKING_ID, release_to_guide=False))
    print_escrow(ledger, BOOKING_ID)

    print_transfers(ledger)
    print_audit_trail(ledger, BOOKING_ID)


def scenario_3_admin_refund() -> None:
    banner("SCENARIO 3: Admin refund")
    traveler, admin = TravelerBot(), AdminBot()
    outsider = TravelerBot(identity="ST2FAKE")
    ledger = fresh_ledger(admin)

    section("Step 1: Deposit")
    print_result(traveler.deposit(ledger, BOOKING_ID, 1000))

    section("Step 2: Outsider tries to refund")
    print_result(outsider.refund(ledger, BOOKING_ID))

    section("Step 3: Admin refunds")
    print_result(admin.refund(ledger, BOOKING_ID))
    print_escrow(ledger, BOOKING_ID)

    print_transfers(ledger)


def scenario_4_fee_change() -> None:
    banner("SCENARIO 4: Fee changed before deposit")
    traveler, admin = TravelerBot(), AdminBot()
    ledger = fresh_ledger(admin)

    section("Step 1: Admin raises fee")
    print_result(admin.set_fee(ledger, 250))

    section("Step 2: Deposit at the new fee")
    ledger.advance_block_height(10)
    print_result(traveler.deposit(ledger, BOOKING_ID, 1000))
    print_escrow(ledger, BOOKING_ID)

    section("Platform")
    print(f"  {PlatformStatusResponse.from_ledger(ledger).model_dump_json()}")
    print_transfers(ledger)


SCENARIOS = {
    1: scenario_1_happy_path,
    2: scenario_2_dispute_refunded,
    3: scenario_3_admin_refund,
    4: scenario_4_fee_change,
}


# ===========================================================================
# Main
# ===========================================================================
def run_all() -> None:
    """Run all scenarios sequentially."""
    for scenario in SCENARIOS.values():
        scenario()

    print("\n" + "=" * 70)
    print("  ALL SCENARIOS COMPLETED")
    print("=" * 70 + "\n")


def run_scenario(num: int) -> None:
    """Run a specific scenario."""
    if num not in SCENARIOS:
        print(f"Unknown scenario {num}. Available: {', '.join(map(str, SCENARIOS))}")
        return
    SCENARIOS[num]()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Booking Escrow Simulation")
    parser.add_argument(
        "--scenario",
        type=int,
        default=0,
        help="Run a specific scenario (1-4). Default: run all.",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Emit JSON log lines. Default: ESCROW_JSON_LOGS, or JSON outside development.",
    )
    args = parser.parse_args()

    setup_logging_from_settings(json_logs=args.json_logs)

    if args.scenario == 0:
        run_all()
    else:
        run_scenario(args.scenario)
