"""Pydantic schemas for reading ledger state.

These schemas define the serialized shapes of escrow records, transfers,
audit events and operation results. They are separate from the domain
dataclasses to keep a clean boundary between the ledger and whatever
reports on it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from booking_escrow.domain.models import EscrowRecord, LedgerEvent
    from booking_escrow.domain.results import LedgerResult
    from booking_escrow.services.ledger_service import EscrowLedger


class EscrowDetailsResponse(BaseModel):
    """Serialized escrow record."""

    model_config = ConfigDict(from_attributes=True)

    booking_id: int
    traveler: str
    guide: str
    amount: int = Field(gt=0, description="Net amount held after the platform fee")
    status: str
    dispute_active: bool
    deposit_time: int = Field(ge=0, description="Block height of the deposit")
    fee_amount: int = Field(ge=0)
    gross_amount: int = Field(gt=0, description="Amount originally deposited")

    @classmethod
    def from_record(cls, booking_id: int, record: EscrowRecord) -> EscrowDetailsResponse:
        return cls(
            booking_id=booking_id,
            traveler=record.traveler,
            guide=record.guide,
            amount=record.amount,
            status=record.status.value,
            dispute_active=record.dispute_active,
            deposit_time=record.deposit_time,
            fee_amount=record.fee_amount,
            gross_amount=record.gross_amount,
        )


class TransferResponse(BaseModel):
    """Serialized fund transfer."""

    model_config = ConfigDict(from_attributes=True)

    amount: int
    sender: str
    recipient: str


class LedgerEventResponse(BaseModel):
    """Serialized audit event."""

    model_config = ConfigDict(from_attributes=True)

    sequence: int
    event_type: str
    actor: str
    block_height: int
    booking_id: int | None = None
    old_status: str | None = None
    new_status: str | None = None
    metadata: dict = Field(default_factory=dict)

    @classmethod
    def from_event(cls, event: LedgerEvent) -> LedgerEventResponse:
        return cls(
            sequence=event.sequence,
            event_type=event.event_type.value,
            actor=event.actor,
            block_height=event.block_height,
            booking_id=event.booking_id,
            old_status=event.old_status,
            new_status=event.new_status,
            metadata=dict(event.metadata),
        )


class OperationResponse(BaseModel):
    """Serialized outcome of a mutating ledger operation."""

    ok: bool
    error_code: int | None = None
    error_name: str | None = None

    @classmethod
    def from_result(cls, result: LedgerResult) -> OperationResponse:
        return cls(
            ok=result.ok,
            error_code=result.error_code,
            error_name=result.error.name if result.error is not None else None,
        )


class PlatformStatusResponse(BaseModel):
    """Process-wide ledger configuration and counters."""

    admin: str
    platform_fee: int = Field(gt=0)
    holding_account: str
    block_height: int
    booking_contracts: dict[int, str] = Field(default_factory=dict)
    escrow_count: int = 0

    @classmethod
    def from_ledger(cls, ledger: EscrowLedger) -> PlatformStatusResponse:
        return cls(
            admin=ledger.admin,
            platform_fee=ledger.get_platform_fee(),
            holding_account=ledger.holding_account,
            block_height=ledger.block_height,
            booking_contracts=ledger.get_booking_contracts(),
            escrow_count=ledger.escrow_count(),
        )
