"""Pydantic read schemas."""

from booking_escrow.schemas.escrow import (
    EscrowDetailsResponse,
    LedgerEventResponse,
    OperationResponse,
    PlatformStatusResponse,
    TransferResponse,
)

__all__ = [
    "EscrowDetailsResponse",
    "LedgerEventResponse",
    "OperationResponse",
    "PlatformStatusResponse",
    "TransferResponse",
]
