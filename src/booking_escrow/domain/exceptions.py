"""Domain exceptions for the booking escrow ledger.

Guard helpers inside the ledger raise these to abort an operation. The
ledger's public boundary catches them and turns them into a failed
LedgerResult carrying the exception's ErrorKind, so callers only ever see
typed results for business rule violations.
"""

from __future__ import annotations

from booking_escrow.domain.enums import ErrorKind


class LedgerError(Exception):
    """Base exception for all business rule violations."""

    kind: ErrorKind = ErrorKind.INVALID_STATUS

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    @property
    def code(self) -> int:
        return int(self.kind)


# --- Authorization Errors ---


class NotAuthorizedError(LedgerError):
    """Raised when the caller may not act on this escrow."""

    kind = ErrorKind.NOT_AUTHORIZED

    def __init__(self, booking_id: int, caller: str) -> None:
        super().__init__(f"Caller {caller} is not authorized for booking {booking_id}")
        self.booking_id = booking_id
        self.caller = caller


class NotAdminError(LedgerError):
    """Raised when a configuration change is attempted by a non-admin."""

    kind = ErrorKind.NOT_ADMIN

    def __init__(self, caller: str) -> None:
        super().__init__(f"Caller {caller} is not the administrator")
        self.caller = caller


# --- Escrow Record Errors ---


class AlreadyDepositedError(LedgerError):
    """Raised when a booking already has an escrow record."""

    kind = ErrorKind.ALREADY_DEPOSITED

    def __init__(self, booking_id: int) -> None:
        super().__init__(f"Escrow already deposited for booking {booking_id}")
        self.booking_id = booking_id


class NoDepositError(LedgerError):
    """Raised when a booking has no escrow record."""

    kind = ErrorKind.NO_DEPOSIT

    def __init__(self, booking_id: int) -> None:
        super().__init__(f"No deposit for booking {booking_id}")
        self.booking_id = booking_id


class InvalidStatusError(LedgerError):
    """Raised when the record is not in the status a transition requires.

    Example: releasing an escrow that was already refunded.
    """

    kind = ErrorKind.INVALID_STATUS

    def __init__(self, booking_id: int, current_status: str, attempted: str) -> None:
        super().__init__(
            f"Invalid transition for booking {booking_id}: {attempted} from {current_status}"
        )
        self.booking_id = booking_id
        self.current_status = current_status
        self.attempted = attempted


# --- Dispute Errors ---


class DisputeActiveError(LedgerError):
    """Raised when a dispute is already flagged on the escrow."""

    kind = ErrorKind.DISPUTE_ACTIVE

    def __init__(self, booking_id: int) -> None:
        super().__init__(f"Dispute active for booking {booking_id}")
        self.booking_id = booking_id


class NoActiveDisputeError(LedgerError):
    """Raised when resolving an escrow that has no dispute.

    Shares the DISPUTE_ACTIVE code with DisputeActiveError.
    """

    kind = ErrorKind.DISPUTE_ACTIVE

    def __init__(self, booking_id: int) -> None:
        super().__init__(f"No active dispute for booking {booking_id}")
        self.booking_id = booking_id


# --- Input Errors ---


class InvalidAmountError(LedgerError):
    """Raised for a non-positive deposit or a deposit the fee would consume."""

    kind = ErrorKind.INVALID_AMOUNT

    def __init__(self, amount: int, fee: int | None = None) -> None:
        if fee is None:
            message = f"Deposit amount must be positive, got {amount}"
        else:
            message = f"Deposit amount {amount} does not exceed platform fee {fee}"
        super().__init__(message)
        self.amount = amount
        self.fee = fee


class InvalidFeeError(LedgerError):
    """Raised when the platform fee would be set to a non-positive value."""

    kind = ErrorKind.INVALID_FEE

    def __init__(self, fee: int) -> None:
        super().__init__(f"Platform fee must be positive, got {fee}")
        self.fee = fee


class InvalidBookingError(LedgerError):
    """Raised when the booking validator rejects a booking."""

    kind = ErrorKind.INVALID_BOOKING

    def __init__(self, booking_id: int, reason: str = "") -> None:
        super().__init__(f"Booking {booking_id} failed validation: {reason or 'rejected'}")
        self.booking_id = booking_id
        self.reason = reason
