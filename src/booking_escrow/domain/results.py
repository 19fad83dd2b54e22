"""Tagged success/failure values returned by ledger operations."""

from __future__ import annotations

from dataclasses import dataclass

from booking_escrow.domain.enums import ErrorKind


@dataclass(frozen=True)
class LedgerResult:
    """Outcome of a mutating ledger operation.

    Attributes:
        ok: Whether the operation committed.
        value: True on success, None on failure.
        error: The ErrorKind on failure, None on success.
    """

    ok: bool
    value: bool | None = None
    error: ErrorKind | None = None

    @classmethod
    def success(cls) -> LedgerResult:
        return cls(ok=True, value=True)

    @classmethod
    def failure(cls, kind: ErrorKind) -> LedgerResult:
        return cls(ok=False, error=kind)

    @property
    def error_code(self) -> int | None:
        """Numeric error code, or None for a success."""
        return int(self.error) if self.error is not None else None

    def __bool__(self) -> bool:
        return self.ok
