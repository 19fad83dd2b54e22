"""Transfer Service — records fund movements emitted by the ledger.

RecordingFundTransfer appends every transfer to an ordered log instead of
moving real balances. A production primitive would perform the payment and
would have to handle a failed transfer; the ledger does not read results.
"""

from __future__ import annotations

from booking_escrow.domain.models import Transfer
from booking_escrow.logging_config import get_logger

logger = get_logger(__name__)


class RecordingFundTransfer:
    """Fund-transfer primitive that keeps an ordered audit log."""

    def __init__(self) -> None:
        self._log: list[Transfer] = []

    def transfer(self, amount: int, sender: str, recipient: str) -> None:
        """Record a transfer of ``amount`` from ``sender`` to ``recipient``.

        Raises:
            ValueError: If the amount is not positive.
        """
        if amount <= 0:
            raise ValueError(f"Transfer amount must be positive, got {amount}")

        self._log.append(Transfer(amount=amount, sender=sender, recipient=recipient))
        logger.info(
            "transfer.recorded",
            amount=amount,
            from_account=sender,
            to_account=recipient,
            sequence=len(self._log),
        )

    @property
    def transfers(self) -> tuple[Transfer, ...]:
        return tuple(self._log)

    def clear(self) -> None:
        self._log.clear()
