"""Escrow Ledger — core business logic for the booking escrow lifecycle.

This is the application layer that coordinates between:
    - Domain state machine (transition guard)
    - Booking validator (deposit authorization)
    - Fund-transfer primitive (money movement)
    - Event trail (audit log)

Every mutating operation is atomic and returns a LedgerResult. Guard helpers
raise LedgerError subclasses; the operation boundary converts them into a
failed result carrying the error kind, so business rule violations never
escape as exceptions.

Precondition checks run in a fixed order (existence, authorization, status,
dispute) and the first failing check decides the error kind.
"""

from __future__ import annotations

import functools
import inspect
import threading
from dataclasses import replace
from typing import TYPE_CHECKING, Any

import structlog
from statemachine.exceptions import TransitionNotAllowed

from booking_escrow.domain.enums import BookingStatus, EscrowStatus, EventType
from booking_escrow.domain.exceptions import (
    AlreadyDepositedError,
    DisputeActiveError,
    InvalidAmountError,
    InvalidBookingError,
    InvalidFeeError,
    InvalidStatusError,
    LedgerError,
    NoActiveDisputeError,
    NoDepositError,
    NotAdminError,
    NotAuthorizedError,
)
from booking_escrow.domain.models import EscrowRecord, LedgerEvent, Transfer
from booking_escrow.domain.results import LedgerResult
from booking_escrow.domain.state_machine import EscrowStateMachine, lifecycle_state
from booking_escrow.logging_config import get_logger
from booking_escrow.services.booking_service import (
    BookingContractRegistry,
    RegistryBookingValidator,
)
from booking_escrow.services.transfer_service import RecordingFundTransfer

if TYPE_CHECKING:
    from collections.abc import Callable

    from booking_escrow.config import Settings
    from booking_escrow.domain.collaborator_protocol import BookingValidator, FundTransfer

logger = get_logger(__name__)


def ledger_operation(name: str) -> Callable[[Callable[..., None]], Callable[..., LedgerResult]]:
    """Run a mutating operation atomically and return its LedgerResult.

    The wrapped method signals failure by raising LedgerError and success by
    returning normally. The operation name, caller and booking id (when the
    method takes one) are bound to the structlog context for the duration of
    the call.
    """

    def decorator(method: Callable[..., None]) -> Callable[..., LedgerResult]:
        signature = inspect.signature(method)
        context_keys = [k for k in ("booking_id", "caller") if k in signature.parameters]

        @functools.wraps(method)
        def wrapper(self: EscrowLedger, *args: Any, **kwargs: Any) -> LedgerResult:
            arguments = signature.bind(self, *args, **kwargs).arguments
            context = {k: arguments[k] for k in context_keys if k in arguments}
            with self._lock, structlog.contextvars.bound_contextvars(operation=name, **context):
                try:
                    method(self, *args, **kwargs)
                except LedgerError as exc:
                    logger.info(
                        "escrow.rejected",
                        error=exc.kind.name,
                        code=exc.code,
                        detail=exc.message,
                    )
                    return LedgerResult.failure(exc.kind)
            return LedgerResult.success()

        return wrapper

    return decorator


class EscrowLedger:
    """Holds escrow records keyed by booking id and enforces their lifecycle."""

    def __init__(
        self,
        admin: str,
        platform_fee: int,
        *,
        validator: BookingValidator | None = None,
        transfers: FundTransfer | None = None,
        registry: BookingContractRegistry | None = None,
        holding_account: str = "contract",
        block_height: int = 0,
    ) -> None:
        if platform_fee <= 0:
            raise ValueError(f"Initial platform fee must be positive, got {platform_fee}")
        if block_height < 0:
            raise ValueError(f"Block height cannot be negative, got {block_height}")

        self._admin = admin
        self._platform_fee = platform_fee
        self._holding_account = holding_account
        self._block_height = block_height
        self._registry = registry if registry is not None else BookingContractRegistry()
        self._validator = (
            validator if validator is not None else RegistryBookingValidator(self._registry)
        )
        self._transfers = transfers if transfers is not None else RecordingFundTransfer()
        self._escrows: dict[int, EscrowRecord] = {}
        self._events: list[LedgerEvent] = []
        self._lock = threading.RLock()

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        validator: BookingValidator | None = None,
        transfers: FundTransfer | None = None,
    ) -> EscrowLedger:
        """Build a ledger from application settings."""
        if settings is None:
            from booking_escrow.config import get_settings

            settings = get_settings()

        registry = BookingContractRegistry()
        if validator is None:
            validator = RegistryBookingValidator(
                registry,
                contract_id=settings.booking_contract_id,
                guide=settings.default_guide,
            )
        return cls(
            admin=settings.admin,
            platform_fee=settings.platform_fee,
            validator=validator,
            transfers=transfers,
            registry=registry,
            holding_account=settings.holding_account,
            block_height=settings.initial_block_height,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def admin(self) -> str:
        return self._admin

    @property
    def holding_account(self) -> str:
        return self._holding_account

    @property
    def block_height(self) -> int:
        return self._block_height

    @property
    def transfers(self) -> tuple[Transfer, ...]:
        """Transfers emitted so far, when the transfer primitive records them."""
        return tuple(getattr(self._transfers, "transfers", ()))

    @property
    def events(self) -> tuple[LedgerEvent, ...]:
        with self._lock:
            return tuple(self._events)

    # ------------------------------------------------------------------
    # Logical clock
    # ------------------------------------------------------------------

    def advance_block_height(self, blocks: int = 1) -> int:
        """Move the logical clock forward and return the new height."""
        if blocks <= 0:
            raise ValueError(f"Block height can only move forward, got step {blocks}")
        with self._lock:
            self._block_height += blocks
            return self._block_height

    # ------------------------------------------------------------------
    # Deposit
    # ------------------------------------------------------------------

    @ledger_operation("deposit_payment")
    def deposit_payment(self, booking_id: int, gross_amount: int, caller: str) -> None:
        """Take a traveler's payment into escrow for a booking.

        The platform fee is read when the deposit happens, so a fee change
        made after the booking was created still applies to this deposit.
        The fee goes to the admin and the remainder to the holding account.
        """
        if booking_id in self._escrows:
            raise AlreadyDepositedError(booking_id)
        if gross_amount <= 0:
            raise InvalidAmountError(gross_amount)

        fee = self._platform_fee
        net = gross_amount - fee
        if net <= 0:
            raise InvalidAmountError(gross_amount, fee=fee)

        validation = self._validator.validate(booking_id)
        if not validation.is_valid or validation.booking is None:
            raise InvalidBookingError(booking_id, validation.error or "")
        booking = validation.booking
        if booking.status != BookingStatus.CONFIRMED:
            raise InvalidBookingError(booking_id, f"booking is {booking.status}")

        self._transfers.transfer(fee, caller, self._admin)
        self._transfers.transfer(net, caller, self._holding_account)

        self._escrows[booking_id] = EscrowRecord(
            traveler=caller,
            guide=booking.guide,
            amount=net,
            status=EscrowStatus.DEPOSITED,
            dispute_active=False,
            deposit_time=self._block_height,
            fee_amount=fee,
        )
        self._record_event(
            EventType.ESCROW_DEPOSITED,
            actor=caller,
            booking_id=booking_id,
            new_status=EscrowStatus.DEPOSITED.value,
            metadata={"gross_amount": gross_amount, "fee": fee, "guide": booking.guide},
        )
        logger.info(
            "escrow.deposited",
            booking_id=booking_id,
            traveler=caller,
            guide=booking.guide,
            amount=net,
            fee=fee,
        )

    # ------------------------------------------------------------------
    # Settlement
    # ------------------------------------------------------------------

    @ledger_operation("release_payment")
    def release_payment(self, booking_id: int, caller: str) -> None:
        """Traveler releases the held amount to the guide."""
        record = self._get_record_or_raise(booking_id)
        if caller != record.traveler:
            raise NotAuthorizedError(booking_id, caller)
        self._require_settleable(booking_id, record, "release")

        self._settle(
            booking_id,
            record,
            event_name="release",
            recipient=record.guide,
            event_type=EventType.PAYMENT_RELEASED,
            actor=caller,
        )

    @ledger_operation("refund_payment")
    def refund_payment(self, booking_id: int, caller: str) -> None:
        """Traveler or admin returns the held amount to the traveler."""
        record = self._get_record_or_raise(booking_id)
        if caller not in (record.traveler, self._admin):
            raise NotAuthorizedError(booking_id, caller)
        self._require_settleable(booking_id, record, "refund")

        self._settle(
            booking_id,
            record,
            event_name="refund",
            recipient=record.traveler,
            event_type=EventType.PAYMENT_REFUNDED,
            actor=caller,
        )

    # ------------------------------------------------------------------
    # Disputes
    # ------------------------------------------------------------------

    @ledger_operation("flag_dispute")
    def flag_dispute(self, booking_id: int, caller: str) -> None:
        """Traveler freezes the escrow until the admin resolves it."""
        record = self._get_record_or_raise(booking_id)
        if caller != record.traveler:
            raise NotAuthorizedError(booking_id, caller)
        self._require_settleable(booking_id, record, "flag_dispute")

        new_state = self._fire_transition(booking_id, record, "flag_dispute")
        self._escrows[booking_id] = replace(record, dispute_active=True)

        self._record_event(
            EventType.DISPUTE_RAISED,
            actor=caller,
            booking_id=booking_id,
            old_status=lifecycle_state(record),
            new_status=new_state,
        )
        logger.info("escrow.dispute_raised", booking_id=booking_id, by=caller)

    @ledger_operation("resolve_dispute")
    def resolve_dispute(self, booking_id: int, caller: str, release_to_guide: bool) -> None:
        """Admin settles a disputed escrow in favour of the guide or the traveler."""
        record = self._get_record_or_raise(booking_id)
        if caller != self._admin:
            raise NotAuthorizedError(booking_id, caller)
        if not record.dispute_active:
            raise NoActiveDisputeError(booking_id)
        if record.status != EscrowStatus.DEPOSITED:
            raise InvalidStatusError(booking_id, record.status, "resolve_dispute")

        if release_to_guide:
            event_name, recipient = "resolve_for_guide", record.guide
            event_type = EventType.DISPUTE_RESOLVED_GUIDE
        else:
            event_name, recipient = "resolve_for_traveler", record.traveler
            event_type = EventType.DISPUTE_RESOLVED_TRAVELER

        self._settle(
            booking_id,
            record,
            event_name=event_name,
            recipient=recipient,
            event_type=event_type,
            actor=caller,
        )

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    @ledger_operation("set_platform_fee")
    def set_platform_fee(self, caller: str, fee: int) -> None:
        """Admin changes the fee applied to subsequent deposits."""
        self._require_admin(caller)
        if fee <= 0:
            raise InvalidFeeError(fee)

        old_fee = self._platform_fee
        self._platform_fee = fee
        self._record_event(
            EventType.PLATFORM_FEE_CHANGED,
            actor=caller,
            metadata={"old_fee": old_fee, "new_fee": fee},
        )
        logger.info("escrow.platform_fee_changed", old_fee=old_fee, new_fee=fee)

    @ledger_operation("set_booking_contract")
    def set_booking_contract(self, caller: str, contract_id: int, address: str) -> None:
        """Admin registers or replaces a booking contract address."""
        self._require_admin(caller)

        previous = self._registry.get(contract_id)
        self._registry.register(contract_id, address)
        self._record_event(
            EventType.BOOKING_CONTRACT_SET,
            actor=caller,
            metadata={"contract_id": contract_id, "address": address, "previous": previous},
        )
        logger.info(
            "escrow.booking_contract_set",
            contract_id=contract_id,
            address=address,
            replaced=previous is not None,
        )

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    def get_escrow_details(self, booking_id: int) -> EscrowRecord | None:
        with self._lock:
            return self._escrows.get(booking_id)

    def get_platform_fee(self) -> int:
        with self._lock:
            return self._platform_fee

    def get_booking_contract(self, contract_id: int) -> str | None:
        with self._lock:
            return self._registry.get(contract_id)

    def get_booking_contracts(self) -> dict[int, str]:
        with self._lock:
            return self._registry.as_dict()

    def get_status(self, booking_id: int) -> dict | None:
        """Get an escrow's status with the lifecycle events allowed next."""
        with self._lock:
            record = self._escrows.get(booking_id)
        if record is None:
            return None
        sm = EscrowStateMachine(current_status=lifecycle_state(record))
        return {
            "booking_id": booking_id,
            "status": record.status.value,
            "dispute_active": record.dispute_active,
            "lifecycle_state": sm.status,
            "allowed_events": sm.get_allowed_events(),
        }

    def get_events(self, booking_id: int | None = None) -> list[LedgerEvent]:
        """Get the audit trail, optionally for a single booking."""
        with self._lock:
            if booking_id is None:
                return list(self._events)
            return [e for e in self._events if e.booking_id == booking_id]

    def escrow_count(self) -> int:
        with self._lock:
            return len(self._escrows)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _get_record_or_raise(self, booking_id: int) -> EscrowRecord:
        record = self._escrows.get(booking_id)
        if record is None:
            raise NoDepositError(booking_id)
        return record

    def _require_admin(self, caller: str) -> None:
        if caller != self._admin:
            raise NotAdminError(caller)

    def _require_settleable(self, booking_id: int, record: EscrowRecord, attempted: str) -> None:
        """Status check, then dispute check, for traveler-driven transitions."""
        if record.status != EscrowStatus.DEPOSITED:
            raise InvalidStatusError(booking_id, record.status, attempted)
        if record.dispute_active:
            raise DisputeActiveError(booking_id)

    def _settle(
        self,
        booking_id: int,
        record: EscrowRecord,
        *,
        event_name: str,
        recipient: str,
        event_type: EventType,
        actor: str,
    ) -> None:
        """Move a record to its terminal status and pay out the held amount."""
        new_status = EscrowStatus(self._fire_transition(booking_id, record, event_name))
        self._escrows[booking_id] = replace(record, status=new_status, dispute_active=False)
        self._transfers.transfer(record.amount, self._holding_account, recipient)

        self._record_event(
            event_type,
            actor=actor,
            booking_id=booking_id,
            old_status=lifecycle_state(record),
            new_status=new_status.value,
            metadata={"amount": record.amount, "recipient": recipient},
        )
        logger.info(
            "escrow.settled",
            booking_id=booking_id,
            status=new_status.value,
            amount=record.amount,
            recipient=recipient,
            by=actor,
        )

    def _fire_transition(self, booking_id: int, record: EscrowRecord, event_name: str) -> str:
        """Validate and fire a state machine transition, returning the new state.

        Raises InvalidStatusError if the transition is illegal.
        """
        current = lifecycle_state(record)
        sm = EscrowStateMachine(current_status=current)
        try:
            sm.send(event_name)
        except TransitionNotAllowed as err:
            raise InvalidStatusError(booking_id, current, event_name) from err
        return sm.status

    def _record_event(
        self,
        event_type: EventType,
        *,
        actor: str,
        booking_id: int | None = None,
        old_status: str | None = None,
        new_status: str | None = None,
        metadata: dict | None = None,
    ) -> None:
        self._events.append(
            LedgerEvent(
                sequence=len(self._events) + 1,
                event_type=event_type,
                actor=actor,
                block_height=self._block_height,
                booking_id=booking_id,
                old_status=old_status,
                new_status=new_status,
                metadata=metadata or {},
            )
        )
