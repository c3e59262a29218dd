"""Vesting schedule with cliff and clawback"""
import threading
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

import structlog

from disbursement.exceptions import (
    InsufficientVested,
    InvalidAmount,
    InvalidConfiguration,
    InvalidDestination,
    TransferFailed,
    Unauthorized,
)
from disbursement.models.ledger import FungibleTokenLedger
from disbursement.services.clock import Clock, SystemClock

logger = structlog.get_logger()


class SchedulePhase(str, Enum):
    """Where a schedule sits in its lifecycle"""
    UNFUNDED = "unfunded"
    FUNDED = "funded"
    PARTIALLY_VESTED = "partially_vested"
    PARTIALLY_WITHDRAWN = "partially_withdrawn"
    DRAINED = "drained"


class DisbursementKind(str, Enum):
    WITHDRAW = "withdraw"
    RECLAIM = "reclaim"


@dataclass
class Disbursement:
    """A completed movement of tokens out of a schedule"""
    kind: DisbursementKind
    caller: str
    destination: str
    amount: int
    timestamp: int


@dataclass
class ScheduleSnapshot:
    """Point-in-time view of a schedule, all values read at ``timestamp``"""
    address: str
    receiver: str
    controller: str
    start_date: int
    cliff_date: int
    disbursement_period: int
    withdrawn_tokens: int
    reclaimed_tokens: int
    balance: int
    total_allocated: int
    max_withdraw: int
    phase: SchedulePhase
    timestamp: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class VestingSchedule:
    """Linear token disbursement with a cliff and a controller clawback.

    The funded amount is never stored. Total allocation is always
    ``withdrawn_tokens + balance``, so once the controller drains the
    balance the allocation collapses to what the receiver already took and
    nothing further can ever vest.

    Roles are flat: ``receiver`` may withdraw vested tokens to any
    destination other than the schedule itself, ``controller`` may reclaim
    the whole remaining balance at any time.
    """

    def __init__(
        self,
        receiver: str,
        controller: str,
        disbursement_period: int,
        start_date: Optional[int],
        cliff_date: Optional[int],
        token_ledger: FungibleTokenLedger,
        *,
        address: str,
        clock: Optional[Clock] = None,
    ):
        if not receiver:
            raise InvalidConfiguration("Receiver is required")
        if not controller:
            raise InvalidConfiguration("Controller wallet is required")
        if not address:
            raise InvalidConfiguration("Schedule address is required")
        if token_ledger is None:
            raise InvalidConfiguration("Token ledger is required")
        if disbursement_period <= 0:
            raise InvalidConfiguration("Disbursement period must be positive")

        self.clock = clock or SystemClock()

        # A missing start date means vesting starts now, a missing cliff means no cliff
        if start_date is None:
            start_date = self.clock.now()
        if cliff_date is None:
            cliff_date = start_date

        if start_date < 0:
            raise InvalidConfiguration("Start date cannot be negative")
        if cliff_date < start_date:
            raise InvalidConfiguration("Cliff date cannot be before start date")

        self.receiver = receiver
        self.controller = controller
        self.disbursement_period = disbursement_period
        self.start_date = start_date
        self.cliff_date = cliff_date
        self.token_ledger = token_ledger
        self.address = address

        self.withdrawn_tokens = 0
        self.reclaimed_tokens = 0  # Informational only, never part of the vesting formula
        self.history: List[Disbursement] = []

        self._lock = threading.RLock()

    @property
    def wallet(self) -> str:
        return self.controller

    def balance(self) -> int:
        """Tokens the schedule currently holds on the ledger"""
        return self.token_ledger.balance_of(self.address)

    def total_allocated(self) -> int:
        with self._lock:
            return self.withdrawn_tokens + self.balance()

    def _max_withdraw_at(self, now: int) -> int:
        if now < self.cliff_date:
            return 0

        balance = self.balance()
        total = self.withdrawn_tokens + balance

        elapsed = min(max(now - self.start_date, 0), self.disbursement_period)
        vested = total * elapsed // self.disbursement_period
        entitlement = max(vested - self.withdrawn_tokens, 0)

        # Never promise more than the ledger actually holds
        return min(entitlement, balance)

    def calc_max_withdraw(self) -> int:
        """Amount the receiver may withdraw right now"""
        with self._lock:
            return self._max_withdraw_at(self.clock.now())

    def withdraw(self, caller: str, destination: str, amount: int) -> Disbursement:
        """Send ``amount`` vested tokens to ``destination``.

        Only the receiver may call this. The counter is only incremented
        after the ledger confirms the transfer.
        """
        if caller != self.receiver:
            logger.warning("Rejected withdraw from non-receiver", schedule=self.address, caller=caller)
            raise Unauthorized("Only the receiver can withdraw")
        if amount < 0:
            raise InvalidAmount("Withdraw amount cannot be negative")
        if destination == self.address:
            raise InvalidDestination("Cannot withdraw to the schedule's own address")

        with self._lock:
            now = self.clock.now()
            allowed = self._max_withdraw_at(now)
            if amount > allowed:
                logger.warning(
                    "Rejected withdraw above entitlement",
                    schedule=self.address,
                    amount=amount,
                    allowed=allowed,
                )
                raise InsufficientVested("Withdraw amount exceeds allowed tokens")

            if not self.token_ledger.transfer(self.address, destination, amount):
                raise TransferFailed(f"Ledger refused transfer of {amount} tokens to {destination}")

            self.withdrawn_tokens += amount
            record = Disbursement(
                kind=DisbursementKind.WITHDRAW,
                caller=caller,
                destination=destination,
                amount=amount,
                timestamp=now,
            )
            self.history.append(record)

        logger.info(
            "Withdrew vested tokens",
            schedule=self.address,
            destination=destination,
            amount=amount,
            withdrawn_tokens=self.withdrawn_tokens,
        )
        return record

    def reclaim(self, caller: str) -> Disbursement:
        """Move the entire remaining balance back to the controller.

        Unvested tokens are included. Reclaiming an empty schedule is a
        zero-amount no-op.
        """
        if caller != self.controller:
            logger.warning("Rejected reclaim from non-controller", schedule=self.address, caller=caller)
            raise Unauthorized("Only the controller wallet can reclaim")

        with self._lock:
            now = self.clock.now()
            amount = self.balance()

            if not self.token_ledger.transfer(self.address, self.controller, amount):
                raise TransferFailed(f"Ledger refused transfer of {amount} tokens to {self.controller}")

            self.reclaimed_tokens += amount
            record = Disbursement(
                kind=DisbursementKind.RECLAIM,
                caller=caller,
                destination=self.controller,
                amount=amount,
                timestamp=now,
            )
            self.history.append(record)

        logger.info("Reclaimed schedule balance", schedule=self.address, controller=self.controller, amount=amount)
        return record

    wallet_withdraw = reclaim

    def _phase_at(self, now: int) -> SchedulePhase:
        if self.balance() == 0:
            if self.withdrawn_tokens == 0 and self.reclaimed_tokens == 0:
                return SchedulePhase.UNFUNDED
            return SchedulePhase.DRAINED
        if self._max_withdraw_at(now) > 0:
            return SchedulePhase.PARTIALLY_VESTED
        if self.withdrawn_tokens > 0:
            return SchedulePhase.PARTIALLY_WITHDRAWN
        return SchedulePhase.FUNDED

    def phase(self) -> SchedulePhase:
        with self._lock:
            return self._phase_at(self.clock.now())

    def snapshot(self) -> ScheduleSnapshot:
        with self._lock:
            now = self.clock.now()
            balance = self.balance()
            return ScheduleSnapshot(
                address=self.address,
                receiver=self.receiver,
                controller=self.controller,
                start_date=self.start_date,
                cliff_date=self.cliff_date,
                disbursement_period=self.disbursement_period,
                withdrawn_tokens=self.withdrawn_tokens,
                reclaimed_tokens=self.reclaimed_tokens,
                balance=balance,
                total_allocated=self.withdrawn_tokens + balance,
                max_withdraw=self._max_withdraw_at(now),
                phase=self._phase_at(now),
                timestamp=now,
            )

    def __repr__(self):
        return f"<VestingSchedule {self.address[:10]}... receiver={self.receiver[:10]}...>"
