"""Schedule registry: owns the token ledger, the clock and every schedule."""
import secrets
import threading
from typing import Dict, List, Optional

import structlog

from disbursement.config import Settings, get_settings
from disbursement.exceptions import InvalidAmount, ScheduleNotFound
from disbursement.models.ledger import InMemoryTokenLedger
from disbursement.models.vesting import VestingSchedule
from disbursement.services.clock import Clock, ManualClock, SystemClock

logger = structlog.get_logger()


def new_address() -> str:
    """Random 20-byte hex account address"""
    return "0x" + secrets.token_hex(20)


class ScheduleRegistry:
    """
    Process-local home for vesting schedules.

    Every schedule created here shares the registry's ledger and clock and
    gets a fresh holding address on that ledger.
    """

    def __init__(self, ledger: InMemoryTokenLedger, clock: Clock):
        self.ledger = ledger
        self.clock = clock
        self._schedules: Dict[str, VestingSchedule] = {}
        self._lock = threading.Lock()

    def create_schedule(
        self,
        receiver: str,
        controller: str,
        disbursement_period: int,
        start_date: Optional[int] = None,
        cliff_date: Optional[int] = None,
    ) -> VestingSchedule:
        """Create an unfunded schedule. Funding is a separate ledger action."""
        schedule = VestingSchedule(
            receiver,
            controller,
            disbursement_period,
            start_date,
            cliff_date,
            self.ledger,
            address=new_address(),
            clock=self.clock,
        )

        with self._lock:
            self._schedules[schedule.address] = schedule

        logger.info(
            "Created vesting schedule",
            schedule=schedule.address,
            receiver=receiver,
            controller=controller,
            start_date=schedule.start_date,
            cliff_date=schedule.cliff_date,
            disbursement_period=disbursement_period,
        )
        return schedule

    def get(self, address: str) -> VestingSchedule:
        with self._lock:
            schedule = self._schedules.get(address)
        if schedule is None:
            raise ScheduleNotFound(f"Vesting schedule {address} not found")
        return schedule

    def is_schedule(self, address: str) -> bool:
        with self._lock:
            return address in self._schedules

    def list(self) -> List[VestingSchedule]:
        with self._lock:
            return list(self._schedules.values())

    def fund(self, address: str, amount: int) -> VestingSchedule:
        """Mint ``amount`` tokens straight onto a schedule's holding address"""
        schedule = self.get(address)
        if amount <= 0:
            raise InvalidAmount("Funding amount must be positive")
        self.ledger.mint(schedule.address, amount)
        logger.info("Funded vesting schedule", schedule=address, amount=amount)
        return schedule


def build_clock(settings: Settings) -> Clock:
    if settings.clock_mode == "manual":
        return ManualClock(start=settings.manual_clock_start)
    if settings.clock_mode == "system":
        return SystemClock()
    raise ValueError(f"Unknown clock mode: {settings.clock_mode}")


# Singleton instance
_registry: Optional[ScheduleRegistry] = None


def get_registry() -> ScheduleRegistry:
    """Get or create the singleton registry."""
    global _registry
    if _registry is None:
        settings = get_settings()
        ledger = InMemoryTokenLedger(
            name=settings.token_name,
            symbol=settings.token_symbol,
            decimals=settings.token_decimals,
        )
        _registry = ScheduleRegistry(ledger=ledger, clock=build_clock(settings))
        logger.info("Schedule registry initialized", token=settings.token_symbol, clock=settings.clock_mode)
    return _registry


def reset_registry():
    """Drop the singleton registry and every schedule in it."""
    global _registry
    _registry = None
