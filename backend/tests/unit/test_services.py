"""Unit tests for the clock and schedule registry"""
import time

import pytest

from disbursement.config import Settings
from disbursement.exceptions import InvalidAmount, InvalidConfiguration, ScheduleNotFound
from disbursement.services.clock import ManualClock, SystemClock
from disbursement.services.registry import (
    build_clock,
    get_registry,
    new_address,
    reset_registry,
)

from tests.constants import CONTROLLER, ONE_YEAR, RECEIVER


class TestClocks:
    """Tests for time sources"""

    def test_system_clock_follows_wall_time(self):
        before = int(time.time())
        now = SystemClock().now()
        assert before <= now <= int(time.time())

    def test_manual_clock_advance(self):
        clock = ManualClock(start=1000)
        assert clock.now() == 1000
        assert clock.advance(50) == 1050
        assert clock.now() == 1050

    def test_manual_clock_set(self):
        clock = ManualClock(start=1000)
        clock.set(5000)
        assert clock.now() == 5000

    def test_manual_clock_never_moves_backwards(self):
        clock = ManualClock(start=1000)
        with pytest.raises(ValueError):
            clock.set(999)
        with pytest.raises(ValueError):
            clock.advance(-1)
        assert clock.now() == 1000

    def test_manual_clock_defaults_to_now(self):
        before = int(time.time())
        assert ManualClock().now() >= before

    def test_build_clock_modes(self):
        assert isinstance(build_clock(Settings(clock_mode="system")), SystemClock)
        clock = build_clock(Settings(clock_mode="manual", manual_clock_start=42))
        assert isinstance(clock, ManualClock)
        assert clock.now() == 42

    def test_build_clock_unknown_mode(self):
        with pytest.raises(ValueError):
            build_clock(Settings(clock_mode="lunar"))


class TestScheduleRegistry:
    """Tests for schedule creation and lookup"""

    def test_address_format(self):
        address = new_address()
        assert address.startswith("0x")
        assert len(address) == 42
        int(address, 16)

    def test_create_assigns_unique_addresses(self, registry):
        first = registry.create_schedule(RECEIVER, CONTROLLER, ONE_YEAR)
        second = registry.create_schedule(RECEIVER, CONTROLLER, ONE_YEAR)
        assert first.address != second.address
        assert registry.list() == [first, second]

    def test_schedules_share_ledger_and_clock(self, registry, ledger, clock):
        schedule = registry.create_schedule(RECEIVER, CONTROLLER, ONE_YEAR)
        assert schedule.token_ledger is ledger
        assert schedule.clock is clock
        assert schedule.start_date == clock.now()

    def test_invalid_schedule_not_registered(self, registry):
        with pytest.raises(InvalidConfiguration):
            registry.create_schedule(RECEIVER, CONTROLLER, 0)
        assert registry.list() == []

    def test_get(self, registry, schedule):
        assert registry.get(schedule.address) is schedule

    def test_is_schedule(self, registry, schedule):
        assert registry.is_schedule(schedule.address) is True
        assert registry.is_schedule(RECEIVER) is False

    def test_get_unknown(self, registry):
        with pytest.raises(ScheduleNotFound):
            registry.get("0xdeadbeef")

    def test_fund_mints_onto_schedule(self, registry, schedule, ledger):
        registry.fund(schedule.address, 1000)
        assert schedule.balance() == 1000
        assert ledger.total_supply == 1000

    @pytest.mark.parametrize("amount", [0, -10])
    def test_fund_requires_positive_amount(self, registry, schedule, amount):
        with pytest.raises(InvalidAmount):
            registry.fund(schedule.address, amount)

    def test_fund_unknown_schedule(self, registry):
        with pytest.raises(ScheduleNotFound):
            registry.fund("0xdeadbeef", 10)

    def test_singleton(self):
        reset_registry()
        try:
            registry = get_registry()
            assert get_registry() is registry
            reset_registry()
            assert get_registry() is not registry
        finally:
            reset_registry()
