from __future__ import annotations

import pytest

from smartbill.core.config import ClockSettings
from smartbill.core.exceptions import InsufficientFundsError
from smartbill.services.clock import ManualClock, WallClock, build_clock
from smartbill.services.ledger import DatabaseLedger


def test_manual_clock_only_moves_forward():
    clock = ManualClock(5)

    assert clock.advance(3) == 8
    assert clock.set(8) == 8
    with pytest.raises(ValueError):
        clock.set(7)
    with pytest.raises(ValueError):
        clock.advance(-1)
    assert clock.now() == 8


def test_wall_clock_counts_ticks_and_never_goes_back():
    readings = iter([1_200.0, 1_799.0, 600.0, 3_000.0])
    clock = WallClock(tick_seconds=600, genesis_tick=10, timer=lambda: next(readings))

    assert clock.now() == 12
    assert clock.now() == 12
    assert clock.now() == 12
    assert clock.now() == 15


def test_build_clock_selects_backend():
    assert isinstance(build_clock(ClockSettings(backend="manual", genesis_tick=7)), ManualClock)
    assert build_clock(ClockSettings(backend="manual", genesis_tick=7)).now() == 7
    assert isinstance(build_clock(ClockSettings(backend="wall")), WallClock)


@pytest.mark.asyncio
async def test_transfer_moves_balance(session):
    ledger = DatabaseLedger(session)
    await ledger.deposit("alice", 100)

    await ledger.transfer(40, "alice", "bob")

    assert await ledger.balance("alice") == 60
    assert await ledger.balance("bob") == 40


@pytest.mark.asyncio
async def test_transfer_refuses_overdraft(session):
    ledger = DatabaseLedger(session)
    await ledger.deposit("alice", 10)

    with pytest.raises(InsufficientFundsError) as exc_info:
        await ledger.transfer(11, "alice", "bob")

    assert exc_info.value.balance == 10
    assert await ledger.balance("alice") == 10
    assert await ledger.balance("bob") == 0


@pytest.mark.asyncio
async def test_transfer_to_self_is_a_no_op(session):
    ledger = DatabaseLedger(session)
    await ledger.deposit("alice", 10)

    await ledger.transfer(10, "alice", "alice")

    assert await ledger.balance("alice") == 10
