"""Serialized entry point for every billing operation."""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from smartbill.core.exceptions import BillingError
from smartbill.db.models.enrollment import Enrollment
from smartbill.db.models.plan import Plan
from smartbill.services.clock import Clock
from smartbill.services.ledger import DatabaseLedger, Ledger
from smartbill.services.payment_processor import PaymentProcessor
from smartbill.services.plan_registry import PlanRegistry
from smartbill.services.subscription_ledger import SubscriptionLedger


logger = logging.getLogger(__name__)

LedgerFactory = Callable[[AsyncSession], Ledger]


class BillingEngine:
    """
    Runs billing operations one at a time.

    Mutations hold the engine lock from the first read until the commit, so
    no two operations interleave. A failed operation is rolled back whole,
    including any fund movement it made.
    """

    def __init__(self, clock: Clock, ledger_factory: LedgerFactory = DatabaseLedger) -> None:
        self.clock = clock
        self.ledger_factory = ledger_factory
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def _serialized(self, session: AsyncSession) -> AsyncIterator[None]:
        async with self._lock:
            try:
                yield
            except BillingError as exc:
                await session.rollback()
                logger.warning(f"Rejected with {exc.error_code}: {exc.message}")
                raise
            except Exception:
                await session.rollback()
                raise
            await session.commit()

    def _subscriptions(self, session: AsyncSession) -> SubscriptionLedger:
        return SubscriptionLedger(session, self.clock, self.ledger_factory(session))

    def _payments(self, session: AsyncSession) -> PaymentProcessor:
        return PaymentProcessor(session, self.clock, self.ledger_factory(session))

    # Plans

    async def create_plan(
        self,
        session: AsyncSession,
        caller: str,
        name: str,
        description: str,
        price: int,
        period: int,
    ) -> int:
        async with self._serialized(session):
            return await PlanRegistry(session).create_plan(
                caller, name, description, price, period
            )

    async def update_plan(
        self,
        session: AsyncSession,
        caller: str,
        plan_id: int,
        name: str,
        description: str,
        price: int,
        period: int,
        active: bool,
    ) -> Plan:
        async with self._serialized(session):
            return await PlanRegistry(session).update_plan(
                caller, plan_id, name, description, price, period, active
            )

    async def get_plan(self, session: AsyncSession, plan_id: int) -> Plan | None:
        return await PlanRegistry(session).get_plan(plan_id)

    async def get_plan_count(self, session: AsyncSession) -> int:
        return await PlanRegistry(session).get_plan_count()

    # Enrollments

    async def subscribe(self, session: AsyncSession, caller: str, plan_id: int) -> Enrollment:
        async with self._serialized(session):
            return await self._subscriptions(session).subscribe(caller, plan_id)

    async def cancel(self, session: AsyncSession, caller: str, plan_id: int) -> Enrollment:
        async with self._serialized(session):
            return await self._subscriptions(session).cancel(caller, plan_id)

    async def get_user_subscription(
        self, session: AsyncSession, account: str, plan_id: int
    ) -> Enrollment | None:
        return await self._subscriptions(session).get_user_subscription(account, plan_id)

    async def get_subscription_count(self, session: AsyncSession, account: str) -> int:
        return await self._subscriptions(session).get_subscription_count(account)

    # Payments

    async def is_payment_due(self, session: AsyncSession, account: str, plan_id: int) -> bool:
        return await self._payments(session).is_payment_due(account, plan_id)

    async def process_payment(
        self, session: AsyncSession, caller: str, account: str, plan_id: int
    ) -> Enrollment:
        async with self._serialized(session):
            return await self._payments(session).process_payment(caller, account, plan_id)

    # Ledger

    async def deposit(self, session: AsyncSession, account: str, amount: int) -> int:
        """Credit native currency to ``account`` and return the new balance."""
        async with self._serialized(session):
            balance = await DatabaseLedger(session).deposit(account, amount)
            logger.info(f"Deposited {amount} to {account}, balance {balance}")
            return balance

    async def balance(self, session: AsyncSession, account: str) -> int:
        return await DatabaseLedger(session).balance(account)
