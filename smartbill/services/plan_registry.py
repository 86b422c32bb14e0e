"""Plan registry: publish, update and look up subscription plans."""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from smartbill.core.exceptions import (
    InvalidPeriodError,
    InvalidSubscriptionError,
    UnauthorizedError,
)
from smartbill.db.models.plan import Plan
from smartbill.repositories.counter_repo import CounterRepo
from smartbill.repositories.plan_repo import PlanRepo


logger = logging.getLogger(__name__)

PLAN_COUNTER = "plan_id"


def _validate_period(period: int) -> None:
    if period <= 0:
        raise InvalidPeriodError(period)


class PlanRegistry:
    """Owns the set of plans and the sequence their ids are drawn from."""

    def __init__(self, session: AsyncSession) -> None:
        self.plans = PlanRepo(session)
        self.counters = CounterRepo(session)

    async def create_plan(
        self,
        caller: str,
        name: str,
        description: str,
        price: int,
        period: int,
    ) -> int:
        """Publish a new active plan owned by ``caller`` and return its id."""

        _validate_period(period)

        plan_id = await self.counters.increment(PLAN_COUNTER)
        await self.plans.add(
            Plan(
                id=plan_id,
                owner=caller,
                name=name,
                description=description,
                price=price,
                period=period,
                active=True,
            )
        )
        logger.info(f"Plan {plan_id} created by {caller} (price={price}, period={period})")
        return plan_id

    async def update_plan(
        self,
        caller: str,
        plan_id: int,
        name: str,
        description: str,
        price: int,
        period: int,
        active: bool,
    ) -> Plan:
        """
        Overwrite a plan's mutable fields.

        Only the owner may update. A new period applies from the next charge
        onward; enrollments keep their already scheduled payment tick.
        """

        plan = await self.plans.get(plan_id)
        if plan is None:
            raise InvalidSubscriptionError(
                f"Plan {plan_id} does not exist", context={"plan_id": plan_id}
            )
        if plan.owner != caller:
            raise UnauthorizedError(
                f"Only the owner of plan {plan_id} may update it",
                context={"plan_id": plan_id, "caller": caller},
            )
        _validate_period(period)

        await self.plans.replace(
            plan,
            owner=caller,
            name=name,
            description=description,
            price=price,
            period=period,
            active=active,
        )
        logger.info(f"Plan {plan_id} updated by {caller} (active={active})")
        return plan

    async def get_plan(self, plan_id: int) -> Plan | None:
        return await self.plans.get(plan_id)

    async def get_plan_count(self) -> int:
        """Number of plan ids handed out so far."""
        return await self.counters.current(PLAN_COUNTER)
