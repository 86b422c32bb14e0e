"""Repository utilities for subscription plans."""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from smartbill.db.models.plan import Plan


class PlanRepo:
    """Data-access helpers for :class:`Plan`."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, plan_id: int) -> Plan | None:
        return await self.session.get(Plan, plan_id)

    async def add(self, plan: Plan) -> Plan:
        self.session.add(plan)
        await self.session.flush()
        return plan

    async def replace(
        self,
        plan: Plan,
        *,
        owner: str,
        name: str,
        description: str,
        price: int,
        period: int,
        active: bool,
    ) -> Plan:
        """Overwrite every mutable column in a single UPDATE."""

        plan.owner = owner
        plan.name = name
        plan.description = description
        plan.price = price
        plan.period = period
        plan.active = active
        self.session.add(plan)
        await self.session.flush()
        return plan
