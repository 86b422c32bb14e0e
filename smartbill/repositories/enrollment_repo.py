"""Repository utilities for account enrollments."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from smartbill.db.models.enrollment import Enrollment


class EnrollmentRepo:
    """Data-access helpers for :class:`Enrollment`."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, account: str, plan_id: int) -> Enrollment | None:
        return await self.session.get(Enrollment, (account, plan_id))

    async def exists(self, account: str, plan_id: int) -> bool:
        return await self.get(account, plan_id) is not None

    async def create(
        self,
        account: str,
        plan_id: int,
        start_tick: int,
        next_payment_tick: int,
    ) -> Enrollment:
        enrollment = Enrollment(
            account=account,
            plan_id=plan_id,
            start_tick=start_tick,
            next_payment_tick=next_payment_tick,
            active=True,
            payment_count=1,
        )
        self.session.add(enrollment)
        await self.session.flush()
        return enrollment

    async def record_payment(self, enrollment: Enrollment, period: int) -> Enrollment:
        """Move the enrollment one billing cycle forward."""

        enrollment.next_payment_tick = enrollment.next_payment_tick + period
        enrollment.payment_count = enrollment.payment_count + 1
        self.session.add(enrollment)
        await self.session.flush()
        return enrollment

    async def deactivate(self, enrollment: Enrollment) -> Enrollment:
        enrollment.active = False
        self.session.add(enrollment)
        await self.session.flush()
        return enrollment

    async def count_for_account(self, account: str) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Enrollment).where(Enrollment.account == account)
        )
        value = result.scalar_one()
        return int(value or 0)
