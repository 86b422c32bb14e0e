"""Enrollment of accounts into plans."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from smartbill.core.exceptions import (
    AlreadySubscribedError,
    InsufficientFundsError,
    InvalidSubscriptionError,
    PaymentFailedError,
    SubscriptionInactiveError,
)
from smartbill.db.models.enrollment import Enrollment
from smartbill.repositories.enrollment_repo import EnrollmentRepo
from smartbill.repositories.plan_repo import PlanRepo
from smartbill.services.clock import Clock
from smartbill.services.ledger import Ledger


logger = logging.getLogger(__name__)


class SubscriptionLedger:
    """Creates, cancels and reads per-(account, plan) enrollments."""

    def __init__(self, session: AsyncSession, clock: Clock, ledger: Ledger) -> None:
        self.plans = PlanRepo(session)
        self.enrollments = EnrollmentRepo(session)
        self.clock = clock
        self.ledger = ledger

    async def subscribe(self, caller: str, plan_id: int) -> Enrollment:
        """
        Enroll ``caller`` in a plan and collect the first payment.

        The enrollment is written only after the transfer succeeds. An account
        that ever held an enrollment for the plan, cancelled or not, cannot
        subscribe to it again.
        """

        plan = await self.plans.get(plan_id)
        if plan is None:
            raise InvalidSubscriptionError(
                f"Plan {plan_id} does not exist", context={"plan_id": plan_id}
            )
        if not plan.active:
            raise SubscriptionInactiveError(
                f"Plan {plan_id} is not accepting subscribers",
                context={"plan_id": plan_id},
            )
        if await self.enrollments.exists(caller, plan_id):
            raise AlreadySubscribedError(
                f"Account {caller} is already enrolled in plan {plan_id}",
                context={"account": caller, "plan_id": plan_id},
            )

        try:
            await self.ledger.transfer(plan.price, caller, plan.owner)
        except InsufficientFundsError as exc:
            raise PaymentFailedError(
                f"Initial payment for plan {plan_id} failed: {exc}",
                context={"account": caller, "plan_id": plan_id, "amount": plan.price},
            ) from exc

        now = self.clock.now()
        try:
            enrollment = await self.enrollments.create(caller, plan_id, now, now + plan.period)
        except IntegrityError as exc:
            # Another worker enrolled the same account first
            raise AlreadySubscribedError(
                f"Account {caller} is already enrolled in plan {plan_id}",
                context={"account": caller, "plan_id": plan_id},
            ) from exc
        logger.info(
            f"Account {caller} subscribed to plan {plan_id} at tick {now}, "
            f"next payment at {enrollment.next_payment_tick}"
        )
        return enrollment

    async def cancel(self, caller: str, plan_id: int) -> Enrollment:
        """Deactivate the caller's enrollment. The record itself is kept."""

        enrollment = await self.enrollments.get(caller, plan_id)
        if enrollment is None:
            raise InvalidSubscriptionError(
                f"Account {caller} has no enrollment in plan {plan_id}",
                context={"account": caller, "plan_id": plan_id},
            )
        if enrollment.active:
            await self.enrollments.deactivate(enrollment)
            logger.info(f"Account {caller} cancelled plan {plan_id}")
        return enrollment

    async def get_user_subscription(self, account: str, plan_id: int) -> Enrollment | None:
        return await self.enrollments.get(account, plan_id)

    async def get_subscription_count(self, account: str) -> int:
        """How many plans the account has ever enrolled in."""
        return await self.enrollments.count_for_account(account)
