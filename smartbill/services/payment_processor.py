"""Payment-due checks and recurring charges."""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from smartbill.core.exceptions import (
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


class PaymentProcessor:
    """
    Charges enrolled accounts once their next payment tick has been reached.

    There is no scheduler: any caller may trigger a charge for any account,
    and the due check alone decides whether it goes through.
    """

    def __init__(self, session: AsyncSession, clock: Clock, ledger: Ledger) -> None:
        self.plans = PlanRepo(session)
        self.enrollments = EnrollmentRepo(session)
        self.clock = clock
        self.ledger = ledger

    async def is_payment_due(self, account: str, plan_id: int) -> bool:
        enrollment = await self.enrollments.get(account, plan_id)
        if enrollment is None:
            return False
        return enrollment.active and self.clock.now() >= enrollment.next_payment_tick

    async def process_payment(self, caller: str, account: str, plan_id: int) -> Enrollment:
        """Charge one billing cycle and advance the enrollment by the plan's current period."""

        context = {"account": account, "plan_id": plan_id}
        plan = await self.plans.get(plan_id)
        if plan is None:
            raise InvalidSubscriptionError(f"Plan {plan_id} does not exist", context=context)
        enrollment = await self.enrollments.get(account, plan_id)
        if enrollment is None:
            raise InvalidSubscriptionError(
                f"Account {account} has no enrollment in plan {plan_id}", context=context
            )
        if not plan.active or not enrollment.active:
            raise SubscriptionInactiveError(
                f"Enrollment of {account} in plan {plan_id} is inactive", context=context
            )

        now = self.clock.now()
        if now < enrollment.next_payment_tick:
            raise PaymentFailedError(
                f"Payment not due until tick {enrollment.next_payment_tick} (now {now})",
                context={**context, "next_payment_tick": enrollment.next_payment_tick},
            )

        try:
            await self.ledger.transfer(plan.price, account, plan.owner)
        except InsufficientFundsError as exc:
            raise PaymentFailedError(
                f"Recurring payment for plan {plan_id} failed: {exc}",
                context={**context, "amount": plan.price},
            ) from exc

        await self.enrollments.record_payment(enrollment, plan.period)
        logger.info(
            f"Processed payment {enrollment.payment_count} of {account} on plan {plan_id} "
            f"(triggered by {caller}), next due at {enrollment.next_payment_tick}"
        )
        return enrollment
