"""Repository layer package."""

from smartbill.repositories.counter_repo import CounterRepo
from smartbill.repositories.enrollment_repo import EnrollmentRepo
from smartbill.repositories.ledger_account_repo import LedgerAccountRepo
from smartbill.repositories.plan_repo import PlanRepo

__all__ = [
    "CounterRepo",
    "EnrollmentRepo",
    "LedgerAccountRepo",
    "PlanRepo",
]
