"""Database models package exports."""

from smartbill.db.models.counter import Counter
from smartbill.db.models.enrollment import Enrollment
from smartbill.db.models.ledger_account import LedgerAccount
from smartbill.db.models.plan import Plan

__all__ = [
    "Counter",
    "Enrollment",
    "LedgerAccount",
    "Plan",
]
