"""Enrollment model linking an account to a plan."""
from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from smartbill.db.base import Base


class Enrollment(Base):
    """Billing-cycle state of one account on one plan."""

    __tablename__ = "enrollments"

    account: Mapped[str] = mapped_column(String, primary_key=True)
    plan_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("plans.id"), primary_key=True
    )
    start_tick: Mapped[int] = mapped_column(BigInteger, nullable=False)
    next_payment_tick: Mapped[int] = mapped_column(BigInteger, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    payment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return (
            f"<Enrollment account={self.account} plan={self.plan_id} "
            f"next={self.next_payment_tick} count={self.payment_count}>"
        )
