"""Named monotonic counters."""
from __future__ import annotations

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from smartbill.db.base import Base


class Counter(Base):
    """A sequence that only ever moves forward."""

    __tablename__ = "billing_counters"

    name: Mapped[str] = mapped_column(String, primary_key=True)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
