"""Native-currency balances held by the database ledger."""
from __future__ import annotations

from sqlalchemy import BigInteger, CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from smartbill.db.base import Base


class LedgerAccount(Base):
    """Balance of a single ledger participant."""

    __tablename__ = "ledger_accounts"

    account: Mapped[str] = mapped_column(String, primary_key=True)
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_ledger_accounts_balance_non_negative"),
    )

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<LedgerAccount {self.account} balance={self.balance}>"
