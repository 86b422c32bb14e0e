"""Repository for ledger balances."""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from smartbill.db.models.ledger_account import LedgerAccount


class LedgerAccountRepo:
    """Data-access helpers for :class:`LedgerAccount`."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, account: str, *, for_update: bool = False) -> LedgerAccount | None:
        return await self.session.get(LedgerAccount, account, with_for_update=for_update)

    async def balance(self, account: str) -> int:
        ledger_account = await self.get(account)
        return ledger_account.balance if ledger_account is not None else 0

    async def get_or_create(self, account: str) -> LedgerAccount:
        ledger_account = await self.get(account, for_update=True)
        if ledger_account is None:
            ledger_account = LedgerAccount(account=account, balance=0)
            self.session.add(ledger_account)
            await self.session.flush()
        return ledger_account

    async def set_balances(self, *accounts: LedgerAccount) -> None:
        self.session.add_all(accounts)
        await self.session.flush()
