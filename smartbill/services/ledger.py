"""Fund-transfer primitive used to charge subscribers."""
from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from smartbill.core.exceptions import InsufficientFundsError
from smartbill.repositories.ledger_account_repo import LedgerAccountRepo


logger = logging.getLogger(__name__)


class Ledger(Protocol):
    """Synchronous, all-or-nothing movement of native currency."""

    async def transfer(self, amount: int, sender: str, recipient: str) -> None:
        """Move ``amount`` or raise :class:`InsufficientFundsError`."""
        ...


class DatabaseLedger:
    """
    Ledger backed by the ``ledger_accounts`` table.

    Balances live in the same session as plans and enrollments, so a transfer
    commits or rolls back together with the billing state written after it.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.accounts = LedgerAccountRepo(session)

    async def balance(self, account: str) -> int:
        return await self.accounts.balance(account)

    async def deposit(self, account: str, amount: int) -> int:
        """Credit ``amount`` to ``account`` and return the new balance."""

        if amount < 0:
            raise ValueError("deposit amount must be non-negative")
        ledger_account = await self.accounts.get_or_create(account)
        ledger_account.balance += amount
        await self.accounts.set_balances(ledger_account)
        return ledger_account.balance

    async def transfer(self, amount: int, sender: str, recipient: str) -> None:
        if amount < 0:
            raise ValueError("transfer amount must be non-negative")

        source = await self.accounts.get(sender, for_update=True)
        available = source.balance if source is not None else 0
        if available < amount:
            raise InsufficientFundsError(sender, amount, available)
        if amount == 0 or sender == recipient:
            return

        destination = await self.accounts.get_or_create(recipient)
        source.balance -= amount
        destination.balance += amount
        await self.accounts.set_balances(source, destination)
        logger.debug(f"Transferred {amount} from {sender} to {recipient}")
