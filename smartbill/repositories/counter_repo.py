"""Repository for named sequence counters."""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from smartbill.db.models.counter import Counter


class CounterRepo:
    """Read and advance :class:`Counter` rows."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def current(self, name: str) -> int:
        counter = await self.session.get(Counter, name)
        return counter.value if counter is not None else 0

    async def increment(self, name: str) -> int:
        """Advance the counter by one and return the new value."""

        counter = await self.session.get(Counter, name, with_for_update=True)
        if counter is None:
            counter = Counter(name=name, value=0)
            self.session.add(counter)
        counter.value += 1
        await self.session.flush()
        return counter.value
