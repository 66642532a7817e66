from __future__ import annotations

from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.waitlist_counters import WaitlistCounter


class WaitlistCountersRepo:
    @staticmethod
    async def increment(session: AsyncSession, *, name: str) -> int:
        stmt = postgresql_insert(WaitlistCounter).values(name=name, value=1)
        stmt = stmt.on_conflict_do_update(
            index_elements=[WaitlistCounter.name],
            set_={"value": WaitlistCounter.value + 1},
        ).returning(WaitlistCounter.value)
        result = await session.execute(stmt)
        return int(result.scalar_one())
