from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.waitlist_referrals import WaitlistReferral


class WaitlistReferralsRepo:
    @staticmethod
    async def create(session: AsyncSession, *, referral: WaitlistReferral) -> WaitlistReferral:
        session.add(referral)
        await session.flush()
        return referral

    @staticmethod
    async def list_for_referrer(
        session: AsyncSession,
        *,
        referrer_id: UUID,
        limit: int = 200,
    ) -> list[WaitlistReferral]:
        stmt = (
            select(WaitlistReferral)
            .where(WaitlistReferral.referrer_id == referrer_id)
            .order_by(WaitlistReferral.signed_up_at.desc(), WaitlistReferral.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def count_all(session: AsyncSession) -> int:
        stmt = select(func.count(WaitlistReferral.id))
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)

    @staticmethod
    async def list_top_referrers(
        session: AsyncSession,
        *,
        limit: int = 10,
    ) -> list[tuple[UUID, int]]:
        referrals_total = func.count(WaitlistReferral.id)
        stmt = (
            select(WaitlistReferral.referrer_id, referrals_total)
            .group_by(WaitlistReferral.referrer_id)
            .order_by(referrals_total.desc(), WaitlistReferral.referrer_id.asc())
            .limit(max(1, min(100, int(limit))))
        )
        result = await session.execute(stmt)
        return [(referrer_id, int(total)) for referrer_id, total in result.all()]
