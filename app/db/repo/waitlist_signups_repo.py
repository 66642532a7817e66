from __future__ import annotations

from uuid import UUID

from sqlalchemy import String, all_, func, literal, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from app.db.models.waitlist_signups import WaitlistSignup
from app.waitlist.constants import MIN_QUEUE_POSITION


def floored_position_decrement(spots: int, *, floor: int = MIN_QUEUE_POSITION) -> ColumnElement[int]:
    return func.greatest(floor, WaitlistSignup.position_in_queue - spots)


def mission_not_completed(mission_value: ColumnElement[str]) -> ColumnElement[bool]:
    return mission_value != all_(WaitlistSignup.completed_missions)


class WaitlistSignupsRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, signup_id: UUID) -> WaitlistSignup | None:
        return await session.get(WaitlistSignup, signup_id)

    @staticmethod
    async def get_by_email(session: AsyncSession, email: str) -> WaitlistSignup | None:
        stmt = select(WaitlistSignup).where(WaitlistSignup.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_referral_code(
        session: AsyncSession,
        referral_code: str,
    ) -> WaitlistSignup | None:
        stmt = select(WaitlistSignup).where(WaitlistSignup.referral_code == referral_code)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, *, signup: WaitlistSignup) -> WaitlistSignup:
        session.add(signup)
        await session.flush()
        return signup

    @staticmethod
    async def decrement_position(
        session: AsyncSession,
        *,
        signup_id: UUID,
        spots: int,
    ) -> WaitlistSignup | None:
        stmt = (
            update(WaitlistSignup)
            .where(WaitlistSignup.id == signup_id)
            .values(position_in_queue=floored_position_decrement(spots))
            .returning(WaitlistSignup)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def complete_mission(
        session: AsyncSession,
        *,
        signup_id: UUID,
        mission_type: str,
        spots: int,
    ) -> WaitlistSignup | None:
        mission_value = literal(mission_type, type_=String(32))
        stmt = (
            update(WaitlistSignup)
            .where(
                WaitlistSignup.id == signup_id,
                mission_not_completed(mission_value),
            )
            .values(
                position_in_queue=floored_position_decrement(spots),
                completed_missions=func.array_append(
                    WaitlistSignup.completed_missions,
                    mission_value,
                ),
            )
            .returning(WaitlistSignup)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def count_all(session: AsyncSession) -> int:
        stmt = select(func.count(WaitlistSignup.id))
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)

    @staticmethod
    async def count_by_tier(session: AsyncSession) -> dict[str, int]:
        stmt = select(WaitlistSignup.priority_tier, func.count(WaitlistSignup.id)).group_by(
            WaitlistSignup.priority_tier
        )
        result = await session.execute(stmt)
        return {str(tier): int(total) for tier, total in result.all()}

    @staticmethod
    async def list_by_ids(
        session: AsyncSession,
        signup_ids: list[UUID],
    ) -> list[WaitlistSignup]:
        if not signup_ids:
            return []
        stmt = select(WaitlistSignup).where(WaitlistSignup.id.in_(tuple(set(signup_ids))))
        result = await session.execute(stmt)
        return list(result.scalars().all())
