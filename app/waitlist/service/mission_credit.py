from __future__ import annotations

from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repo.waitlist_signups_repo import WaitlistSignupsRepo
from app.waitlist.constants import MISSION_CATALOG
from app.waitlist.errors import MissionUnknownError, SignupNotFoundError
from app.waitlist.types import MissionCreditResult

logger = structlog.get_logger(__name__)


def normalize_mission_type(mission_type: str | None) -> str | None:
    if mission_type is None:
        return None
    normalized = mission_type.strip().lower()
    if normalized not in MISSION_CATALOG:
        return None
    return normalized


async def credit_mission(
    session: AsyncSession,
    *,
    signup_id: UUID,
    mission_type: str,
) -> MissionCreditResult:
    normalized_type = normalize_mission_type(mission_type)
    if normalized_type is None:
        raise MissionUnknownError
    mission = MISSION_CATALOG[normalized_type]

    signup = await WaitlistSignupsRepo.complete_mission(
        session,
        signup_id=signup_id,
        mission_type=mission.mission_type,
        spots=mission.reward_spots,
    )
    if signup is not None:
        logger.info(
            "waitlist_mission_credited",
            signup_id=str(signup_id),
            mission_type=mission.mission_type,
            position_in_queue=signup.position_in_queue,
        )
        return MissionCreditResult(signup=signup, idempotent_replay=False)

    signup = await WaitlistSignupsRepo.get_by_id(session, signup_id)
    if signup is None:
        raise SignupNotFoundError
    return MissionCreditResult(signup=signup, idempotent_replay=True)
