from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.waitlist_signups import WaitlistSignup
from app.db.repo.waitlist_referrals_repo import WaitlistReferralsRepo
from app.db.repo.waitlist_signups_repo import WaitlistSignupsRepo
from app.waitlist.constants import MISSION_CATALOG, TIER_VIP
from app.waitlist.errors import SignupNotFoundError
from app.waitlist.policy import normalize_email, people_behind
from app.waitlist.types import MissionDefinition, ReferrerStats, WaitlistStats, WaitlistStatus


async def _resolve_signup(
    session: AsyncSession,
    *,
    signup_id: UUID | None,
    email: str | None,
) -> WaitlistSignup | None:
    if signup_id is not None:
        return await WaitlistSignupsRepo.get_by_id(session, signup_id)
    if email is not None and email.strip():
        return await WaitlistSignupsRepo.get_by_email(session, normalize_email(email))
    return None


async def get_status(
    session: AsyncSession,
    *,
    signup_id: UUID | None = None,
    email: str | None = None,
) -> WaitlistStatus:
    signup = await _resolve_signup(session, signup_id=signup_id, email=email)
    if signup is None:
        raise SignupNotFoundError

    referrals = await WaitlistReferralsRepo.list_for_referrer(session, referrer_id=signup.id)
    waitlist_total = await WaitlistSignupsRepo.count_all(session)
    return WaitlistStatus(
        signup=signup,
        referrals=referrals,
        waitlist_total=waitlist_total,
        people_behind=people_behind(
            waitlist_total=waitlist_total,
            position_in_queue=signup.position_in_queue,
        ),
    )


async def get_stats(session: AsyncSession) -> WaitlistStats:
    by_tier = await WaitlistSignupsRepo.count_by_tier(session)
    referrals_total = await WaitlistReferralsRepo.count_all(session)
    return WaitlistStats(
        total_signups=sum(by_tier.values()),
        vip_signups=by_tier.get(TIER_VIP, 0),
        referrals_total=referrals_total,
    )


async def list_top_referrers(session: AsyncSession, *, limit: int = 10) -> list[ReferrerStats]:
    rows = await WaitlistReferralsRepo.list_top_referrers(session, limit=limit)
    signups = await WaitlistSignupsRepo.list_by_ids(session, [referrer_id for referrer_id, _ in rows])
    signups_by_id = {signup.id: signup for signup in signups}

    top_referrers: list[ReferrerStats] = []
    for referrer_id, referrals_total in rows:
        signup = signups_by_id.get(referrer_id)
        if signup is None:
            continue
        top_referrers.append(
            ReferrerStats(
                signup_id=signup.id,
                referral_code=signup.referral_code,
                position_in_queue=signup.position_in_queue,
                referrals_total=referrals_total,
            )
        )
    return top_referrers


def list_missions() -> list[MissionDefinition]:
    return list(MISSION_CATALOG.values())
