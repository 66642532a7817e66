from __future__ import annotations

from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.waitlist_referrals import WaitlistReferral
from app.db.repo.waitlist_referrals_repo import WaitlistReferralsRepo
from app.db.repo.waitlist_signups_repo import WaitlistSignupsRepo
from app.waitlist.constants import REFERRAL_REWARD_SPOTS, REFERRAL_STATUS_SIGNED_UP
from app.waitlist.errors import SignupConflictError, SignupNotFoundError

logger = structlog.get_logger(__name__)


async def credit_referral(
    session: AsyncSession,
    *,
    referrer_id: UUID,
    referred_email: str,
    referred_id: UUID,
    referral_code: str,
    now_utc: datetime,
) -> WaitlistReferral:
    # Must run in the transaction that created the referred signup.
    referrer = await WaitlistSignupsRepo.decrement_position(
        session,
        signup_id=referrer_id,
        spots=REFERRAL_REWARD_SPOTS,
    )
    if referrer is None:
        raise SignupNotFoundError

    try:
        referral = await WaitlistReferralsRepo.create(
            session,
            referral=WaitlistReferral(
                referrer_id=referrer_id,
                referred_user_id=referred_id,
                referred_email=referred_email,
                referral_code=referral_code,
                status=REFERRAL_STATUS_SIGNED_UP,
                signed_up_at=now_utc,
            ),
        )
    except IntegrityError as exc:
        raise SignupConflictError("referral already recorded for referred signup") from exc

    logger.info(
        "waitlist_referral_credited",
        referrer_id=str(referrer_id),
        referred_id=str(referred_id),
        referrer_position=referrer.position_in_queue,
    )
    return referral
