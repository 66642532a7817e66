from __future__ import annotations

from datetime import datetime
from uuid import uuid4

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.referral_codes import generate_referral_code, normalize_referral_code
from app.db.models.waitlist_signups import WaitlistSignup
from app.db.repo.waitlist_counters_repo import WaitlistCountersRepo
from app.db.repo.waitlist_signups_repo import WaitlistSignupsRepo
from app.waitlist.constants import (
    COUNTER_ALL,
    COUNTER_VIP,
    REFERRAL_CODE_MAX_ATTEMPTS,
    TIER_VIP,
)
from app.waitlist.errors import SignupConflictError
from app.waitlist.policy import (
    email_domain,
    parse_domain_allowlist,
    resolve_priority_tier,
    validate_signup_input,
)
from app.waitlist.types import SignupInput, SignupResult

from .referral_credit import credit_referral

logger = structlog.get_logger(__name__)


async def _assign_position(session: AsyncSession, *, priority_tier: str) -> int:
    # VIPs get their own leading sequence; standard signups count every tier.
    overall_position = await WaitlistCountersRepo.increment(session, name=COUNTER_ALL)
    if priority_tier == TIER_VIP:
        return await WaitlistCountersRepo.increment(session, name=COUNTER_VIP)
    return overall_position


async def _admit_new_signup(
    session: AsyncSession,
    *,
    signup_input: SignupInput,
    priority_tier: str,
    now_utc: datetime,
) -> WaitlistSignup | None:
    """Inserts the signup; returns None when the same email won a concurrent race."""
    for attempt in range(1, REFERRAL_CODE_MAX_ATTEMPTS + 1):
        try:
            async with session.begin_nested():
                position = await _assign_position(session, priority_tier=priority_tier)
                return await WaitlistSignupsRepo.create(
                    session,
                    signup=WaitlistSignup(
                        id=uuid4(),
                        email=signup_input.email,
                        full_name=signup_input.full_name,
                        user_type=signup_input.user_type,
                        primary_interest=signup_input.primary_interest,
                        roblox_username=signup_input.roblox_username,
                        position_in_queue=position,
                        referral_code=generate_referral_code(),
                        priority_tier=priority_tier,
                        verified=priority_tier == TIER_VIP,
                        completed_missions=[],
                        referred_by_signup_id=None,
                        created_at=now_utc,
                    ),
                )
        except IntegrityError:
            if await WaitlistSignupsRepo.get_by_email(session, signup_input.email) is not None:
                return None
            logger.warning("waitlist_referral_code_collision", attempt=attempt)

    raise SignupConflictError("unable to generate unique referral code")


async def signup(
    session: AsyncSession,
    *,
    email: str | None,
    full_name: str | None,
    user_type: str | None,
    primary_interest: str | None,
    now_utc: datetime,
    roblox_username: str | None = None,
    referral_code: str | None = None,
) -> SignupResult:
    signup_input = validate_signup_input(
        email=email,
        full_name=full_name,
        user_type=user_type,
        primary_interest=primary_interest,
        roblox_username=roblox_username,
    )

    existing = await WaitlistSignupsRepo.get_by_email(session, signup_input.email)
    if existing is not None:
        logger.info("waitlist_signup_replayed", signup_id=str(existing.id))
        return SignupResult(signup=existing, created=False, referral_credited=False)

    vip_domains = parse_domain_allowlist(get_settings().waitlist_vip_email_domains)
    priority_tier = resolve_priority_tier(signup_input.email, vip_domains=vip_domains)

    created = await _admit_new_signup(
        session,
        signup_input=signup_input,
        priority_tier=priority_tier,
        now_utc=now_utc,
    )
    if created is None:
        existing = await WaitlistSignupsRepo.get_by_email(session, signup_input.email)
        if existing is None:
            raise SignupConflictError("signup disappeared after email conflict")
        logger.info("waitlist_signup_replayed", signup_id=str(existing.id), concurrent=True)
        return SignupResult(signup=existing, created=False, referral_credited=False)

    logger.info(
        "waitlist_signup_created",
        signup_id=str(created.id),
        email_domain=email_domain(created.email),
        priority_tier=created.priority_tier,
        position_in_queue=created.position_in_queue,
    )

    normalized_code = normalize_referral_code(referral_code)
    if normalized_code is None:
        return SignupResult(signup=created, created=True, referral_credited=False)

    referrer = await WaitlistSignupsRepo.get_by_referral_code(session, normalized_code)
    if referrer is None or referrer.id == created.id:
        logger.info("waitlist_referral_code_unknown", referral_code=normalized_code)
        return SignupResult(signup=created, created=True, referral_credited=False)

    await credit_referral(
        session,
        referrer_id=referrer.id,
        referred_email=created.email,
        referred_id=created.id,
        referral_code=normalized_code,
        now_utc=now_utc,
    )
    created.referred_by_signup_id = referrer.id
    return SignupResult(signup=created, created=True, referral_credited=True)
