from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

import structlog
from fastapi import APIRouter, HTTPException, Query, Response, status

from app.api.routes.waitlist_models import (
    WaitlistMissionRequest,
    WaitlistMissionResponse,
    WaitlistMissionsResponse,
    WaitlistMissionView,
    WaitlistReferralView,
    WaitlistSignupRequest,
    WaitlistSignupResponse,
    WaitlistSignupView,
    WaitlistStatsResponse,
    WaitlistStatusResponse,
)
from app.db.models.waitlist_referrals import WaitlistReferral
from app.db.models.waitlist_signups import WaitlistSignup
from app.waitlist.errors import (
    MissionUnknownError,
    SignupConflictError,
    SignupNotFoundError,
    SignupValidationError,
    WaitlistError,
    WaitlistStorageError,
)
from app.waitlist.service import WaitlistService
from app.waitlist.transactions import waitlist_transaction

router = APIRouter(tags=["waitlist"])
logger = structlog.get_logger(__name__)


def as_signup_view(signup: WaitlistSignup) -> WaitlistSignupView:
    return WaitlistSignupView(
        id=signup.id,
        email=signup.email,
        full_name=signup.full_name,
        user_type=signup.user_type,
        primary_interest=signup.primary_interest,
        roblox_username=signup.roblox_username,
        position_in_queue=int(signup.position_in_queue),
        referral_code=signup.referral_code,
        priority_tier=signup.priority_tier,
        verified=bool(signup.verified),
        completed_missions=list(signup.completed_missions or []),
        referred_by_signup_id=signup.referred_by_signup_id,
        created_at=signup.created_at,
    )


def _as_referral_view(referral: WaitlistReferral) -> WaitlistReferralView:
    return WaitlistReferralView(
        id=int(referral.id),
        referrer_id=referral.referrer_id,
        referred_user_id=referral.referred_user_id,
        referred_email=referral.referred_email,
        referral_code=referral.referral_code,
        status=referral.status,
        signed_up_at=referral.signed_up_at,
    )


def _as_http_error(exc: WaitlistError) -> HTTPException:
    if isinstance(exc, SignupValidationError):
        return HTTPException(
            status_code=422,
            detail={"code": "E_WAITLIST_VALIDATION", "fields": exc.fields},
        )
    if isinstance(exc, SignupNotFoundError):
        return HTTPException(status_code=404, detail={"code": "E_WAITLIST_SIGNUP_NOT_FOUND"})
    if isinstance(exc, MissionUnknownError):
        return HTTPException(status_code=422, detail={"code": "E_WAITLIST_MISSION_INVALID"})
    if isinstance(exc, SignupConflictError):
        logger.warning("waitlist_conflict_exhausted", reason=str(exc))
        return HTTPException(status_code=409, detail={"code": "E_WAITLIST_CONFLICT"})
    if isinstance(exc, WaitlistStorageError):
        return HTTPException(status_code=503, detail={"code": "E_WAITLIST_STORAGE_UNAVAILABLE"})
    return HTTPException(status_code=500, detail={"code": "E_WAITLIST_INTERNAL"})


@router.post("/waitlist/signup", response_model=WaitlistSignupResponse)
async def create_waitlist_signup(
    payload: WaitlistSignupRequest,
    response: Response,
) -> WaitlistSignupResponse:
    now_utc = datetime.now(timezone.utc)
    try:
        async with waitlist_transaction() as session:
            result = await WaitlistService.signup(
                session,
                email=payload.email,
                full_name=payload.full_name,
                user_type=payload.user_type,
                primary_interest=payload.primary_interest,
                roblox_username=payload.roblox_username,
                referral_code=payload.referral_code,
                now_utc=now_utc,
            )
            body = WaitlistSignupResponse(
                signup=as_signup_view(result.signup),
                created=result.created,
                referral_credited=result.referral_credited,
            )
    except WaitlistError as exc:
        raise _as_http_error(exc) from exc

    response.status_code = status.HTTP_201_CREATED if body.created else status.HTTP_200_OK
    return body


@router.get("/waitlist/stats", response_model=WaitlistStatsResponse)
async def get_waitlist_stats() -> WaitlistStatsResponse:
    try:
        async with waitlist_transaction() as session:
            stats = await WaitlistService.get_stats(session)
    except WaitlistError as exc:
        raise _as_http_error(exc) from exc

    return WaitlistStatsResponse(
        total_signups=stats.total_signups,
        vip_signups=stats.vip_signups,
        referrals_total=stats.referrals_total,
    )


@router.get("/waitlist/missions", response_model=WaitlistMissionsResponse)
async def get_waitlist_missions() -> WaitlistMissionsResponse:
    return WaitlistMissionsResponse(
        missions=[
            WaitlistMissionView(
                mission_type=mission.mission_type,
                title=mission.title,
                reward_spots=mission.reward_spots,
            )
            for mission in WaitlistService.list_missions()
        ]
    )


async def _load_status(*, signup_id: UUID | None, email: str | None) -> WaitlistStatusResponse:
    try:
        async with waitlist_transaction() as session:
            waitlist_status = await WaitlistService.get_status(
                session,
                signup_id=signup_id,
                email=email,
            )
            body = WaitlistStatusResponse(
                signup=as_signup_view(waitlist_status.signup),
                referrals=[_as_referral_view(item) for item in waitlist_status.referrals],
                waitlist_total=waitlist_status.waitlist_total,
                people_behind=waitlist_status.people_behind,
            )
    except WaitlistError as exc:
        raise _as_http_error(exc) from exc
    return body


@router.get("/waitlist", response_model=WaitlistStatusResponse)
async def get_waitlist_status_by_email(
    email: str = Query(min_length=3, max_length=320),
) -> WaitlistStatusResponse:
    return await _load_status(signup_id=None, email=email)


@router.get("/waitlist/{signup_id}", response_model=WaitlistStatusResponse)
async def get_waitlist_status(signup_id: UUID) -> WaitlistStatusResponse:
    return await _load_status(signup_id=signup_id, email=None)


@router.post("/waitlist/{signup_id}/mission", response_model=WaitlistMissionResponse)
async def complete_waitlist_mission(
    signup_id: UUID,
    payload: WaitlistMissionRequest,
) -> WaitlistMissionResponse:
    try:
        async with waitlist_transaction() as session:
            result = await WaitlistService.credit_mission(
                session,
                signup_id=signup_id,
                mission_type=payload.mission_type,
            )
            body = WaitlistMissionResponse(
                signup=as_signup_view(result.signup),
                idempotent_replay=result.idempotent_replay,
            )
    except WaitlistError as exc:
        raise _as_http_error(exc) from exc
    return body
