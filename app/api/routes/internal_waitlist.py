from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, HTTPException, Query, Request

from app.api.routes.waitlist_models import WaitlistOverviewResponse, WaitlistTopReferrerView
from app.core.config import get_settings
from app.services.internal_auth import (
    extract_client_ip,
    is_client_ip_allowed,
    is_internal_request_authenticated,
)
from app.waitlist.errors import WaitlistStorageError
from app.waitlist.service import WaitlistService
from app.waitlist.transactions import waitlist_transaction

router = APIRouter(tags=["internal", "waitlist"])
logger = structlog.get_logger(__name__)


def _assert_internal_access(request: Request) -> None:
    settings = get_settings()
    client_ip = extract_client_ip(
        request,
        trusted_proxies=settings.internal_api_trusted_proxies,
    )

    if not is_client_ip_allowed(client_ip=client_ip, allowlist=settings.internal_api_allowlist):
        logger.warning("internal_waitlist_auth_failed", reason="ip_not_allowed", client_ip=client_ip)
        raise HTTPException(status_code=403, detail={"code": "E_FORBIDDEN"})

    if not is_internal_request_authenticated(
        request,
        expected_token=settings.internal_api_token,
    ):
        logger.warning("internal_waitlist_auth_failed", reason="invalid_credentials", client_ip=client_ip)
        raise HTTPException(status_code=403, detail={"code": "E_FORBIDDEN"})


@router.get("/internal/waitlist/overview", response_model=WaitlistOverviewResponse)
async def get_waitlist_overview(
    request: Request,
    limit: int = Query(default=10, ge=1, le=100),
) -> WaitlistOverviewResponse:
    _assert_internal_access(request)
    now_utc = datetime.now(timezone.utc)

    try:
        async with waitlist_transaction() as session:
            stats = await WaitlistService.get_stats(session)
            top_referrers = await WaitlistService.list_top_referrers(session, limit=limit)
    except WaitlistStorageError as exc:
        raise HTTPException(
            status_code=503,
            detail={"code": "E_WAITLIST_STORAGE_UNAVAILABLE"},
        ) from exc

    return WaitlistOverviewResponse(
        generated_at=now_utc,
        total_signups=stats.total_signups,
        vip_signups=stats.vip_signups,
        standard_signups=max(0, stats.total_signups - stats.vip_signups),
        referrals_total=stats.referrals_total,
        top_referrers=[
            WaitlistTopReferrerView(
                signup_id=item.signup_id,
                referral_code=item.referral_code,
                position_in_queue=item.position_in_queue,
                referrals_total=item.referrals_total,
            )
            for item in top_referrers
        ],
    )
