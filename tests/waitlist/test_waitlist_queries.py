from __future__ import annotations

import uuid
from datetime import datetime, timezone

import pytest

from app.waitlist.errors import SignupNotFoundError
from app.waitlist.service import WaitlistService

NOW_UTC = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


async def _signup(session, email: str, *, referral_code: str | None = None):
    result = await WaitlistService.signup(
        session,
        email=email,
        full_name="Query Person",
        user_type="both",
        primary_interest="Networking",
        referral_code=referral_code,
        now_utc=NOW_UTC,
    )
    return result.signup


async def test_get_status_by_email_reports_referrals_and_people_behind(session) -> None:
    host = await _signup(session, "host@devmail.com")
    for index in range(4):
        await _signup(session, f"friend{index}@devmail.com", referral_code=host.referral_code)

    status = await WaitlistService.get_status(session, email="  HOST@devmail.com")

    assert status.signup.id == host.id
    assert status.waitlist_total == 5
    assert status.people_behind == 4
    assert [item.referred_email for item in status.referrals] == [
        "friend3@devmail.com",
        "friend2@devmail.com",
        "friend1@devmail.com",
        "friend0@devmail.com",
    ]


async def test_get_status_by_id(session) -> None:
    signup = await _signup(session, "solo@devmail.com")

    status = await WaitlistService.get_status(session, signup_id=signup.id)

    assert status.signup is signup
    assert status.referrals == []
    assert status.people_behind == 0


@pytest.mark.parametrize(
    "lookup",
    [
        {"signup_id": uuid.uuid4()},
        {"email": "missing@devmail.com"},
        {"email": "   "},
        {},
    ],
)
async def test_get_status_raises_not_found(session, lookup) -> None:
    await _signup(session, "solo@devmail.com")

    with pytest.raises(SignupNotFoundError):
        await WaitlistService.get_status(session, **lookup)


async def test_get_stats_counts_tiers_and_referrals(session) -> None:
    host = await _signup(session, "lead@aethex.dev")
    await _signup(session, "friend@devmail.com", referral_code=host.referral_code)
    await _signup(session, "other@devmail.com")

    stats = await WaitlistService.get_stats(session)

    assert stats.total_signups == 3
    assert stats.vip_signups == 1
    assert stats.referrals_total == 1


async def test_list_top_referrers_orders_by_referral_count(session) -> None:
    first = await _signup(session, "first@devmail.com")
    second = await _signup(session, "second@devmail.com")
    await _signup(session, "a@devmail.com", referral_code=second.referral_code)
    await _signup(session, "b@devmail.com", referral_code=second.referral_code)
    await _signup(session, "c@devmail.com", referral_code=first.referral_code)

    top_referrers = await WaitlistService.list_top_referrers(session, limit=10)

    assert [(item.signup_id, item.referrals_total) for item in top_referrers] == [
        (second.id, 2),
        (first.id, 1),
    ]
    assert top_referrers[0].referral_code == second.referral_code
