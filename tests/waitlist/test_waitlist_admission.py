from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.core.referral_codes import ALPHABET
from app.waitlist.constants import REFERRAL_REWARD_SPOTS
from app.waitlist.errors import SignupConflictError, SignupValidationError
from app.waitlist.service import WaitlistService

UTC = timezone.utc
NOW_UTC = datetime(2026, 10, 1, 12, 0, tzinfo=UTC)


async def _signup(session, email: str, *, full_name: str = "Ada Builder", referral_code=None):
    return await WaitlistService.signup(
        session,
        email=email,
        full_name=full_name,
        user_type="developer",
        primary_interest="Finding Jobs",
        roblox_username="@AdaBuilds",
        referral_code=referral_code,
        now_utc=NOW_UTC,
    )


async def test_signup_creates_standard_signup_with_referral_code(session, store) -> None:
    result = await _signup(session, "  Ada@DevMail.com ")

    assert result.created is True
    assert result.referral_credited is False
    signup = result.signup
    assert signup.email == "ada@devmail.com"
    assert signup.roblox_username == "AdaBuilds"
    assert signup.priority_tier == "standard"
    assert signup.verified is False
    assert signup.position_in_queue == 1
    assert len(signup.referral_code) == 8
    assert set(signup.referral_code).issubset(set(ALPHABET))
    assert signup.completed_missions == []
    assert len(store.signups) == 1


async def test_repeated_signup_returns_same_record(session, store) -> None:
    first = await _signup(session, "ada@devmail.com")
    second = await _signup(session, "ADA@devmail.com", full_name="Someone Else")

    assert second.created is False
    assert second.signup.id == first.signup.id
    assert second.signup.full_name == "Ada Builder"
    assert len(store.signups) == 1
    assert store.counters == {"all": 1}


async def test_vip_domain_gets_separate_leading_sequence(session) -> None:
    vip = await _signup(session, "lead@aethex.dev")
    standard = await _signup(session, "player@devmail.com")
    second_vip = await _signup(session, "ops@aethex.dev")

    assert vip.signup.priority_tier == "vip"
    assert vip.signup.verified is True
    assert vip.signup.position_in_queue == 1
    assert standard.signup.priority_tier == "standard"
    assert standard.signup.position_in_queue == 2
    assert second_vip.signup.position_in_queue == 2


async def test_standard_positions_count_every_tier(session) -> None:
    for index in range(3):
        await _signup(session, f"dev{index}@devmail.com")
    await _signup(session, "lead@aethex.dev")

    latest = await _signup(session, "late@devmail.com")

    assert latest.signup.position_in_queue == 5


async def test_signup_with_referral_code_credits_referrer_once(session, store) -> None:
    referrer = (await _signup(session, "host@devmail.com")).signup
    for index in range(20):
        await _signup(session, f"filler{index}@devmail.com")
    referrer.position_in_queue = 15

    referred = await _signup(
        session,
        "friend@devmail.com",
        referral_code=referrer.referral_code.lower(),
    )

    assert referred.created is True
    assert referred.referral_credited is True
    assert referred.signup.referred_by_signup_id == referrer.id
    assert referrer.position_in_queue == 15 - REFERRAL_REWARD_SPOTS
    assert len(store.referrals) == 1
    referral = store.referrals[0]
    assert referral.referrer_id == referrer.id
    assert referral.referred_user_id == referred.signup.id
    assert referral.referred_email == "friend@devmail.com"
    assert referral.status == "signed_up"

    replay = await _signup(
        session,
        "friend@devmail.com",
        referral_code=referrer.referral_code,
    )

    assert replay.created is False
    assert replay.referral_credited is False
    assert referrer.position_in_queue == 15 - REFERRAL_REWARD_SPOTS
    assert len(store.referrals) == 1


async def test_referral_credit_is_floored_at_first_position(session) -> None:
    referrer = (await _signup(session, "host@devmail.com")).signup
    assert referrer.position_in_queue == 1

    await _signup(session, "friend@devmail.com", referral_code=referrer.referral_code)

    assert referrer.position_in_queue == 1


async def test_unknown_referral_code_is_ignored(session, store) -> None:
    result = await _signup(session, "friend@devmail.com", referral_code="NOSUCHCODE")

    assert result.created is True
    assert result.referral_credited is False
    assert store.referrals == []


async def test_referral_code_collision_retries_once(session, store) -> None:
    store.forced_code_collisions = 1

    result = await _signup(session, "ada@devmail.com")

    assert result.created is True
    assert result.signup.position_in_queue == 1
    assert store.counters == {"all": 1}


async def test_referral_code_collision_twice_raises_conflict(session, store) -> None:
    store.forced_code_collisions = 2

    with pytest.raises(SignupConflictError):
        await _signup(session, "ada@devmail.com")

    assert store.signups == {}
    assert store.counters == {}


@pytest.mark.parametrize(
    ("email", "full_name", "expected_fields"),
    [
        ("", "Ada", {"email": "required"}),
        ("ada@devmail.com", "   ", {"full_name": "required"}),
        ("not-an-email", "Ada", {"email": "invalid"}),
        (None, None, {"email": "required", "full_name": "required"}),
    ],
)
async def test_signup_rejects_missing_fields_without_writes(
    session,
    store,
    email,
    full_name,
    expected_fields,
) -> None:
    with pytest.raises(SignupValidationError) as exc_info:
        await WaitlistService.signup(
            session,
            email=email,
            full_name=full_name,
            user_type=None,
            primary_interest=None,
            now_utc=NOW_UTC,
        )

    assert exc_info.value.fields == expected_fields
    assert store.signups == {}
    assert store.counters == {}
