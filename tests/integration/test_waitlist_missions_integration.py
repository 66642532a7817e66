from __future__ import annotations

import asyncio
from uuid import uuid4

import pytest

from app.db.session import SessionLocal
from app.waitlist.errors import SignupNotFoundError
from app.waitlist.service import WaitlistService
from app.waitlist.types import MissionCreditResult
from tests.integration.waitlist_fixtures import _load_signup, _set_position, _signup


async def _credit(signup_id, mission_type: str) -> MissionCreditResult:
    async with SessionLocal.begin() as session:
        return await WaitlistService.credit_mission(
            session,
            signup_id=signup_id,
            mission_type=mission_type,
        )


@pytest.mark.asyncio
async def test_mission_credit_is_idempotent() -> None:
    signup = (await _signup("runner@devmail.com")).signup
    await _set_position(signup.id, 50)

    first = await _credit(signup.id, "discord_join")
    second = await _credit(signup.id, "discord_join")

    assert first.idempotent_replay is False
    assert first.signup.position_in_queue == 45
    assert second.idempotent_replay is True
    assert second.signup.position_in_queue == 45

    stored = await _load_signup(signup.id)
    assert stored.position_in_queue == 45
    assert stored.completed_missions == ["discord_join"]


@pytest.mark.asyncio
async def test_concurrent_mission_credits_apply_once() -> None:
    signup = (await _signup("runner@devmail.com")).signup
    await _set_position(signup.id, 50)

    results = await asyncio.gather(*(_credit(signup.id, "watch_demo") for _ in range(6)))

    assert sum(1 for result in results if not result.idempotent_replay) == 1
    stored = await _load_signup(signup.id)
    assert stored.position_in_queue == 45
    assert stored.completed_missions == ["watch_demo"]


@pytest.mark.asyncio
async def test_concurrent_distinct_missions_both_apply() -> None:
    signup = (await _signup("runner@devmail.com")).signup
    await _set_position(signup.id, 50)

    await asyncio.gather(
        _credit(signup.id, "discord_join"),
        _credit(signup.id, "twitter_follow"),
    )

    stored = await _load_signup(signup.id)
    assert stored.position_in_queue == 40
    assert sorted(stored.completed_missions) == ["discord_join", "twitter_follow"]


@pytest.mark.asyncio
async def test_mission_credit_floors_at_first_position() -> None:
    signup = (await _signup("runner@devmail.com")).signup
    await _set_position(signup.id, 2)

    result = await _credit(signup.id, "complete_profile")

    assert result.signup.position_in_queue == 1


@pytest.mark.asyncio
async def test_mission_credit_for_missing_signup_raises() -> None:
    with pytest.raises(SignupNotFoundError):
        await _credit(uuid4(), "discord_join")
