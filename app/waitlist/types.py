from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from app.db.models.waitlist_referrals import WaitlistReferral
    from app.db.models.waitlist_signups import WaitlistSignup


@dataclass(frozen=True, slots=True)
class MissionDefinition:
    mission_type: str
    title: str
    reward_spots: int


@dataclass(frozen=True, slots=True)
class SignupInput:
    email: str
    full_name: str
    user_type: str
    primary_interest: str
    roblox_username: str | None


@dataclass(slots=True)
class SignupResult:
    signup: WaitlistSignup
    created: bool
    referral_credited: bool


@dataclass(slots=True)
class MissionCreditResult:
    signup: WaitlistSignup
    idempotent_replay: bool


@dataclass(slots=True)
class WaitlistStatus:
    signup: WaitlistSignup
    referrals: list[WaitlistReferral]
    waitlist_total: int
    people_behind: int


@dataclass(frozen=True, slots=True)
class WaitlistStats:
    total_signups: int
    vip_signups: int
    referrals_total: int


@dataclass(frozen=True, slots=True)
class ReferrerStats:
    signup_id: UUID
    referral_code: str
    position_in_queue: int
    referrals_total: int
