from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field


class WaitlistSignupRequest(BaseModel):
    email: str | None = None
    full_name: str | None = None
    user_type: str | None = None
    primary_interest: str | None = None
    roblox_username: str | None = None
    referral_code: str | None = Field(
        default=None,
        validation_alias=AliasChoices("referral_code", "referralCode", "ref"),
    )


class WaitlistMissionRequest(BaseModel):
    mission_type: str = Field(
        min_length=1,
        max_length=64,
        validation_alias=AliasChoices("missionType", "mission_type"),
    )


class WaitlistSignupView(BaseModel):
    id: UUID
    email: str
    full_name: str
    user_type: str
    primary_interest: str
    roblox_username: str | None = None
    position_in_queue: int = Field(ge=1)
    referral_code: str
    priority_tier: str
    verified: bool
    completed_missions: list[str]
    referred_by_signup_id: UUID | None = None
    created_at: datetime


class WaitlistReferralView(BaseModel):
    id: int = Field(gt=0)
    referrer_id: UUID
    referred_user_id: UUID
    referred_email: str
    referral_code: str
    status: str
    signed_up_at: datetime


class WaitlistSignupResponse(BaseModel):
    signup: WaitlistSignupView
    created: bool
    referral_credited: bool


class WaitlistMissionResponse(BaseModel):
    signup: WaitlistSignupView
    idempotent_replay: bool


class WaitlistStatusResponse(BaseModel):
    signup: WaitlistSignupView
    referrals: list[WaitlistReferralView]
    waitlist_total: int = Field(ge=0)
    people_behind: int = Field(ge=0)


class WaitlistStatsResponse(BaseModel):
    total_signups: int = Field(ge=0)
    vip_signups: int = Field(ge=0)
    referrals_total: int = Field(ge=0)


class WaitlistMissionView(BaseModel):
    mission_type: str
    title: str
    reward_spots: int = Field(gt=0)


class WaitlistMissionsResponse(BaseModel):
    missions: list[WaitlistMissionView]


class WaitlistTopReferrerView(BaseModel):
    signup_id: UUID
    referral_code: str
    position_in_queue: int = Field(ge=1)
    referrals_total: int = Field(ge=0)


class WaitlistOverviewResponse(BaseModel):
    generated_at: datetime
    total_signups: int = Field(ge=0)
    vip_signups: int = Field(ge=0)
    standard_signups: int = Field(ge=0)
    referrals_total: int = Field(ge=0)
    top_referrers: list[WaitlistTopReferrerView]
