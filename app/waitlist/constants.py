from __future__ import annotations

from app.waitlist.types import MissionDefinition

REFERRAL_REWARD_SPOTS = 10
MISSION_REWARD_SPOTS = 5
MIN_QUEUE_POSITION = 1

TIER_STANDARD = "standard"
TIER_VIP = "vip"

USER_TYPES = frozenset({"developer", "employer", "both"})
DEFAULT_USER_TYPE = "developer"
DEFAULT_PRIMARY_INTEREST = "Finding Jobs"

EMAIL_MAX_LENGTH = 320
FULL_NAME_MAX_LENGTH = 200
PRIMARY_INTEREST_MAX_LENGTH = 64
ROBLOX_USERNAME_MAX_LENGTH = 64

REFERRAL_STATUS_SIGNED_UP = "signed_up"
REFERRAL_CODE_MAX_ATTEMPTS = 2

COUNTER_ALL = "all"
COUNTER_VIP = "vip"

MISSION_CATALOG: dict[str, MissionDefinition] = {
    mission.mission_type: mission
    for mission in (
        MissionDefinition("discord_join", "Join Discord Server", MISSION_REWARD_SPOTS),
        MissionDefinition("twitter_follow", "Follow on Twitter", MISSION_REWARD_SPOTS),
        MissionDefinition("watch_demo", "Watch Demo Video", MISSION_REWARD_SPOTS),
        MissionDefinition("complete_profile", "Complete Profile Info", MISSION_REWARD_SPOTS),
    )
}
