from __future__ import annotations

from .admission import signup
from .mission_credit import credit_mission, normalize_mission_type
from .queries import get_stats, get_status, list_missions, list_top_referrers
from .referral_credit import credit_referral


class WaitlistService:
    signup = staticmethod(signup)
    credit_referral = staticmethod(credit_referral)
    credit_mission = staticmethod(credit_mission)
    normalize_mission_type = staticmethod(normalize_mission_type)
    get_status = staticmethod(get_status)
    get_stats = staticmethod(get_stats)
    list_top_referrers = staticmethod(list_top_referrers)
    list_missions = staticmethod(list_missions)


__all__ = ["WaitlistService"]
