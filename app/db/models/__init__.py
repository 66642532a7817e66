from app.db.models.waitlist_counters import WaitlistCounter
from app.db.models.waitlist_referrals import WaitlistReferral
from app.db.models.waitlist_signups import WaitlistSignup

__all__ = [
    "WaitlistCounter",
    "WaitlistReferral",
    "WaitlistSignup",
]
