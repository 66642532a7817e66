from app.db.repo.waitlist_counters_repo import WaitlistCountersRepo
from app.db.repo.waitlist_referrals_repo import WaitlistReferralsRepo
from app.db.repo.waitlist_signups_repo import WaitlistSignupsRepo

__all__ = [
    "WaitlistCountersRepo",
    "WaitlistReferralsRepo",
    "WaitlistSignupsRepo",
]
