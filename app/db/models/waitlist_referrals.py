from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class WaitlistReferral(Base):
    __tablename__ = "waitlist_referrals"
    __table_args__ = (
        CheckConstraint("status IN ('signed_up')", name="ck_waitlist_referrals_status"),
        CheckConstraint(
            "referrer_id <> referred_user_id",
            name="ck_waitlist_referrals_no_self_referral",
        ),
        UniqueConstraint("referred_user_id", name="uq_waitlist_referrals_referred_user"),
        Index("idx_waitlist_referrals_referrer_signed_up", "referrer_id", "signed_up_at"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    referrer_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("waitlist_signups.id"),
        nullable=False,
    )
    referred_user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("waitlist_signups.id"),
        nullable=False,
    )
    referred_email: Mapped[str] = mapped_column(String(320), nullable=False)
    referral_code: Mapped[str] = mapped_column(String(16), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    signed_up_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
