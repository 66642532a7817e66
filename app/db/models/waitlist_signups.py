from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class WaitlistSignup(Base):
    __tablename__ = "waitlist_signups"
    __table_args__ = (
        CheckConstraint(
            "user_type IN ('developer','employer','both')",
            name="ck_waitlist_signups_user_type",
        ),
        CheckConstraint(
            "priority_tier IN ('standard','vip')",
            name="ck_waitlist_signups_priority_tier",
        ),
        CheckConstraint(
            "verified = (priority_tier = 'vip')",
            name="ck_waitlist_signups_verified_matches_tier",
        ),
        CheckConstraint(
            "position_in_queue >= 1",
            name="ck_waitlist_signups_position_positive",
        ),
        UniqueConstraint("email", name="uq_waitlist_signups_email"),
        UniqueConstraint("referral_code", name="uq_waitlist_signups_referral_code"),
        Index("idx_waitlist_signups_tier_position", "priority_tier", "position_in_queue"),
        Index("idx_waitlist_signups_created_at", "created_at"),
        Index("idx_waitlist_signups_referred_by", "referred_by_signup_id"),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    user_type: Mapped[str] = mapped_column(String(16), nullable=False)
    primary_interest: Mapped[str] = mapped_column(String(64), nullable=False)
    roblox_username: Mapped[str | None] = mapped_column(String(64), nullable=True)
    position_in_queue: Mapped[int] = mapped_column(Integer, nullable=False)
    referral_code: Mapped[str] = mapped_column(String(16), nullable=False)
    priority_tier: Mapped[str] = mapped_column(String(16), nullable=False)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False)
    completed_missions: Mapped[list[str]] = mapped_column(
        ARRAY(String(32)),
        nullable=False,
        server_default=text("'{}'::varchar[]"),
    )
    referred_by_signup_id: Mapped[UUID | None] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("waitlist_signups.id"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
