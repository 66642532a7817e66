"""waitlist_core_data_model

Revision ID: 5c2e8f1a9b34
Revises:
Create Date: 2026-10-19 10:00:00.000000
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "5c2e8f1a9b34"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "waitlist_signups",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("user_type", sa.String(16), nullable=False),
        sa.Column("primary_interest", sa.String(64), nullable=False),
        sa.Column("roblox_username", sa.String(64), nullable=True),
        sa.Column("position_in_queue", sa.Integer(), nullable=False),
        sa.Column("referral_code", sa.String(16), nullable=False),
        sa.Column("priority_tier", sa.String(16), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False),
        sa.Column(
            "completed_missions",
            postgresql.ARRAY(sa.String(32)),
            nullable=False,
            server_default=sa.text("'{}'::varchar[]"),
        ),
        sa.Column("referred_by_signup_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "user_type IN ('developer','employer','both')",
            name="ck_waitlist_signups_user_type",
        ),
        sa.CheckConstraint(
            "priority_tier IN ('standard','vip')",
            name="ck_waitlist_signups_priority_tier",
        ),
        sa.CheckConstraint(
            "verified = (priority_tier = 'vip')",
            name="ck_waitlist_signups_verified_matches_tier",
        ),
        sa.CheckConstraint("position_in_queue >= 1", name="ck_waitlist_signups_position_positive"),
        sa.ForeignKeyConstraint(["referred_by_signup_id"], ["waitlist_signups.id"]),
        sa.UniqueConstraint("email", name="uq_waitlist_signups_email"),
        sa.UniqueConstraint("referral_code", name="uq_waitlist_signups_referral_code"),
    )
    op.create_index(
        "idx_waitlist_signups_tier_position",
        "waitlist_signups",
        ["priority_tier", "position_in_queue"],
    )
    op.create_index("idx_waitlist_signups_created_at", "waitlist_signups", ["created_at"])
    op.create_index("idx_waitlist_signups_referred_by", "waitlist_signups", ["referred_by_signup_id"])

    op.create_table(
        "waitlist_referrals",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("referrer_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("referred_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("referred_email", sa.String(320), nullable=False),
        sa.Column("referral_code", sa.String(16), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("signed_up_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("status IN ('signed_up')", name="ck_waitlist_referrals_status"),
        sa.CheckConstraint(
            "referrer_id <> referred_user_id",
            name="ck_waitlist_referrals_no_self_referral",
        ),
        sa.ForeignKeyConstraint(["referrer_id"], ["waitlist_signups.id"]),
        sa.ForeignKeyConstraint(["referred_user_id"], ["waitlist_signups.id"]),
        sa.UniqueConstraint("referred_user_id", name="uq_waitlist_referrals_referred_user"),
    )
    op.create_index(
        "idx_waitlist_referrals_referrer_signed_up",
        "waitlist_referrals",
        ["referrer_id", "signed_up_at"],
    )

    op.create_table(
        "waitlist_counters",
        sa.Column("name", sa.String(16), primary_key=True),
        sa.Column("value", sa.BigInteger(), nullable=False, server_default=sa.text("0")),
        sa.CheckConstraint("value >= 0", name="ck_waitlist_counters_value_non_negative"),
    )


def downgrade() -> None:
    op.drop_table("waitlist_counters")
    op.drop_index("idx_waitlist_referrals_referrer_signed_up", table_name="waitlist_referrals")
    op.drop_table("waitlist_referrals")
    op.drop_index("idx_waitlist_signups_referred_by", table_name="waitlist_signups")
    op.drop_index("idx_waitlist_signups_created_at", table_name="waitlist_signups")
    op.drop_index("idx_waitlist_signups_tier_position", table_name="waitlist_signups")
    op.drop_table("waitlist_signups")
