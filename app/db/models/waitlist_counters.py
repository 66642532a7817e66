from __future__ import annotations

from sqlalchemy import BigInteger, CheckConstraint, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class WaitlistCounter(Base):
    __tablename__ = "waitlist_counters"
    __table_args__ = (
        CheckConstraint("value >= 0", name="ck_waitlist_counters_value_non_negative"),
    )

    name: Mapped[str] = mapped_column(String(16), primary_key=True)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False, server_default=text("0"))
