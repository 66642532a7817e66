from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import SessionLocal
from app.waitlist.errors import WaitlistStorageError

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def waitlist_transaction() -> AsyncIterator[AsyncSession]:
    """Opens a transaction; storage failures roll back and surface as WaitlistStorageError."""
    try:
        async with SessionLocal.begin() as session:
            yield session
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("waitlist_storage_failed", error_type=type(exc).__name__)
        raise WaitlistStorageError("waitlist storage unavailable") from exc
