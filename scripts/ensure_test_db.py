from __future__ import annotations

import argparse
import asyncio
import re

import asyncpg
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine

from app.core.config import get_settings
from app.core.integration_db_safety import assess_integration_db_safety
from app.db.models import WaitlistCounter, WaitlistReferral, WaitlistSignup  # noqa: F401
from app.db.models.base import Base

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _validate_target(database_url: str) -> str:
    safety = assess_integration_db_safety(database_url)
    if not safety.is_safe:
        raise RuntimeError(f"Refusing to prepare '{safety.database_name}': {safety.reason}")
    if IDENTIFIER_RE.fullmatch(safety.database_name) is None:
        raise RuntimeError(
            f"Unsupported database name '{safety.database_name}'. "
            "Only [A-Za-z0-9_] identifiers are supported."
        )
    return safety.database_name


async def _ensure_database_exists(database_url: str) -> bool:
    db_name = _validate_target(database_url)
    parsed = make_url(database_url)
    if parsed.username is None:
        raise RuntimeError("DATABASE_URL username is required.")

    conn = await asyncpg.connect(
        host=parsed.host or "localhost",
        port=int(parsed.port or 5432),
        user=parsed.username,
        password=parsed.password,
        database="postgres",
    )
    try:
        if await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", db_name):
            return False
        await conn.execute(f'CREATE DATABASE "{db_name}"')
        return True
    finally:
        await conn.close()


async def _create_schema(database_url: str) -> None:
    engine = create_async_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def _run(database_url: str, *, create_schema: bool) -> None:
    created = await _ensure_database_exists(database_url)
    db_name = make_url(database_url).database
    print(f"ensure_test_db: {'created' if created else 'exists'} db={db_name}")  # noqa: T201
    if create_schema:
        await _create_schema(database_url)
        print(f"ensure_test_db: schema ready tables={len(Base.metadata.tables)}")  # noqa: T201


def main() -> int:
    parser = argparse.ArgumentParser(description="Create the local waitlist integration-test database.")
    parser.add_argument("--database-url", default=None)
    parser.add_argument("--create-schema", action="store_true")
    args = parser.parse_args()

    database_url = args.database_url or get_settings().database_url
    asyncio.run(_run(database_url, create_schema=args.create_schema))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
