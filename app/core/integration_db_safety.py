from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import make_url

ALLOWED_LOCAL_HOSTS = frozenset(
    {
        "localhost",
        "127.0.0.1",
        "::1",
        "postgres",
        "waitlist_postgres",
    }
)


@dataclass(frozen=True, slots=True)
class IntegrationDbSafetyResult:
    is_safe: bool
    reason: str
    database_name: str
    host: str


def assess_integration_db_safety(database_url: str) -> IntegrationDbSafetyResult:
    parsed = make_url(database_url)
    db_name = (parsed.database or "").strip()
    host = (parsed.host or "").strip().lower()

    checks = (
        (parsed.get_backend_name() == "postgresql", "Integration tests support only PostgreSQL."),
        (bool(db_name), "Database name is empty."),
        ("test" in db_name.lower(), "Database name must contain 'test'."),
        (host in ALLOWED_LOCAL_HOSTS, "Host is not an allowed local integration-test host."),
    )
    for passed, reason in checks:
        if not passed:
            return IntegrationDbSafetyResult(False, reason, db_name, host)
    return IntegrationDbSafetyResult(True, "ok", db_name, host)


def assert_safe_integration_db(database_url: str) -> None:
    result = assess_integration_db_safety(database_url)
    if result.is_safe:
        return

    raise RuntimeError(
        "Refusing to run integration tests with destructive TRUNCATE.\n"
        f"Reason: {result.reason}\n"
        f"Resolved DB: name='{result.database_name}' host='{result.host}'\n"
        "Required: a dedicated local PostgreSQL test DB, e.g. 'waitlist_test'."
    )
