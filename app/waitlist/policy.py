from __future__ import annotations

from functools import lru_cache

from email_validator import EmailNotValidError, validate_email

from app.waitlist.constants import (
    DEFAULT_PRIMARY_INTEREST,
    DEFAULT_USER_TYPE,
    EMAIL_MAX_LENGTH,
    FULL_NAME_MAX_LENGTH,
    PRIMARY_INTEREST_MAX_LENGTH,
    ROBLOX_USERNAME_MAX_LENGTH,
    TIER_STANDARD,
    TIER_VIP,
    USER_TYPES,
)
from app.waitlist.errors import SignupValidationError
from app.waitlist.types import SignupInput


def normalize_email(raw_email: str) -> str:
    """Signups are keyed and stored by this form; uniqueness depends on it."""
    return raw_email.strip().lower()


def email_domain(email: str) -> str:
    _, _, domain = email.rpartition("@")
    return domain


@lru_cache(maxsize=32)
def parse_domain_allowlist(allowlist: str) -> frozenset[str]:
    domains = set()
    for raw_entry in allowlist.split(","):
        entry = raw_entry.strip().lower().lstrip("@")
        if entry:
            domains.add(entry)
    return frozenset(domains)


def resolve_priority_tier(email: str, *, vip_domains: frozenset[str]) -> str:
    if email_domain(normalize_email(email)) in vip_domains:
        return TIER_VIP
    return TIER_STANDARD


def people_behind(*, waitlist_total: int, position_in_queue: int) -> int:
    return max(0, waitlist_total - position_in_queue)


def _is_valid_email(email: str) -> bool:
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _clean_optional(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def validate_signup_input(
    *,
    email: str | None,
    full_name: str | None,
    user_type: str | None,
    primary_interest: str | None,
    roblox_username: str | None,
) -> SignupInput:
    errors: dict[str, str] = {}

    normalized_email = normalize_email(email or "")
    if not normalized_email:
        errors["email"] = "required"
    elif len(normalized_email) > EMAIL_MAX_LENGTH or not _is_valid_email(normalized_email):
        errors["email"] = "invalid"

    cleaned_name = (full_name or "").strip()
    if not cleaned_name:
        errors["full_name"] = "required"
    elif len(cleaned_name) > FULL_NAME_MAX_LENGTH:
        errors["full_name"] = "too_long"

    resolved_user_type = (_clean_optional(user_type) or DEFAULT_USER_TYPE).lower()
    if resolved_user_type not in USER_TYPES:
        errors["user_type"] = "invalid"

    resolved_interest = _clean_optional(primary_interest) or DEFAULT_PRIMARY_INTEREST
    if len(resolved_interest) > PRIMARY_INTEREST_MAX_LENGTH:
        errors["primary_interest"] = "too_long"

    resolved_username = _clean_optional(roblox_username)
    if resolved_username is not None:
        resolved_username = resolved_username.lstrip("@").strip() or None
    if resolved_username is not None and len(resolved_username) > ROBLOX_USERNAME_MAX_LENGTH:
        errors["roblox_username"] = "too_long"

    if errors:
        raise SignupValidationError(errors)

    return SignupInput(
        email=normalized_email,
        full_name=cleaned_name,
        user_type=resolved_user_type,
        primary_interest=resolved_interest,
        roblox_username=resolved_username,
    )
