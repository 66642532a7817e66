from __future__ import annotations

import pytest

from app.waitlist.errors import SignupValidationError
from app.waitlist.policy import (
    email_domain,
    normalize_email,
    parse_domain_allowlist,
    people_behind,
    resolve_priority_tier,
    validate_signup_input,
)


def test_normalize_email_trims_and_lowercases() -> None:
    assert normalize_email("  Ada.Builder@DevMail.COM\n") == "ada.builder@devmail.com"


def test_email_domain_uses_last_at_sign() -> None:
    assert email_domain("ada@devmail.com") == "devmail.com"
    assert email_domain("no-at-sign") == "no-at-sign"


def test_parse_domain_allowlist_skips_blanks_and_at_prefix() -> None:
    assert parse_domain_allowlist(" aethex.dev, @Studio.GG ,, ") == frozenset(
        {"aethex.dev", "studio.gg"}
    )
    assert parse_domain_allowlist("") == frozenset()


@pytest.mark.parametrize(
    ("email", "expected_tier"),
    [
        ("lead@aethex.dev", "vip"),
        ("Lead@AETHEX.dev", "vip"),
        ("lead@mail.aethex.dev", "standard"),
        ("lead@aethex.dev.example.com", "standard"),
        ("player@devmail.com", "standard"),
    ],
)
def test_resolve_priority_tier_matches_exact_domain(email: str, expected_tier: str) -> None:
    vip_domains = parse_domain_allowlist("aethex.dev")

    assert resolve_priority_tier(email, vip_domains=vip_domains) == expected_tier


def test_people_behind_never_negative() -> None:
    assert people_behind(waitlist_total=120, position_in_queue=20) == 100
    assert people_behind(waitlist_total=5, position_in_queue=9) == 0


def test_validate_signup_input_applies_defaults() -> None:
    signup_input = validate_signup_input(
        email=" Ada@DevMail.com ",
        full_name="  Ada Builder ",
        user_type=None,
        primary_interest="  ",
        roblox_username=" @AdaBuilds ",
    )

    assert signup_input.email == "ada@devmail.com"
    assert signup_input.full_name == "Ada Builder"
    assert signup_input.user_type == "developer"
    assert signup_input.primary_interest == "Finding Jobs"
    assert signup_input.roblox_username == "AdaBuilds"


def test_validate_signup_input_accepts_known_user_types_case_insensitively() -> None:
    signup_input = validate_signup_input(
        email="hiring@studio.gg",
        full_name="Studio Lead",
        user_type="Employer",
        primary_interest="Hiring Talent",
        roblox_username=None,
    )

    assert signup_input.user_type == "employer"
    assert signup_input.roblox_username is None


def test_validate_signup_input_reports_every_bad_field() -> None:
    with pytest.raises(SignupValidationError) as exc_info:
        validate_signup_input(
            email="ada@@devmail",
            full_name="x" * 201,
            user_type="investor",
            primary_interest="y" * 65,
            roblox_username="z" * 65,
        )

    assert exc_info.value.fields == {
        "email": "invalid",
        "full_name": "too_long",
        "user_type": "invalid",
        "primary_interest": "too_long",
        "roblox_username": "too_long",
    }
