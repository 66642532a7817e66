from __future__ import annotations

from types import SimpleNamespace

import pytest

from app.waitlist.service import admission
from tests.waitlist.fake_store import FakeSession, FakeWaitlistStore, install_fake_store


@pytest.fixture
def store(monkeypatch) -> FakeWaitlistStore:
    fake_store = FakeWaitlistStore()
    install_fake_store(monkeypatch, fake_store)
    monkeypatch.setattr(
        admission,
        "get_settings",
        lambda: SimpleNamespace(waitlist_vip_email_domains="aethex.dev"),
    )
    return fake_store


@pytest.fixture
def session(store: FakeWaitlistStore) -> FakeSession:
    return FakeSession(store)
