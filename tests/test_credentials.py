# tests/test_credentials.py

from __future__ import annotations

import pytest

from planner_client.session.credentials import Credential, CredentialStore


def test_store_starts_empty_and_clear_makes_it_absent() -> None:
    store = CredentialStore()
    assert store.get() is None
    assert not store.has_token()

    store.set("t1")
    assert store.get() == "t1"
    assert store.credential() == Credential(token="t1")

    store.clear()
    assert store.get() is None
    assert store.credential() is None


def test_last_write_wins() -> None:
    store = CredentialStore()
    store.set("t1")
    store.set("t2")
    assert store.get() == "t2"


def test_empty_token_is_rejected() -> None:
    store = CredentialStore()
    with pytest.raises(ValueError):
        store.set("   ")
    assert store.get() is None


def test_credential_never_shows_token_in_repr() -> None:
    cred = Credential(token="super-secret")
    assert "super-secret" not in repr(cred)
    assert cred.authorization() == "Bearer super-secret"


def test_separate_stores_do_not_share_state() -> None:
    a, b = CredentialStore(), CredentialStore()
    a.set("t1")
    assert b.get() is None
