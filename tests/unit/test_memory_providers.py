"""Unit tests for the in-memory backends."""

from __future__ import annotations

import pytest

from foodlink_accounts.errors import IdentityError, IdentityErrorKind, PersistenceError
from foodlink_accounts.providers.memory import InMemoryIdentityProvider, InMemoryProfileStore
from foodlink_accounts.providers.profile_store import SERVER_TIMESTAMP, ServerTimestamp


def test_one_identity_per_email(identity: InMemoryIdentityProvider) -> None:
    identity.create_identity("a@b.com", "secret1")

    with pytest.raises(IdentityError) as excinfo:
        identity.create_identity("A@B.com", "secret2")

    assert excinfo.value.kind is IdentityErrorKind.EMAIL_ALREADY_IN_USE


@pytest.mark.parametrize(
    ("email", "password", "kind"),
    [
        ("a@b.com", "12345", IdentityErrorKind.WEAK_PASSWORD),
        ("ab.com", "secret1", IdentityErrorKind.INVALID_EMAIL),
        ("@b.com", "secret1", IdentityErrorKind.INVALID_EMAIL),
    ],
)
def test_create_identity_rejections(identity, email, password, kind) -> None:
    with pytest.raises(IdentityError) as excinfo:
        identity.create_identity(email, password)
    assert excinfo.value.kind is kind


def test_authenticate(identity: InMemoryIdentityProvider) -> None:
    uid = identity.create_identity("a@b.com", "secret1")
    identity.sign_out()

    assert identity.authenticate("a@b.com", "secret1") == uid
    assert identity.current_uid == uid
    with pytest.raises(IdentityError) as excinfo:
        identity.authenticate("a@b.com", "wrong-pw")
    assert excinfo.value.kind is IdentityErrorKind.WRONG_PASSWORD


def test_server_timestamp_is_a_singleton() -> None:
    assert ServerTimestamp() is SERVER_TIMESTAMP
    assert repr(SERVER_TIMESTAMP) == "SERVER_TIMESTAMP"


def test_store_returns_copies(profiles: InMemoryProfileStore) -> None:
    profiles.put_document("stores", "k", {"tags": ["a"], "createdAt": SERVER_TIMESTAMP})

    doc = profiles.get_document("stores", "k")
    assert doc is not None
    doc["tags"].append("b")

    again = profiles.get_document("stores", "k")
    assert again is not None
    assert again["tags"] == ["a"]
    assert again["createdAt"] is not SERVER_TIMESTAMP


def test_store_rejects_empty_key(profiles: InMemoryProfileStore) -> None:
    with pytest.raises(PersistenceError):
        profiles.put_document("stores", "", {})


def test_delete_document(profiles: InMemoryProfileStore) -> None:
    profiles.put_document("staffInvites", "pat@example.com", {"name": "Pat"})

    profiles.delete_document("staffInvites", "pat@example.com")
    profiles.delete_document("staffInvites", "pat@example.com")

    assert profiles.get_document("staffInvites", "pat@example.com") is None
