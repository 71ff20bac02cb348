"""Unit tests for the Firestore-backed profile store."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions

from foodlink_accounts.errors import PersistenceError
from foodlink_accounts.providers.firestore_store import FirestoreProfileStore
from foodlink_accounts.providers.profile_store import SERVER_TIMESTAMP


def test_put_document_maps_server_timestamp() -> None:
    client = MagicMock()
    store = FirestoreProfileStore(client)

    store.put_document("stores", "abc123", {"storeName": "Shop", "createdAt": SERVER_TIMESTAMP})

    client.collection.assert_called_once_with("stores")
    client.collection.return_value.document.assert_called_once_with("abc123")
    written = client.collection.return_value.document.return_value.set.call_args.args[0]
    assert written["storeName"] == "Shop"
    assert written["createdAt"] is firestore.SERVER_TIMESTAMP


def test_put_document_failure_raises_persistence_error() -> None:
    client = MagicMock()
    client.collection.return_value.document.return_value.set.side_effect = (
        google_exceptions.PermissionDenied("denied")
    )
    store = FirestoreProfileStore(client)

    with pytest.raises(PersistenceError) as excinfo:
        store.put_document("stores", "u1", {"active": True})

    assert excinfo.value.key == "u1"


def test_get_document_missing_returns_none() -> None:
    client = MagicMock()
    client.collection.return_value.document.return_value.get.return_value.exists = False

    assert FirestoreProfileStore(client).get_document("staff", "u1") is None


def test_get_document_returns_fields() -> None:
    client = MagicMock()
    snapshot = client.collection.return_value.document.return_value.get.return_value
    snapshot.exists = True
    snapshot.to_dict.return_value = {"name": "Pat"}

    assert FirestoreProfileStore(client).get_document("staff", "u1") == {"name": "Pat"}


def test_credential_failure_raises_persistence_error() -> None:
    client = MagicMock()
    client.collection.return_value.document.return_value.set.side_effect = (
        auth_exceptions.RefreshError("invalid_grant: Token has been expired or revoked.")
    )
    store = FirestoreProfileStore(client)

    with pytest.raises(PersistenceError) as excinfo:
        store.put_document("stores", "u1", {"active": True})

    assert "invalid_grant" in excinfo.value.reason


def test_delete_document() -> None:
    client = MagicMock()

    FirestoreProfileStore(client).delete_document("staffInvites", "pat@example.com")

    client.collection.assert_called_once_with("staffInvites")
    client.collection.return_value.document.assert_called_once_with("pat@example.com")
    client.collection.return_value.document.return_value.delete.assert_called_once_with()


def test_delete_document_failure_raises_persistence_error() -> None:
    client = MagicMock()
    client.collection.return_value.document.return_value.delete.side_effect = (
        google_exceptions.ServiceUnavailable("down")
    )

    with pytest.raises(PersistenceError):
        FirestoreProfileStore(client).delete_document("staffInvites", "pat@example.com")
