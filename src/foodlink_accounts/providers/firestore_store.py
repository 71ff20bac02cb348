"""Cloud Firestore profile store backed by the Firebase Admin SDK."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions

from foodlink_accounts.errors import PersistenceError
from foodlink_accounts.providers.profile_store import SERVER_TIMESTAMP, ProfileStore

logger = logging.getLogger(__name__)

# API failures and credential/token refresh failures both surface from calls.
_STORE_ERRORS = (google_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError)


def get_firebase_app(
    *, credentials_path: Path | None = None, project_id: str | None = None
) -> firebase_admin.App:
    """Return the default Firebase app, initialising it on first use."""

    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if credentials_path is not None:
        cred = credentials.Certificate(str(credentials_path))
    else:
        cred = credentials.ApplicationDefault()
    options = {"projectId": project_id} if project_id else None
    logger.info("Initialising Firebase app", extra={"project_id": project_id})
    return firebase_admin.initialize_app(cred, options)


class FirestoreProfileStore(ProfileStore):
    def __init__(self, client: Any | None = None, *, app: firebase_admin.App | None = None) -> None:
        self._db = client if client is not None else firestore.client(app)

    def _failed(self, op: str, collection: str, key: str, exc: Exception) -> PersistenceError:
        logger.error(
            f"Firestore {op} failed",
            extra={"collection": collection, "key": key, "error": str(exc)},
        )
        return PersistenceError(collection=collection, key=key, reason=str(exc))

    def put_document(self, collection: str, key: str, fields: dict[str, Any]) -> None:
        payload = {
            name: (firestore.SERVER_TIMESTAMP if value is SERVER_TIMESTAMP else value)
            for name, value in fields.items()
        }
        try:
            self._db.collection(collection).document(key).set(payload)
        except _STORE_ERRORS as e:
            raise self._failed("write", collection, key, e) from e

    def delete_document(self, collection: str, key: str) -> None:
        try:
            self._db.collection(collection).document(key).delete()
        except _STORE_ERRORS as e:
            raise self._failed("delete", collection, key, e) from e

    def get_document(self, collection: str, key: str) -> dict[str, Any] | None:
        try:
            snapshot = self._db.collection(collection).document(key).get()
        except _STORE_ERRORS as e:
            raise PersistenceError(collection=collection, key=key, reason=str(e)) from e
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}
