"""Process-local identity provider and profile store.

Used for local development (`FOODLINK_BACKEND=memory`) and as test doubles.
They mirror the observable rules of the hosted services: one identity per
email, weak and malformed inputs rejected, timestamps assigned on write.
"""

from __future__ import annotations

import copy
import logging
import threading
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from foodlink_accounts.errors import IdentityError, IdentityErrorKind, PersistenceError
from foodlink_accounts.models import MIN_PASSWORD_LENGTH
from foodlink_accounts.providers.identity import IdentityProvider
from foodlink_accounts.providers.profile_store import SERVER_TIMESTAMP, ProfileStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Identity:
    uid: str
    email: str
    password: str


class InMemoryIdentityProvider(IdentityProvider):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_email: dict[str, _Identity] = {}
        self.current_uid: str | None = None
        self.reset_requests: list[str] = []

    @staticmethod
    def _key(email: str) -> str:
        return email.strip().lower()

    @staticmethod
    def _check_email(email: str) -> None:
        local, sep, domain = email.strip().partition("@")
        if not sep or not local or not domain:
            raise IdentityError(IdentityErrorKind.INVALID_EMAIL, "The email address is badly formatted.")

    def create_identity(self, email: str, password: str) -> str:
        self._check_email(email)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise IdentityError(
                IdentityErrorKind.WEAK_PASSWORD, "Password should be at least 6 characters"
            )
        with self._lock:
            key = self._key(email)
            if key in self._by_email:
                raise IdentityError(
                    IdentityErrorKind.EMAIL_ALREADY_IN_USE,
                    "The email address is already in use by another account.",
                )
            uid = uuid.uuid4().hex[:28]
            self._by_email[key] = _Identity(uid=uid, email=email.strip(), password=password)
            self.current_uid = uid
        logger.debug("Created in-memory identity", extra={"uid": uid})
        return uid

    def authenticate(self, email: str, password: str) -> str:
        self._check_email(email)
        with self._lock:
            identity = self._by_email.get(self._key(email))
            if identity is None:
                raise IdentityError(IdentityErrorKind.USER_NOT_FOUND, "There is no user record.")
            if identity.password != password:
                raise IdentityError(IdentityErrorKind.WRONG_PASSWORD, "The password is invalid.")
            self.current_uid = identity.uid
            return identity.uid

    def send_password_reset(self, email: str) -> None:
        self._check_email(email)
        with self._lock:
            if self._key(email) not in self._by_email:
                raise IdentityError(IdentityErrorKind.USER_NOT_FOUND, "There is no user record.")
            self.reset_requests.append(email.strip())

    def sign_out(self) -> None:
        self.current_uid = None

    def uid_for(self, email: str) -> str | None:
        identity = self._by_email.get(self._key(email))
        return identity.uid if identity is not None else None


class InMemoryProfileStore(ProfileStore):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    def put_document(self, collection: str, key: str, fields: dict[str, Any]) -> None:
        if not key:
            raise PersistenceError(collection=collection, key=key, reason="empty document key")
        now = datetime.now(UTC)
        stored = {k: (now if v is SERVER_TIMESTAMP else copy.deepcopy(v)) for k, v in fields.items()}
        with self._lock:
            self._collections.setdefault(collection, {})[key] = stored

    def delete_document(self, collection: str, key: str) -> None:
        if not key:
            raise PersistenceError(collection=collection, key=key, reason="empty document key")
        with self._lock:
            self._collections.get(collection, {}).pop(key, None)

    def get_document(self, collection: str, key: str) -> dict[str, Any] | None:
        with self._lock:
            doc = self._collections.get(collection, {}).get(key)
            return copy.deepcopy(doc) if doc is not None else None
