"""Firebase Authentication client over the Identity Toolkit REST API.

The Admin SDK cannot verify a password, so sign-in and reset-email dispatch go
through the same public endpoints the mobile SDKs use.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from foodlink_accounts.errors import IdentityError, IdentityErrorKind
from foodlink_accounts.providers.identity import IdentityProvider

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://identitytoolkit.googleapis.com/v1"

_ERROR_CODES: dict[str, IdentityErrorKind] = {
    "EMAIL_EXISTS": IdentityErrorKind.EMAIL_ALREADY_IN_USE,
    "WEAK_PASSWORD": IdentityErrorKind.WEAK_PASSWORD,
    "EMAIL_NOT_FOUND": IdentityErrorKind.USER_NOT_FOUND,
    "USER_NOT_FOUND": IdentityErrorKind.USER_NOT_FOUND,
    "INVALID_PASSWORD": IdentityErrorKind.WRONG_PASSWORD,
    "INVALID_LOGIN_CREDENTIALS": IdentityErrorKind.WRONG_PASSWORD,
    "INVALID_EMAIL": IdentityErrorKind.INVALID_EMAIL,
    "MISSING_EMAIL": IdentityErrorKind.INVALID_EMAIL,
}


def map_error_code(raw: str) -> IdentityError:
    """Translate an Identity Toolkit error message into an IdentityError.

    Messages look like ``"WEAK_PASSWORD : Password should be at least 6 characters"``;
    the code is the part before the first colon. Only the human-readable detail
    after it becomes the error message; a bare code leaves the message empty.
    """

    code, _, detail = raw.partition(":")
    code = code.strip()
    kind = _ERROR_CODES.get(code, IdentityErrorKind.OTHER)
    return IdentityError(kind, detail.strip() or None)


class FirebaseIdentityProvider(IdentityProvider):
    """Small wrapper around the Identity Toolkit endpoints we need."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("Firebase API key is required")

        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": "foodlink-accounts"})

    def close(self) -> None:
        self._session.close()

    def _post(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}/accounts:{method}"
        try:
            resp = self._session.post(
                url, params={"key": self._api_key}, json=payload, timeout=self._timeout
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.warning("Identity Toolkit unreachable", extra={"method": method})
            raise IdentityError(IdentityErrorKind.NETWORK_FAILURE, str(e)) from e
        except requests.RequestException as e:
            raise IdentityError(IdentityErrorKind.OTHER, str(e)) from e

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if resp.status_code >= 400:
            error = body.get("error")
            raw = error.get("message", "") if isinstance(error, dict) else ""
            logger.info(
                "Identity Toolkit rejected request",
                extra={"method": method, "status": resp.status_code, "code": raw.split(":")[0]},
            )
            if not raw:
                raise IdentityError(IdentityErrorKind.OTHER)
            raise map_error_code(raw)
        return body

    def _uid_from(self, body: dict[str, Any]) -> str:
        uid = body.get("localId")
        if not isinstance(uid, str) or not uid:
            raise IdentityError(IdentityErrorKind.OTHER, "Could not get user id")
        return uid

    def create_identity(self, email: str, password: str) -> str:
        body = self._post(
            "signUp", {"email": email, "password": password, "returnSecureToken": True}
        )
        return self._uid_from(body)

    def authenticate(self, email: str, password: str) -> str:
        body = self._post(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return self._uid_from(body)

    def send_password_reset(self, email: str) -> None:
        self._post("sendOobCode", {"requestType": "PASSWORD_RESET", "email": email})

    def sign_out(self) -> None:
        # signInWithPassword keeps no server-side session to end.
        return None
