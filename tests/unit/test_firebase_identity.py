"""Unit tests for the Identity Toolkit REST client."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests

from foodlink_accounts.errors import IdentityError, IdentityErrorKind
from foodlink_accounts.models import Credentials, Role
from foodlink_accounts.providers.firebase_identity import (
    FirebaseIdentityProvider,
    map_error_code,
)
from foodlink_accounts.providers.memory import InMemoryProfileStore
from foodlink_accounts.workflow import ForgotPasswordWorkflow, SignInWorkflow


def _response(status: int, body: object) -> Mock:
    resp = Mock()
    resp.status_code = status
    resp.json.return_value = body
    return resp


def _provider(*responses: Mock) -> tuple[FirebaseIdentityProvider, Mock]:
    session = Mock()
    session.headers = {}
    session.post.side_effect = list(responses)
    provider = FirebaseIdentityProvider(
        api_key="test-key", base_url="https://auth.example/v1/", timeout=3.0, session=session
    )
    return provider, session


def test_requires_api_key() -> None:
    with pytest.raises(ValueError):
        FirebaseIdentityProvider(api_key="")


def test_create_identity_posts_sign_up() -> None:
    provider, session = _provider(_response(200, {"localId": "abc123", "idToken": "t"}))

    uid = provider.create_identity("a@b.com", "secret1")

    assert uid == "abc123"
    session.post.assert_called_once_with(
        "https://auth.example/v1/accounts:signUp",
        params={"key": "test-key"},
        json={"email": "a@b.com", "password": "secret1", "returnSecureToken": True},
        timeout=3.0,
    )


def test_authenticate_maps_email_not_found() -> None:
    provider, _ = _provider(_response(400, {"error": {"code": 400, "message": "EMAIL_NOT_FOUND"}}))

    with pytest.raises(IdentityError) as excinfo:
        provider.authenticate("a@b.com", "secret1")

    assert excinfo.value.kind is IdentityErrorKind.USER_NOT_FOUND


def test_send_password_reset_uses_oob_code() -> None:
    provider, session = _provider(_response(200, {"email": "a@b.com"}))

    provider.send_password_reset("a@b.com")

    _, kwargs = session.post.call_args
    assert kwargs["json"] == {"requestType": "PASSWORD_RESET", "email": "a@b.com"}
    assert session.post.call_args.args[0].endswith("accounts:sendOobCode")


def test_connection_error_is_network_failure() -> None:
    session = Mock()
    session.headers = {}
    session.post.side_effect = requests.ConnectionError("offline")
    provider = FirebaseIdentityProvider(api_key="k", session=session)

    with pytest.raises(IdentityError) as excinfo:
        provider.authenticate("a@b.com", "secret1")

    assert excinfo.value.kind is IdentityErrorKind.NETWORK_FAILURE


def test_missing_local_id_is_an_error() -> None:
    provider, _ = _provider(_response(200, {}))

    with pytest.raises(IdentityError) as excinfo:
        provider.authenticate("a@b.com", "secret1")

    assert excinfo.value.kind is IdentityErrorKind.OTHER


def test_error_without_body_has_no_message() -> None:
    provider, _ = _provider(_response(503, None))

    with pytest.raises(IdentityError) as excinfo:
        provider.create_identity("a@b.com", "secret1")

    assert excinfo.value.kind is IdentityErrorKind.OTHER
    assert excinfo.value.message is None


@pytest.mark.parametrize(
    ("raw", "kind", "message"),
    [
        ("EMAIL_EXISTS", IdentityErrorKind.EMAIL_ALREADY_IN_USE, None),
        (
            "WEAK_PASSWORD : Password should be at least 6 characters",
            IdentityErrorKind.WEAK_PASSWORD,
            "Password should be at least 6 characters",
        ),
        ("INVALID_PASSWORD", IdentityErrorKind.WRONG_PASSWORD, None),
        ("INVALID_EMAIL", IdentityErrorKind.INVALID_EMAIL, None),
        ("TOO_MANY_ATTEMPTS_TRY_LATER", IdentityErrorKind.OTHER, None),
    ],
)
def test_map_error_code(raw, kind, message) -> None:
    error = map_error_code(raw)
    assert error.kind is kind
    assert error.message == message


def test_close_closes_session() -> None:
    provider, session = _provider()

    provider.close()

    session.close.assert_called_once()


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("EMAIL_NOT_FOUND", "No volunteer account found with that email."),
        ("INVALID_EMAIL", "Please enter a valid email address."),
        ("QUOTA_EXCEEDED", "Failed to send reset email."),
        ("QUOTA_EXCEEDED : Try again tomorrow", "Try again tomorrow"),
    ],
)
def test_forgot_password_never_shows_bare_codes(code, expected) -> None:
    provider, _ = _provider(_response(400, {"error": {"code": 400, "message": code}}))
    screen = ForgotPasswordWorkflow(identity=provider, profiles=InMemoryProfileStore())

    outcome = screen.request_reset("ghost@x.org")

    assert not outcome.ok
    assert outcome.message == expected


def test_sign_in_other_code_shows_generic_login_error() -> None:
    provider, _ = _provider(
        _response(400, {"error": {"code": 400, "message": "TOO_MANY_ATTEMPTS_TRY_LATER"}})
    )
    screen = SignInWorkflow(Role.STORE, identity=provider, profiles=InMemoryProfileStore())

    outcome = screen.sign_in(Credentials(email="a@b.com", password="secret1"))

    assert outcome.message == "Login error: Please try again."


def test_store_reset_other_code_uses_role_fallback() -> None:
    provider, _ = _provider(_response(400, {"error": {"code": 400, "message": "RESET_BLOCKED"}}))
    screen = SignInWorkflow(Role.STORE, identity=provider, profiles=InMemoryProfileStore())

    outcome = screen.request_password_reset("a@b.com")

    assert outcome.message == "Could not send reset email."


def test_reset_network_failure_is_friendly() -> None:
    session = Mock()
    session.headers = {}
    session.post.side_effect = requests.ConnectionError("Max retries exceeded with url")
    provider = FirebaseIdentityProvider(api_key="k", session=session)
    screen = SignInWorkflow(Role.VOLUNTEER, identity=provider, profiles=InMemoryProfileStore())

    outcome = screen.request_password_reset("a@b.com")

    assert outcome.message == "Network error. Please check your internet connection."
