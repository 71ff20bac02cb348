"""Unit tests for the CLI entrypoint."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock

import pytest

from foodlink_accounts.main import build_parser, main, run_command
from foodlink_accounts.providers.factory import Backends, ProviderFactory


def test_register_and_login(settings, backends, capsys) -> None:
    parser = build_parser()
    args = parser.parse_args(
        [
            "register",
            "--role",
            "volunteer",
            "--name",
            "Sam",
            "--contact-name",
            "Sam Ortiz",
            "--email",
            "sam@example.com",
            "--phone",
            "555-0101",
            "--address",
            "1 Elm St",
            "--password",
            "secret1",
            "--confirm-password",
            "secret1",
        ]
    )
    assert run_command(args, settings, backends) == 0
    assert "Next: volunteerDashboard" in capsys.readouterr().out

    args = parser.parse_args(
        ["login", "--role", "volunteer", "--email", "sam@example.com", "--password", "nope123"]
    )
    assert run_command(args, settings, backends) == 1
    assert "Incorrect password. Please try again." in capsys.readouterr().err


def test_reset_password_without_email(settings, backends, capsys) -> None:
    args = build_parser().parse_args(["reset-password", "--role", "staff"])

    assert run_command(args, settings, backends) == 1
    assert "Enter your staff email first." in capsys.readouterr().err


def test_staff_register_without_invite(settings, backends, capsys) -> None:
    args = build_parser().parse_args(
        [
            "staff-register",
            "--name",
            "Pat",
            "--email",
            "pat@example.com",
            "--password",
            "secret1",
            "--confirm-password",
            "secret1",
        ]
    )

    assert run_command(args, settings, backends) == 1
    assert "not authorized for staff access" in capsys.readouterr().err


def test_main_reports_configuration_errors(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FOODLINK_BACKEND", "firebase")
    monkeypatch.delenv("FIREBASE_API_KEY", raising=False)

    assert main(["forgot-password", "--email", "a@b.com"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def _staff_register(settings, backends) -> None:
    args = build_parser().parse_args(
        [
            "staff-register",
            "--name",
            "Admin",
            "--email",
            "foodlink.admin@example.com",
            "--password",
            "secret1",
            "--confirm-password",
            "secret1",
        ]
    )
    assert run_command(args, settings, backends) == 0


def test_invite_staff_then_remove(settings, backends, profiles, capsys) -> None:
    _staff_register(settings, backends)
    session = ["--staff-email", "foodlink.admin@example.com", "--staff-password", "secret1"]
    parser = build_parser()

    args = parser.parse_args(
        ["invite-staff", *session, "--name", "Pat", "--email", "pat@example.com"]
    )
    assert run_command(args, settings, backends) == 0
    assert "Staff invite added" in capsys.readouterr().out
    assert profiles.get_document("staffInvites", "pat@example.com") is not None

    args = parser.parse_args(["remove-invite", *session, "--email", "pat@example.com"])
    assert run_command(args, settings, backends) == 0
    assert "Invite removed" in capsys.readouterr().out
    assert profiles.get_document("staffInvites", "pat@example.com") is None


def test_invite_staff_rejects_non_staff(settings, backends, identity, capsys) -> None:
    identity.create_identity("shop@example.com", "secret1")
    args = build_parser().parse_args(
        [
            "invite-staff",
            "--staff-email",
            "shop@example.com",
            "--staff-password",
            "secret1",
            "--name",
            "Pat",
            "--email",
            "pat@example.com",
        ]
    )

    assert run_command(args, settings, backends) == 1
    assert "not registered as FoodLink staff" in capsys.readouterr().err


def test_main_closes_backends(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FOODLINK_BACKEND", "memory")
    created = Mock(spec=Backends)
    monkeypatch.setattr(ProviderFactory, "create", staticmethod(lambda _settings: created))
    monkeypatch.setattr("foodlink_accounts.main.run_command", lambda *_: 0)

    assert main(["forgot-password", "--email", "a@b.com"]) == 0
    created.close.assert_called_once()
