"""CLI entrypoint for the account workflows.

Runs one screen's workflow against the configured backend and prints the
message and destination the screen would show.
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys

from pydantic import ValidationError

from foodlink_accounts import __version__
from foodlink_accounts.config import AccountsSettings
from foodlink_accounts.logging import configure_logging
from foodlink_accounts.models import (
    Credentials,
    RegistrationForm,
    RegistrationProfile,
    Role,
    StaffInviteForm,
    StaffRegistrationForm,
)
from foodlink_accounts.providers.factory import Backends, ProviderFactory
from foodlink_accounts.workflow import (
    ForgotPasswordWorkflow,
    RegistrationWorkflow,
    SignInWorkflow,
    StaffInvitesWorkflow,
    StaffRegistrationWorkflow,
    StaffSignInWorkflow,
    WorkflowOutcome,
)

logger = logging.getLogger(__name__)

_REGISTERABLE = [Role.STORE.value, Role.VOLUNTEER.value]
_ROLES = [r.value for r in Role]


def _password(value: str | None, prompt: str = "Password: ") -> str:
    if value is not None:
        return value
    return getpass.getpass(prompt)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="foodlink-accounts",
        description="FoodLink volunteer/store/staff account workflows",
    )
    parser.add_argument("--version", action="version", version=f"foodlink-accounts {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    register = subparsers.add_parser("register", help="Register a store or volunteer account")
    register.add_argument("--role", choices=_REGISTERABLE, default=Role.STORE.value)
    register.add_argument("--name", required=True, help="Store or volunteer name")
    register.add_argument("--contact-name", required=True)
    register.add_argument("--email", required=True)
    register.add_argument("--phone", required=True)
    register.add_argument("--address", required=True)
    register.add_argument("--password", default=None, help="Prompted for when omitted")
    register.add_argument("--confirm-password", default=None, help="Prompted for when omitted")

    login = subparsers.add_parser("login", help="Sign in")
    login.add_argument("--role", choices=_ROLES, required=True)
    login.add_argument("--email", required=True)
    login.add_argument("--password", default=None, help="Prompted for when omitted")

    reset = subparsers.add_parser("reset-password", help="Send a password reset email")
    reset.add_argument("--role", choices=_ROLES, required=True)
    reset.add_argument("--email", default="")

    forgot = subparsers.add_parser(
        "forgot-password", help="Volunteer reset screen (email must contain '@')"
    )
    forgot.add_argument("--email", default="")

    staff_register = subparsers.add_parser("staff-register", help="Register a staff account")
    staff_register.add_argument("--name", required=True)
    staff_register.add_argument("--email", required=True)
    staff_register.add_argument("--password", default=None, help="Prompted for when omitted")
    staff_register.add_argument("--confirm-password", default=None)

    invite = subparsers.add_parser("invite-staff", help="Allow an email to register as staff")
    invite.add_argument("--staff-email", required=True, help="Your staff login email")
    invite.add_argument("--staff-password", default=None, help="Prompted for when omitted")
    invite.add_argument("--name", required=True, help="Invitee's full name")
    invite.add_argument("--email", required=True, help="Invitee's email")

    uninvite = subparsers.add_parser("remove-invite", help="Withdraw a staff invite")
    uninvite.add_argument("--staff-email", required=True, help="Your staff login email")
    uninvite.add_argument("--staff-password", default=None, help="Prompted for when omitted")
    uninvite.add_argument("--email", required=True, help="Invitee's email")

    return parser


def _report(outcome: WorkflowOutcome) -> int:
    if outcome.ok:
        if outcome.message:
            print(outcome.message)
        if outcome.destination is not None:
            print(f"Next: {outcome.destination.route.value}")
        return 0
    print(outcome.message or "Cancelled", file=sys.stderr)
    return 1


def run_command(args: argparse.Namespace, settings: AccountsSettings, backends: Backends) -> int:
    identity, profiles = backends.identity, backends.profiles

    if args.command == "register":
        form = RegistrationForm(
            profile=RegistrationProfile(
                store_or_volunteer_name=args.name,
                contact_name=args.contact_name,
                email=args.email,
                phone=args.phone,
                address=args.address,
            ),
            password=_password(args.password),
            confirm_password=_password(args.confirm_password, "Confirm password: "),
        )
        screen = RegistrationWorkflow(Role(args.role), identity=identity, profiles=profiles)
        return _report(screen.register(form))

    if args.command in {"login", "reset-password"}:
        role = Role(args.role)
        sign_in: SignInWorkflow
        if role is Role.STAFF:
            sign_in = StaffSignInWorkflow(identity=identity, profiles=profiles)
        else:
            sign_in = SignInWorkflow(role, identity=identity, profiles=profiles)
        if args.command == "login":
            creds = Credentials(email=args.email, password=_password(args.password))
            return _report(sign_in.sign_in(creds))
        return _report(sign_in.request_password_reset(args.email))

    if args.command == "forgot-password":
        forgot = ForgotPasswordWorkflow(identity=identity, profiles=profiles)
        return _report(forgot.request_reset(args.email))

    if args.command == "staff-register":
        staff_form = StaffRegistrationForm(
            name=args.name,
            email=args.email,
            password=_password(args.password),
            confirm_password=_password(args.confirm_password, "Confirm password: "),
        )
        staff = StaffRegistrationWorkflow(
            identity=identity,
            profiles=profiles,
            main_staff_email=settings.main_staff_email,
        )
        return _report(staff.register(staff_form))

    if args.command in {"invite-staff", "remove-invite"}:
        staff_login = StaffSignInWorkflow(identity=identity, profiles=profiles)
        session = staff_login.sign_in(
            Credentials(
                email=args.staff_email,
                password=_password(args.staff_password, "Staff password: "),
            )
        )
        if not session.ok:
            return _report(session)
        invites = StaffInvitesWorkflow(
            identity=identity,
            profiles=profiles,
            staff_uid=session.uid or "",
            staff_email=args.staff_email.strip(),
        )
        if args.command == "invite-staff":
            return _report(invites.add_invite(StaffInviteForm(name=args.name, email=args.email)))
        return _report(invites.remove_invite(args.email))

    logger.error("Unknown command", extra={"command": args.command})
    return 2


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = AccountsSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        backends = ProviderFactory.create(settings)
    except Exception:
        logger.exception("Could not create backends")
        return 1

    try:
        return run_command(args, settings, backends)
    except Exception:
        logger.exception("Command failed")
        return 1
    finally:
        backends.close()


if __name__ == "__main__":
    raise SystemExit(main())
