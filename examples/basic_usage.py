#!/usr/bin/env python3
"""Programmatic registration and sign-in example.

This demonstrates using the workflows directly:

* load settings from `.env`
* register a store account
* sign in with the same credentials
* hand the resulting destination to a navigator

With the default `memory` backend nothing leaves the process.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from foodlink_accounts.config import AccountsSettings
from foodlink_accounts.logging import configure_logging
from foodlink_accounts.models import Credentials, RegistrationForm, RegistrationProfile, Role
from foodlink_accounts.navigation import dispatch
from foodlink_accounts.providers.factory import ProviderFactory
from foodlink_accounts.workflow import RegistrationWorkflow, SignInWorkflow


class PrintNavigator:
    def navigate_and_clear_history(self, route: str) -> None:
        print(f"-> {route} (history cleared)")

    def navigate(self, route: str) -> None:
        print(f"-> {route}")


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Register and sign in a store (example).")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--store-name", default="Corner Grocer")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = AccountsSettings()
    configure_logging(settings.log_level)
    backends = ProviderFactory.create(settings)
    navigator = PrintNavigator()

    form = RegistrationForm(
        profile=RegistrationProfile(
            store_or_volunteer_name=args.store_name,
            contact_name="Store Manager",
            email=args.email,
            phone="555-0100",
            address="12 Main St",
        ),
        password=args.password,
        confirm_password=args.password,
    )
    screen = RegistrationWorkflow(Role.STORE, identity=backends.identity, profiles=backends.profiles)
    outcome = screen.register(form)
    if not outcome.ok:
        print(outcome.message)
        return 1
    dispatch(outcome, navigator)

    login = SignInWorkflow(Role.STORE, identity=backends.identity, profiles=backends.profiles)
    outcome = login.sign_in(Credentials(email=args.email, password=args.password))
    print(f"Signed in as {outcome.uid}" if outcome.ok else outcome.message)
    dispatch(outcome, navigator)
    return 0 if outcome.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
