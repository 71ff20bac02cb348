"""REST API over the account workflows."""

from foodlink_accounts.server.app import create_app

__all__ = ["create_app"]
