"""FoodLink Accounts.

Registration and sign-in workflows for FoodLink volunteers, stores and
staff:
- configuration loaded from `.env`
- structured logging
- pluggable identity provider and profile store backends
"""

__version__ = "0.1.0"

from foodlink_accounts.config import AccountsSettings

__all__ = ["__version__", "AccountsSettings"]
