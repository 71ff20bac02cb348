"""Identity provider and profile store backends."""

from foodlink_accounts.providers.factory import Backends, ProviderFactory
from foodlink_accounts.providers.identity import IdentityProvider
from foodlink_accounts.providers.memory import InMemoryIdentityProvider, InMemoryProfileStore
from foodlink_accounts.providers.profile_store import SERVER_TIMESTAMP, ProfileStore

__all__ = [
    "SERVER_TIMESTAMP",
    "Backends",
    "IdentityProvider",
    "InMemoryIdentityProvider",
    "InMemoryProfileStore",
    "ProfileStore",
    "ProviderFactory",
]
