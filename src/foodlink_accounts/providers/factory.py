"""Factory for creating identity/profile backends."""

import logging
from dataclasses import dataclass

from foodlink_accounts.config import AccountsSettings
from foodlink_accounts.providers.identity import IdentityProvider
from foodlink_accounts.providers.memory import InMemoryIdentityProvider, InMemoryProfileStore
from foodlink_accounts.providers.profile_store import ProfileStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Backends:
    identity: IdentityProvider
    profiles: ProfileStore

    def close(self) -> None:
        self.identity.close()


class ProviderFactory:
    """Factory for creating provider instances."""

    @staticmethod
    def create(settings: AccountsSettings) -> Backends:
        """Create the identity provider and profile store named by settings.

        Args:
            settings: Settings specifying the backend.

        Returns:
            The configured pair of backends.

        Raises:
            ValueError: If the backend type is not supported.
        """
        logger.info(f"Creating account backends: {settings.backend}")

        if settings.backend == "memory":
            return Backends(identity=InMemoryIdentityProvider(), profiles=InMemoryProfileStore())
        elif settings.backend == "firebase":
            # Imported lazily so the memory backend works without Google credentials.
            from foodlink_accounts.providers.firebase_identity import FirebaseIdentityProvider
            from foodlink_accounts.providers.firestore_store import (
                FirestoreProfileStore,
                get_firebase_app,
            )

            app = get_firebase_app(
                credentials_path=settings.firebase_credentials_path,
                project_id=settings.firebase_project_id,
            )
            return Backends(
                identity=FirebaseIdentityProvider(
                    api_key=settings.firebase_api_key,
                    base_url=settings.identity_toolkit_base_url,
                    timeout=settings.request_timeout_seconds,
                ),
                profiles=FirestoreProfileStore(app=app),
            )
        else:
            raise ValueError(f"Unsupported backend: {settings.backend}")
