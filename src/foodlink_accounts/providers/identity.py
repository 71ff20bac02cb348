"""Abstract base class for identity providers."""

from abc import ABC, abstractmethod


class IdentityProvider(ABC):
    """Credential-based identity service.

    Implementations raise :class:`foodlink_accounts.errors.IdentityError` for
    every provider-reported failure so the workflows never see SDK types.
    """

    @abstractmethod
    def create_identity(self, email: str, password: str) -> str:
        """Create a new identity.

        Args:
            email: Account email. Must not already be registered.
            password: Plain-text password.

        Returns:
            The uid assigned to the new identity.
        """
        pass

    @abstractmethod
    def authenticate(self, email: str, password: str) -> str:
        """Authenticate an existing identity.

        Returns:
            The uid of the authenticated identity.
        """
        pass

    @abstractmethod
    def send_password_reset(self, email: str) -> None:
        """Dispatch a password reset email."""
        pass

    @abstractmethod
    def sign_out(self) -> None:
        """Drop the session established by the last successful authenticate."""
        pass

    def close(self) -> None:
        """Release network resources. Backends without any keep the default no-op."""
        return None
