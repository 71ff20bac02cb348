"""Abstract base class for profile document stores."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ServerTimestamp:
    """Placeholder replaced by the store's own clock when a document is written."""

    _instance: ServerTimestamp | None = None

    def __new__(cls) -> ServerTimestamp:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = ServerTimestamp()


class ProfileStore(ABC):
    """Document database holding one profile document per uid.

    Implementations raise :class:`foodlink_accounts.errors.PersistenceError`
    when a read or write fails.
    """

    @abstractmethod
    def put_document(self, collection: str, key: str, fields: dict[str, Any]) -> None:
        """Create or overwrite the document at ``collection/key``.

        Any value equal to :data:`SERVER_TIMESTAMP` is assigned by the store.
        """
        pass

    @abstractmethod
    def delete_document(self, collection: str, key: str) -> None:
        """Delete the document at ``collection/key``. Deleting a missing document is a no-op."""
        pass

    @abstractmethod
    def get_document(self, collection: str, key: str) -> dict[str, Any] | None:
        """Return the document at ``collection/key`` or None when it does not exist."""
        pass
