"""Error taxonomy shared by the account workflows.

Provider adapters translate SDK/HTTP failures into these exceptions; workflows
translate them into user-visible outcomes. Nothing here is allowed to escape a
workflow boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class IdentityErrorKind(str, Enum):
    EMAIL_ALREADY_IN_USE = "email_already_in_use"
    WEAK_PASSWORD = "weak_password"
    USER_NOT_FOUND = "user_not_found"
    WRONG_PASSWORD = "wrong_password"
    INVALID_EMAIL = "invalid_email"
    NETWORK_FAILURE = "network_failure"
    OTHER = "other"


class ErrorKind(str, Enum):
    """Category of a failed workflow outcome."""

    VALIDATION = "validation"
    IDENTITY = "identity"
    PERSISTENCE = "persistence"
    AUTHORIZATION = "authorization"
    BUSY = "busy"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class ValidationError(Exception):
    """Local input error. Raised before any network call."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True, slots=True)
class IdentityError(Exception):
    """Failure reported by the identity provider.

    `message` is the provider's raw message when one is available.
    """

    kind: IdentityErrorKind
    message: str | None = None

    def __str__(self) -> str:
        if self.message:
            return f"{self.kind.value}: {self.message}"
        return self.kind.value


@dataclass(frozen=True, slots=True)
class PersistenceError(Exception):
    """A profile store read or write failed."""

    collection: str
    key: str
    reason: str = ""

    def __str__(self) -> str:
        return f"Profile store failure at {self.collection}/{self.key}: {self.reason}"


@dataclass(frozen=True, slots=True)
class AuthorizationError(Exception):
    """The identity is valid but not allowed to use this screen."""

    message: str

    def __str__(self) -> str:
        return self.message
