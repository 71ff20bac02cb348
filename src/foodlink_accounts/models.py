"""Account roles and the form values the workflows consume."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from foodlink_accounts.errors import ValidationError

MIN_PASSWORD_LENGTH = 6

REQUIRED_FIELD = "Required field"
PASSWORD_TOO_SHORT = "At least 6 characters"
PASSWORDS_DO_NOT_MATCH = "Passwords do not match"

INVITE_NAME_REQUIRED = "Enter a name"
INVITE_EMAIL_REQUIRED = "Enter an email"
INVITE_EMAIL_INVALID = "Enter a valid email"


class Role(str, Enum):
    VOLUNTEER = "volunteer"
    STORE = "store"
    STAFF = "staff"

    @property
    def collection(self) -> str:
        """Profile store collection holding this role's documents."""

        return _COLLECTIONS[self]

    @property
    def name_field(self) -> str:
        """Document key under which the account's display name is stored."""

        return "storeName" if self is Role.STORE else "name"


_COLLECTIONS: dict[Role, str] = {
    Role.VOLUNTEER: "volunteers",
    Role.STORE: "stores",
    Role.STAFF: "staff",
}


@dataclass(frozen=True, slots=True)
class Credentials:
    """Email/password pair. Held only for the duration of one submission."""

    email: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, password='***')"

    def normalized(self) -> Credentials:
        return Credentials(email=self.email.strip(), password=self.password)

    def validate(self) -> None:
        if not self.email.strip():
            raise ValidationError(field="email", message=REQUIRED_FIELD)
        if not self.password:
            raise ValidationError(field="password", message=REQUIRED_FIELD)


@dataclass(frozen=True, slots=True)
class RegistrationProfile:
    store_or_volunteer_name: str
    contact_name: str
    email: str
    phone: str
    address: str

    def normalized(self) -> RegistrationProfile:
        return RegistrationProfile(
            store_or_volunteer_name=self.store_or_volunteer_name.strip(),
            contact_name=self.contact_name.strip(),
            email=self.email.strip(),
            phone=self.phone.strip(),
            address=self.address.strip(),
        )

    def to_fields(self, role: Role) -> dict[str, object]:
        p = self.normalized()
        return {
            role.name_field: p.store_or_volunteer_name,
            "contactName": p.contact_name,
            "email": p.email,
            "phone": p.phone,
            "address": p.address,
        }


def _require(field: str, value: str) -> None:
    if not value.strip():
        raise ValidationError(field=field, message=REQUIRED_FIELD)


def _check_passwords(password: str, confirm_password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(field="password", message=PASSWORD_TOO_SHORT)
    if len(confirm_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(field="confirm_password", message=PASSWORD_TOO_SHORT)
    if password != confirm_password:
        raise ValidationError(field="confirm_password", message=PASSWORDS_DO_NOT_MATCH)


@dataclass(frozen=True, slots=True)
class RegistrationForm:
    """Values of a store/volunteer registration screen.

    `validate()` is the synchronous validity check: it raises on the first
    offending field in display order.
    """

    profile: RegistrationProfile
    password: str
    confirm_password: str

    def validate(self) -> None:
        p = self.profile
        _require("store_or_volunteer_name", p.store_or_volunteer_name)
        _require("contact_name", p.contact_name)
        _require("email", p.email)
        _require("phone", p.phone)
        _require("address", p.address)
        _check_passwords(self.password, self.confirm_password)

    @property
    def credentials(self) -> Credentials:
        return Credentials(email=self.profile.email.strip(), password=self.password)


@dataclass(frozen=True, slots=True)
class StaffRegistrationForm:
    name: str
    email: str
    password: str
    confirm_password: str

    def validate(self) -> None:
        _require("name", self.name)
        _require("email", self.email)
        _check_passwords(self.password, self.confirm_password)

    @property
    def credentials(self) -> Credentials:
        return Credentials(email=self.email.strip(), password=self.password)


@dataclass(frozen=True, slots=True)
class StaffInviteForm:
    """Name and email of someone allowed to register as staff."""

    name: str
    email: str

    def validate(self) -> None:
        if not self.name.strip():
            raise ValidationError(field="name", message=INVITE_NAME_REQUIRED)
        email = self.email.strip()
        if not email:
            raise ValidationError(field="email", message=INVITE_EMAIL_REQUIRED)
        if "@" not in email or "." not in email:
            raise ValidationError(field="email", message=INVITE_EMAIL_INVALID)

    @property
    def email_key(self) -> str:
        return invite_key(self.email)


def invite_key(email: str) -> str:
    """Document key of the invite for `email`."""

    return email.strip().lower()
