"""Pydantic models for the REST server."""

from __future__ import annotations

from pydantic import BaseModel, Field

from foodlink_accounts.models import (
    Credentials,
    RegistrationForm,
    RegistrationProfile,
    StaffInviteForm,
    StaffRegistrationForm,
)


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""

    def to_credentials(self) -> Credentials:
        return Credentials(email=self.email, password=self.password)


class PasswordResetRequest(BaseModel):
    email: str = ""


class RegisterRequest(BaseModel):
    name: str = Field(default="", description="Store or volunteer name")
    contact_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    password: str = ""
    confirm_password: str = ""

    def to_form(self) -> RegistrationForm:
        return RegistrationForm(
            profile=RegistrationProfile(
                store_or_volunteer_name=self.name,
                contact_name=self.contact_name,
                email=self.email,
                phone=self.phone,
                address=self.address,
            ),
            password=self.password,
            confirm_password=self.confirm_password,
        )


class StaffRegisterRequest(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""

    def to_form(self) -> StaffRegistrationForm:
        return StaffRegistrationForm(
            name=self.name,
            email=self.email,
            password=self.password,
            confirm_password=self.confirm_password,
        )


class ApiDestination(BaseModel):
    route: str
    clear_history: bool


class ApiOutcome(BaseModel):
    ok: bool
    state: str
    history: list[str] = Field(default_factory=list)
    message: str | None = None
    error_kind: str | None = None
    field: str | None = None
    destination: ApiDestination | None = None
    uid: str | None = None
    cancelled: bool = False


class StaffSessionRequest(BaseModel):
    """Credentials of the staff member making an invite change."""

    staff_email: str = ""
    staff_password: str = ""

    def to_staff_credentials(self) -> Credentials:
        return Credentials(email=self.staff_email, password=self.staff_password)


class StaffInviteRequest(StaffSessionRequest):
    name: str = ""
    email: str = ""

    def to_form(self) -> StaffInviteForm:
        return StaffInviteForm(name=self.name, email=self.email)


class RemoveInviteRequest(StaffSessionRequest):
    email: str = ""
