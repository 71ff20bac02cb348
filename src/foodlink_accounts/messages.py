"""User-facing text for every workflow outcome, per role."""

from __future__ import annotations

from dataclasses import dataclass

from foodlink_accounts.errors import IdentityError, IdentityErrorKind
from foodlink_accounts.models import Role

SOMETHING_WENT_WRONG = "Something went wrong. Please try again."
ENTER_BOTH = "Please enter both email and password."
INVALID_EMAIL = "Please enter a valid email address."
NETWORK_FAILURE = "Network error. Please check your internet connection."

# Registration (store/volunteer)
EMAIL_IN_USE = "Email already in use."
WEAK_PASSWORD = "Weak password."
REGISTRATION_FAILED = "Registration failed."
REGISTRATION_UNKNOWN = "Something went wrong."

# Staff
NOT_STAFF = "This account is not registered as FoodLink staff."
STAFF_NOT_INVITED = (
    "This email is not authorized for staff access.\nPlease contact the administrator."
)
STAFF_CREATED = "Staff account created"
STAFF_EMAIL_IN_USE = "This email is already in use"
STAFF_WEAK_PASSWORD = "Password is too weak"
STAFF_REGISTRATION_FAILED = "Registration failed"
STAFF_UNKNOWN = "Something went wrong"

# Staff invites
INVITE_ADDED = "Staff invite added"
INVITE_ADD_FAILED = "Failed to add invite"
INVITE_REMOVED = "Invite removed"
INVITE_REMOVE_FAILED = "Failed to remove invite"
INVITES_STAFF_ONLY = "Only FoodLink staff can manage invites."

# Standalone forgot-password screen
FORGOT_INVALID_EMAIL = "Enter a valid email address."
FORGOT_SENT = "Password reset email sent. Check your inbox."
FORGOT_FAILED = "Failed to send reset email."


@dataclass(frozen=True, slots=True)
class RoleMessages:
    user_not_found: str
    wrong_password: str
    reset_prompt: str
    reset_sent: str
    reset_user_not_found: str
    reset_failed: str = "Could not send reset email."

    def sign_in_error(self, error: IdentityError) -> str:
        if error.kind is IdentityErrorKind.USER_NOT_FOUND:
            return self.user_not_found
        if error.kind is IdentityErrorKind.WRONG_PASSWORD:
            return self.wrong_password
        if error.kind is IdentityErrorKind.INVALID_EMAIL:
            return INVALID_EMAIL
        if error.kind is IdentityErrorKind.NETWORK_FAILURE:
            return NETWORK_FAILURE
        return f"Login error: {error.message or 'Please try again.'}"

    def reset_error(self, error: IdentityError) -> str:
        if error.kind is IdentityErrorKind.USER_NOT_FOUND:
            return self.reset_user_not_found
        if error.kind is IdentityErrorKind.INVALID_EMAIL:
            return INVALID_EMAIL
        if error.kind is IdentityErrorKind.NETWORK_FAILURE:
            return NETWORK_FAILURE
        return error.message or self.reset_failed

    def reset_notice(self, email: str) -> str:
        return self.reset_sent.format(email=email)


MESSAGES: dict[Role, RoleMessages] = {
    Role.VOLUNTEER: RoleMessages(
        user_not_found="No volunteer account found with that email.",
        wrong_password="Incorrect password. Please try again.",
        reset_prompt="Please enter your email first.",
        reset_sent="Password reset email sent to {email}. Please check your inbox.",
        reset_user_not_found="No volunteer account found with that email.",
        reset_failed="Failed to send reset email.",
    ),
    Role.STORE: RoleMessages(
        user_not_found="No store account found for that email.",
        wrong_password="Incorrect password.",
        reset_prompt="Enter your email first so we can send a reset link.",
        reset_sent="Password reset email sent.",
        reset_user_not_found="No account found for that email.",
    ),
    Role.STAFF: RoleMessages(
        user_not_found="No staff account found for that email.",
        wrong_password="Incorrect password.",
        reset_prompt="Enter your staff email first.",
        reset_sent="Password reset email sent to {email}",
        reset_user_not_found="No account found for that email.",
    ),
}


def registration_error(error: IdentityError) -> str:
    if error.kind is IdentityErrorKind.EMAIL_ALREADY_IN_USE:
        return EMAIL_IN_USE
    if error.kind is IdentityErrorKind.WEAK_PASSWORD:
        return WEAK_PASSWORD
    return REGISTRATION_FAILED


def staff_registration_error(error: IdentityError) -> str:
    if error.kind is IdentityErrorKind.EMAIL_ALREADY_IN_USE:
        return STAFF_EMAIL_IN_USE
    if error.kind is IdentityErrorKind.WEAK_PASSWORD:
        return STAFF_WEAK_PASSWORD
    return STAFF_REGISTRATION_FAILED
