"""Test configuration and fixtures."""

import pytest

from foodlink_accounts.config import AccountsSettings
from foodlink_accounts.models import RegistrationForm, RegistrationProfile
from foodlink_accounts.providers.factory import Backends
from foodlink_accounts.providers.memory import InMemoryIdentityProvider, InMemoryProfileStore


@pytest.fixture
def settings() -> AccountsSettings:
    """Provide memory-backed settings that ignore any local .env."""
    return AccountsSettings(
        _env_file=None,
        backend="memory",
        main_staff_email="foodlink.admin@example.com",
        log_level="DEBUG",
    )


@pytest.fixture
def identity() -> InMemoryIdentityProvider:
    """Provide an empty in-memory identity provider."""
    return InMemoryIdentityProvider()


@pytest.fixture
def profiles() -> InMemoryProfileStore:
    """Provide an empty in-memory profile store."""
    return InMemoryProfileStore()


@pytest.fixture
def backends(identity: InMemoryIdentityProvider, profiles: InMemoryProfileStore) -> Backends:
    return Backends(identity=identity, profiles=profiles)


def make_registration_form(**overrides: str) -> RegistrationForm:
    values = {
        "store_or_volunteer_name": "Corner Grocer",
        "contact_name": "Dana Reyes",
        "email": "a@b.com",
        "phone": "555-0100",
        "address": "12 Main St",
        "password": "secret1",
        "confirm_password": "secret1",
    }
    values.update(overrides)
    return RegistrationForm(
        profile=RegistrationProfile(
            store_or_volunteer_name=values["store_or_volunteer_name"],
            contact_name=values["contact_name"],
            email=values["email"],
            phone=values["phone"],
            address=values["address"],
        ),
        password=values["password"],
        confirm_password=values["confirm_password"],
    )


@pytest.fixture
def store_form() -> RegistrationForm:
    """Provide a fully populated, valid registration form."""
    return make_registration_form()


@pytest.fixture
def make_form():
    """Provide a builder for registration forms with selected fields overridden."""
    return make_registration_form
