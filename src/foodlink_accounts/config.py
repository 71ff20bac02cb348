"""Configuration for the account workflows.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The default `memory` backend needs no credentials, which keeps local
development and tests free of network access.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AccountsSettings(BaseSettings):
    """Settings for identity/profile backends.

    Environment variables:
    - FOODLINK_BACKEND              (optional, `memory` or `firebase`)
    - FIREBASE_API_KEY              (required for the `firebase` backend)
    - FIREBASE_CREDENTIALS_PATH     (optional)
    - FIREBASE_PROJECT_ID           (optional)
    - IDENTITY_TOOLKIT_BASE_URL     (optional)
    - FOODLINK_REQUEST_TIMEOUT_SECONDS (optional)
    - FOODLINK_MAIN_STAFF_EMAIL     (optional)
    - LOG_LEVEL                     (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `AccountsSettings(_env_file=path_to_env)`.
    """

    backend: Literal["memory", "firebase"] = Field(
        default="memory",
        validation_alias="FOODLINK_BACKEND",
        description="Identity/profile backend to use",
    )

    firebase_api_key: str = Field(
        default="",
        validation_alias="FIREBASE_API_KEY",
        description="Web API key used for Identity Toolkit requests",
    )
    firebase_credentials_path: Path | None = Field(
        default=None,
        validation_alias="FIREBASE_CREDENTIALS_PATH",
        description="Service account JSON for the Admin SDK (defaults to ADC)",
    )
    firebase_project_id: str | None = Field(
        default=None,
        validation_alias="FIREBASE_PROJECT_ID",
        description="Firebase project id",
    )
    identity_toolkit_base_url: str = Field(
        default="https://identitytoolkit.googleapis.com/v1",
        validation_alias="IDENTITY_TOOLKIT_BASE_URL",
        description="Identity Toolkit API base URL (useful for the auth emulator)",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        validation_alias="FOODLINK_REQUEST_TIMEOUT_SECONDS",
        description="HTTP timeout for identity provider calls",
    )

    main_staff_email: str = Field(
        default="foodlink.admin@example.com",
        validation_alias="FOODLINK_MAIN_STAFF_EMAIL",
        description="Staff email allowed to register without an invite",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _require_firebase_key(self) -> AccountsSettings:
        if self.backend == "firebase" and not self.firebase_api_key.strip():
            raise ValueError("FIREBASE_API_KEY is required for the firebase backend")
        return self
