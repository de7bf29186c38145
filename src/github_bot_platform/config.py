"""Configuration for the GitHub platform.

Configuration is loaded from:
- environment variables (prefixed with ``GITHUB_BOT_``)
- a local ``.env`` file (if present)
- or an explicit mapping handed to ``GitHubPlatform.start``

Mapping keys use the engine's dashed style (``oauth-token``); they are
normalized to field names by :meth:`PlatformSettings.from_mapping`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

USERNAME_KEY = "username"
PASSWORD_KEY = "password"
OAUTH_TOKEN_KEY = "oauth-token"

_NAMESPACE = "github."
_CREDENTIAL_FIELDS = ("username", "password", "oauth_token")


class PlatformSettings(BaseSettings):
    """Settings for the GitHub platform.

    Environment variables:
    - GITHUB_BOT_USERNAME / GITHUB_BOT_PASSWORD
    - GITHUB_BOT_OAUTH_TOKEN
    - GITHUB_BOT_BASE_URL   (optional)
    - GITHUB_BOT_TIMEOUT    (optional)
    - GITHUB_BOT_LOG_LEVEL  (optional)

    Notes:
        Credentials are all optional here. Deciding which of them is used (and
        rejecting a username without a password) is the job of
        ``resolve_credentials``, not of settings validation.
    """

    username: str | None = Field(default=None, description="GitHub login")
    password: str | None = Field(
        default=None,
        description="Password for `username`; required when a username is set",
    )
    oauth_token: str | None = Field(
        default=None,
        description="OAuth/personal access token, used only when no username is set",
    )

    base_url: str = Field(
        default="https://api.github.com",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    timeout: int = Field(
        default=15,
        gt=0,
        description="Per-request timeout in seconds",
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_BOT_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> PlatformSettings:
        """Build settings from an engine configuration mapping.

        Keys may be dashed (``oauth-token``) or underscored (``oauth_token``) and
        may carry a ``github.`` namespace (``github.username``).

        The mapping is the only credential source: credential keys it leaves
        out are unset, never read from the environment or `.env`. Other keys
        (base URL, timeout, log level) still fall back to them.
        """

        normalized: dict[str, Any] = dict.fromkeys(_CREDENTIAL_FIELDS)
        for key, value in config.items():
            name = str(key).strip().lower()
            if name.startswith(_NAMESPACE):
                name = name[len(_NAMESPACE) :]
            name = name.replace("-", "_").replace(".", "_")
            if name not in cls.model_fields:
                continue
            if value is None and name not in _CREDENTIAL_FIELDS:
                continue
            normalized[name] = value
        return cls(**normalized)
