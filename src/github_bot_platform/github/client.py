"""GitHub client lifecycle: credential resolution and one-time validation.

This wraps PyGithub construction so the platform never builds a client ad hoc
and tests can inject a fake ``Github`` factory.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from github import Auth, Github

from github_bot_platform.config import OAUTH_TOKEN_KEY, PASSWORD_KEY, PlatformSettings
from github_bot_platform.errors import (
    REMOTE_ERRORS,
    ClientNotInitializedError,
    ConfigurationError,
    PlatformError,
    translate_github_error,
)

logger = logging.getLogger(__name__)

GithubFactory = Callable[..., Github]

AuthMethod = Literal["password", "token", "none"]


@dataclass(frozen=True, slots=True)
class Credentials:
    """The single credential form selected from configuration."""

    method: AuthMethod
    username: str | None = None
    password: str | None = None
    token: str | None = None

    @classmethod
    def none(cls) -> Credentials:
        return cls(method="none")

    def auth(self) -> Auth.Auth | None:
        if self.method == "none":
            return None
        if self.method == "password" and self.username and self.password:
            return Auth.Login(self.username, self.password)
        if self.method == "token" and self.token:
            return Auth.Token(self.token)
        raise ConfigurationError(f"Incomplete credentials for {self.method!r} authentication")

    def __repr__(self) -> str:
        # Never leak secrets into logs or tracebacks.
        return f"Credentials(method={self.method!r}, username={self.username!r})"


@dataclass(frozen=True, slots=True)
class ClientResult:
    """Outcome of client initialization, fixed for the platform's lifetime.

    Exactly one of these holds:
      - ``client`` is set (authenticated, ``login`` is the resolved identity)
      - ``error`` is set (startup failed)
      - neither is set (no credentials were configured)
    """

    client: Github | None = None
    login: str | None = None
    error: PlatformError | None = None

    @classmethod
    def authenticated(cls, client: Github, login: str) -> ClientResult:
        return cls(client=client, login=login)

    @classmethod
    def unauthenticated(cls) -> ClientResult:
        return cls()

    @classmethod
    def failed(cls, error: PlatformError) -> ClientResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.client is not None

    def require(self) -> Github:
        """Return the live client or raise ``ClientNotInitializedError``."""

        if self.client is not None:
            return self.client
        message = "Cannot access the GitHub client, make sure it has been initialized correctly"
        if self.error is not None:
            raise ClientNotInitializedError(
                f"{message} (startup failed: {self.error})"
            ) from self.error
        raise ClientNotInitializedError(message)


def resolve_credentials(settings: PlatformSettings) -> Credentials:
    """Pick exactly one credential form from ``settings``.

    A username always wins over an oauth token, and requires a password.

    Raises:
        ConfigurationError: If a username is set without a non-empty password.
    """

    username = (settings.username or "").strip()
    if username:
        password = settings.password or ""
        if not password:
            raise ConfigurationError(
                "Cannot authenticate to GitHub with username "
                f"{username!r}: no password configured (configuration key: {PASSWORD_KEY})"
            )
        if settings.oauth_token:
            logger.debug(
                "Username/password configured; ignoring oauth token",
                extra={"username": username},
            )
        return Credentials(method="password", username=username, password=password)

    token = (settings.oauth_token or "").strip()
    if token:
        return Credentials(method="token", token=token)

    logger.warning(
        "No authentication method set in the configuration; the GitHub API cannot be "
        "called until a username/password or an oauth token is provided",
        extra={"keys": ["username", PASSWORD_KEY, OAUTH_TOKEN_KEY]},
    )
    return Credentials.none()


def build_client(
    credentials: Credentials,
    settings: PlatformSettings,
    *,
    github_factory: GithubFactory = Github,
) -> Github | None:
    """Construct (but do not validate) a PyGithub client for ``credentials``."""

    auth = credentials.auth()
    if auth is None:
        return None
    # retry=None: one attempt per call, callers decide whether to retry.
    kwargs: dict[str, Any] = {
        "auth": auth,
        "base_url": settings.base_url,
        "timeout": settings.timeout,
        "retry": None,
    }
    return github_factory(**kwargs)


def check_client(client: Github) -> str:
    """Validate credentials with a self-identity call and return the login.

    Raises:
        AuthError: If GitHub rejects the credentials.
        NetworkError: If GitHub cannot be reached.
        RemoteOperationFailure: If GitHub returns any other error.
    """

    try:
        login = client.get_user().login
    except REMOTE_ERRORS as e:
        raise translate_github_error(e, "Cannot access the GitHub API") from e
    logger.info("Logged in to GitHub", extra={"login": login})
    return login


def initialize_client(
    settings: PlatformSettings,
    *,
    github_factory: GithubFactory = Github,
) -> ClientResult:
    """Resolve credentials, build the client and validate it once.

    ``ConfigurationError`` propagates: a malformed configuration is a caller
    bug. Authentication and network failures are captured in the returned
    ``ClientResult``.
    """

    credentials = resolve_credentials(settings)
    client = build_client(credentials, settings, github_factory=github_factory)
    if client is None:
        return ClientResult.unauthenticated()

    try:
        login = check_client(client)
    except PlatformError as e:
        logger.error(
            "GitHub client validation failed",
            extra={"auth_method": credentials.method, "error": str(e)},
        )
        client.close()
        return ClientResult.failed(e)

    return ClientResult.authenticated(client, login)
