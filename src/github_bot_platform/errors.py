"""Error taxonomy for the GitHub platform.

Every failure surfaced to callers derives from :class:`PlatformError`. PyGithub
and requests exceptions are translated at the boundary by
:func:`translate_github_error` and chained as ``__cause__``.
"""

from __future__ import annotations

import requests
from github import BadCredentialsException, GithubException, TwoFactorException

# Exception types that represent a failed remote call.
REMOTE_ERRORS: tuple[type[Exception], ...] = (GithubException, requests.RequestException)


class PlatformError(Exception):
    """Base class for all platform errors."""


class ConfigurationError(PlatformError):
    """Credential configuration is malformed or incomplete."""


class AuthError(PlatformError):
    """GitHub rejected the configured credentials."""


class NetworkError(PlatformError):
    """GitHub could not be reached."""


class ClientNotInitializedError(PlatformError):
    """An authenticated action was attempted without a valid GitHub client."""


class RemoteOperationFailure(PlatformError):
    """GitHub accepted the request but returned an error for the action."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status

    def __str__(self) -> str:
        message = super().__str__()
        if self.status is None:
            return message
        return f"{message} (status {self.status})"


class InternalTypeError(PlatformError):
    """A result envelope does not match the action that produced it."""


def translate_github_error(exc: Exception, message: str) -> PlatformError:
    """Map a PyGithub/requests exception to the platform taxonomy.

    The caller is expected to ``raise translated from exc`` (or attach ``exc``
    as the cause) so the original error stays reachable.
    """

    if isinstance(exc, PlatformError):
        return exc
    if isinstance(exc, (BadCredentialsException, TwoFactorException)):
        return AuthError(f"{message}: please check your GitHub credentials")
    if isinstance(exc, requests.RequestException):
        return NetworkError(f"{message}: {exc}")
    if isinstance(exc, GithubException):
        detail = _github_message(exc)
        text = f"{message}: {detail}" if detail else message
        return RemoteOperationFailure(text, status=exc.status)
    raise TypeError(f"Unsupported exception type: {type(exc).__name__}")


def _github_message(exc: GithubException) -> str:
    data = exc.data
    if isinstance(data, dict):
        value = data.get("message")
        if isinstance(value, str):
            return value.strip()
    return ""
