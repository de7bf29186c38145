"""GitHub client lifecycle."""

from github_bot_platform.github.client import (
    ClientResult,
    Credentials,
    initialize_client,
    resolve_credentials,
)

__all__ = [
    "ClientResult",
    "Credentials",
    "initialize_client",
    "resolve_credentials",
]
