"""GitHub platform: the facade the conversational engine talks to.

The engine starts the platform once with its configuration and then calls the
typed operations with an opaque execution context. Each operation is a pure
composition: build a descriptor, dispatch it with the platform's client,
unwrap the typed value.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, cast

from github import Github
from github.Issue import Issue
from github.IssueComment import IssueComment

from github_bot_platform.actions import (
    ActionDescriptor,
    ActionDispatcher,
    ActionKind,
    ActionResult,
    unwrap,
)
from github_bot_platform.config import PlatformSettings
from github_bot_platform.errors import (
    AuthError,
    NetworkError,
    PlatformError,
    RemoteOperationFailure,
)
from github_bot_platform.github.client import ClientResult, GithubFactory, initialize_client

logger = logging.getLogger(__name__)

PlatformConfig = PlatformSettings | Mapping[str, Any] | None


@dataclass(frozen=True, slots=True, eq=False)
class ExecutionContext:
    """A minimal execution context for callers that do not bring their own.

    The platform never inspects contexts; any object can be passed instead.
    Contexts compare and hash by identity, so they can key per-conversation
    state even though ``variables`` is a dict.
    """

    context_id: str
    variables: dict[str, object] = field(default_factory=dict)


class Platform(Protocol):
    """What the engine needs from a runtime platform."""

    def start(self, config: PlatformConfig) -> ClientResult: ...

    def execute_action(self, descriptor: ActionDescriptor, context: Any) -> ActionResult: ...


class GitHubPlatform(Platform):
    """Connects to the GitHub API and runs issue actions on the engine's behalf."""

    def __init__(
        self,
        *,
        github_factory: GithubFactory = Github,
        dispatcher: ActionDispatcher | None = None,
    ) -> None:
        self._github_factory = github_factory
        self._dispatcher = dispatcher or ActionDispatcher()
        self._client = ClientResult.unauthenticated()
        self._started = False

    @classmethod
    def from_config(
        cls,
        config: PlatformConfig = None,
        *,
        github_factory: GithubFactory = Github,
    ) -> GitHubPlatform:
        """Construct and start a platform.

        A malformed configuration fails construction. Rejected credentials and
        network failures do not: the platform is returned without a client and
        authenticated operations raise ``ClientNotInitializedError``.
        """

        platform = cls(github_factory=github_factory)
        try:
            platform.start(config)
        except (AuthError, NetworkError, RemoteOperationFailure) as e:
            logger.error("GitHub platform started without a client", extra={"error": str(e)})
        return platform

    def start(self, config: PlatformConfig = None) -> ClientResult:
        """Resolve credentials and validate the GitHub client, once.

        Args:
            config: Settings, an engine configuration mapping, or None to load
                settings from the environment / `.env`.

        Returns:
            The client result held for the rest of the platform's lifetime.

        Raises:
            ConfigurationError: If a username is configured without a password.
                The platform stays unstarted.
            AuthError: If GitHub rejects the credentials.
            NetworkError: If GitHub cannot be reached.
        """

        if self._started:
            logger.warning("GitHub platform already started; ignoring start()")
            return self._client

        settings = _settings_from(config)
        result = initialize_client(settings, github_factory=self._github_factory)
        self._client = result
        self._started = True

        if result.error is not None:
            raise result.error
        return result

    @property
    def started(self) -> bool:
        return self._started

    @property
    def client_result(self) -> ClientResult:
        return self._client

    @property
    def github_client(self) -> Github:
        """The authenticated PyGithub client.

        Raises:
            ClientNotInitializedError: If no credentials were configured or
                authentication failed.
        """

        return self._client.require()

    @property
    def authenticated_login(self) -> str | None:
        return self._client.login

    @property
    def startup_error(self) -> PlatformError | None:
        return self._client.error

    def execute_action(self, descriptor: ActionDescriptor, context: Any) -> ActionResult:
        return self._dispatcher.execute(descriptor, context, self._client)

    def assign_user(self, context: Any, issue: Issue, username: str) -> str:
        """Assign ``username`` to ``issue`` and return the username."""

        result = self.execute_action(ActionDescriptor.assign_user(issue, username), context)
        return cast(str, unwrap(result, ActionKind.ASSIGN_USER))

    def comment_issue(self, context: Any, issue: Issue, comment: str) -> IssueComment:
        """Post ``comment`` on ``issue`` and return the created comment."""

        result = self.execute_action(ActionDescriptor.comment_issue(issue, comment), context)
        return cast(IssueComment, unwrap(result, ActionKind.COMMENT_ISSUE))

    def get_issue(
        self, context: Any, owner: str, repository: str, issue_number: int | str
    ) -> Issue:
        """Fetch issue ``issue_number`` from ``owner/repository``."""

        descriptor = ActionDescriptor.get_issue(owner, repository, issue_number)
        result = self.execute_action(descriptor, context)
        return cast(Issue, unwrap(result, ActionKind.GET_ISSUE))

    def open_issue(
        self, context: Any, owner: str, repository: str, title: str, body: str
    ) -> Issue:
        """Open a new issue on ``owner/repository``."""

        descriptor = ActionDescriptor.open_issue(owner, repository, title, body)
        result = self.execute_action(descriptor, context)
        return cast(Issue, unwrap(result, ActionKind.OPEN_ISSUE))

    def set_label(self, context: Any, issue: Issue, label: str) -> str:
        """Apply ``label`` to ``issue``, creating it on the repository if needed.

        Applying a label the issue already carries is a no-op.
        """

        result = self.execute_action(ActionDescriptor.set_label(issue, label), context)
        return cast(str, unwrap(result, ActionKind.SET_LABEL))

    def close(self) -> None:
        if self._client.client is not None:
            self._client.client.close()
            logger.info("GitHub client closed")


def _settings_from(config: PlatformConfig) -> PlatformSettings:
    if config is None:
        return PlatformSettings()
    if isinstance(config, PlatformSettings):
        return config
    return PlatformSettings.from_mapping(config)
