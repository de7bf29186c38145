"""Execution pipeline for action descriptors.

The dispatcher performs exactly one remote operation per descriptor, in a
single attempt, on the calling thread. Remote failures are wrapped into the
result envelope; anything else is a bug and propagates.
"""

from __future__ import annotations

import logging
import time
from typing import Any, assert_never

from github import Github, GithubException, UnknownObjectException
from github.Issue import Issue
from github.IssueComment import IssueComment
from github.Label import Label
from github.Repository import Repository

from github_bot_platform.errors import (
    REMOTE_ERRORS,
    ClientNotInitializedError,
    PlatformError,
    translate_github_error,
)
from github_bot_platform.github.client import ClientResult
from github_bot_platform.labels import label_spec_for

from .descriptors import ActionDescriptor, ActionKind
from .results import ActionResult

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """Runs descriptors against a GitHub client and wraps the outcome."""

    def execute(
        self,
        descriptor: ActionDescriptor,
        context: Any,
        client: ClientResult,
    ) -> ActionResult:
        started = time.perf_counter()
        details = descriptor.describe()

        try:
            github = client.require()
            value = self._run(descriptor, github)
        except ClientNotInitializedError as e:
            return self._failed(descriptor, context, e, started, details)
        except REMOTE_ERRORS as e:
            error = translate_github_error(e, f"GitHub {descriptor.kind} failed")
            error.__cause__ = e
            return self._failed(descriptor, context, error, started, details)

        elapsed = _elapsed_ms(started)
        logger.debug(
            "Action succeeded",
            extra={**details, "context": context, "execution_time_ms": elapsed},
        )
        return ActionResult.success(descriptor.kind, context, value, execution_time_ms=elapsed)

    def _failed(
        self,
        descriptor: ActionDescriptor,
        context: Any,
        error: PlatformError,
        started: float,
        details: dict[str, object],
    ) -> ActionResult:
        elapsed = _elapsed_ms(started)
        logger.warning(
            "Action failed",
            extra={
                **details,
                "context": context,
                "execution_time_ms": elapsed,
                "error": str(error),
            },
        )
        return ActionResult.failure(descriptor.kind, context, error, execution_time_ms=elapsed)

    def _run(self, descriptor: ActionDescriptor, github: Github) -> object:
        match descriptor.kind:
            case ActionKind.ASSIGN_USER:
                return self._assign_user(descriptor)
            case ActionKind.COMMENT_ISSUE:
                return self._comment_issue(descriptor)
            case ActionKind.GET_ISSUE:
                return self._get_issue(descriptor, github)
            case ActionKind.OPEN_ISSUE:
                return self._open_issue(descriptor, github)
            case ActionKind.SET_LABEL:
                return self._set_label(descriptor)
            case _:
                assert_never(descriptor.kind)

    def _assign_user(self, descriptor: ActionDescriptor) -> str:
        issue = _issue(descriptor)
        username = _text(descriptor.username).strip()
        issue.add_to_assignees(username)
        logger.info(
            "Issue assigned",
            extra={"issue_number": issue.number, "assignee": username},
        )
        return username

    def _comment_issue(self, descriptor: ActionDescriptor) -> IssueComment:
        issue = _issue(descriptor)
        comment = issue.create_comment(_text(descriptor.comment))
        logger.info(
            "Issue commented",
            extra={"issue_number": issue.number, "comment_id": comment.id},
        )
        return comment

    def _get_issue(self, descriptor: ActionDescriptor, github: Github) -> Issue:
        repo = github.get_repo(descriptor.full_repository_name)
        issue = repo.get_issue(_issue_number(descriptor))
        # Force the fetch so a missing issue fails inside the dispatcher.
        _ = issue.title
        return issue

    def _open_issue(self, descriptor: ActionDescriptor, github: Github) -> Issue:
        repo = github.get_repo(descriptor.full_repository_name)
        issue = repo.create_issue(title=_text(descriptor.title), body=_text(descriptor.body))
        logger.info(
            "Issue created",
            extra={"repo": descriptor.full_repository_name, "issue_number": issue.number},
        )
        return issue

    def _set_label(self, descriptor: ActionDescriptor) -> str:
        issue = _issue(descriptor)
        name = _text(descriptor.label).strip()

        # `issue.labels` is as fetched; re-adding a label GitHub already has is a no-op.
        if any(existing.name == name for existing in issue.labels):
            logger.debug(
                "Label already applied",
                extra={"issue_number": issue.number, "label": name},
            )
            return name

        label = _get_or_create_label(issue.repository, name)
        issue.add_to_labels(label)
        logger.info("Label applied", extra={"issue_number": issue.number, "label": name})
        return name


def _get_or_create_label(repo: Repository, name: str) -> Label:
    try:
        return repo.get_label(name)
    except UnknownObjectException:
        pass

    spec = label_spec_for(name)
    try:
        label = repo.create_label(name=spec.name, color=spec.color, description=spec.description)
    except GithubException as e:
        if e.status != 422:
            raise
        # Created concurrently by someone else.
        return repo.get_label(name)
    logger.info("Label created", extra={"repo": repo.full_name, "label": name})
    return label


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 3)


def _issue(descriptor: ActionDescriptor) -> Issue:
    if descriptor.issue is None:
        raise ValueError(f"{descriptor.kind} requires an issue")
    return descriptor.issue


def _issue_number(descriptor: ActionDescriptor) -> int:
    if descriptor.issue_number is None:
        raise ValueError(f"{descriptor.kind} requires an issue number")
    return descriptor.issue_number


def _text(value: str | None) -> str:
    if value is None:
        raise ValueError("Required text field is missing")
    return value
