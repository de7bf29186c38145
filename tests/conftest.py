"""Test configuration and fixtures."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import Mock

import pytest
from github import Github, GithubException, UnknownObjectException
from github.AuthenticatedUser import AuthenticatedUser
from github.Issue import Issue
from github.IssueComment import IssueComment
from github.Label import Label
from github.Repository import Repository

from github_bot_platform.config import PlatformSettings
from github_bot_platform.github.client import ClientResult


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real credentials (env or a local `.env`) out of every test."""
    for name in list(os.environ):
        if name.upper().startswith("GITHUB_BOT_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def make_label(name: str) -> Mock:
    label = Mock(spec=Label)
    # `name` is reserved by Mock's constructor; set it afterwards.
    label.name = name
    return label


class FakeRepository:
    """A stateful stand-in for a PyGithub repository (issues, labels, comments)."""

    def __init__(self, full_name: str = "acme/repo1", labels: list[str] | None = None) -> None:
        self.full_name = full_name
        self.labels: dict[str, Mock] = {name: make_label(name) for name in labels or []}
        self.issues: dict[int, Mock] = {}
        self.created_labels: list[str] = []

        self.repo = Mock(spec=Repository)
        self.repo.full_name = full_name
        self.repo.get_label.side_effect = self._get_label
        self.repo.create_label.side_effect = self._create_label
        self.repo.create_issue.side_effect = self._create_issue
        self.repo.get_issue.side_effect = self._get_issue

    def _get_label(self, name: str) -> Mock:
        if name not in self.labels:
            raise UnknownObjectException(404, {"message": "Not Found"}, None)
        return self.labels[name]

    def _create_label(self, name: str, color: str, description: str = "") -> Mock:
        if name in self.labels:
            raise GithubException(422, {"message": "Validation Failed"}, None)
        label = make_label(name)
        label.color = color
        self.labels[name] = label
        self.created_labels.append(name)
        return label

    def _create_issue(self, title: str, body: str = "") -> Mock:
        number = len(self.issues) + 1
        issue = make_issue(number=number, title=title, repository=self.repo)
        issue.body = body
        self.issues[number] = issue
        return issue

    def _get_issue(self, number: int) -> Mock:
        if number not in self.issues:
            raise UnknownObjectException(404, {"message": "Not Found"}, None)
        return self.issues[number]


def make_issue(
    number: int = 1,
    title: str = "Bug",
    repository: Mock | None = None,
    labels: list[str] | None = None,
) -> Mock:
    issue = Mock(spec=Issue)
    issue.number = number
    issue.title = title
    issue.state = "open"
    # Labels as fetched; like PyGithub, `add_to_labels` does not refresh them.
    issue.labels = [make_label(name) for name in labels or []]
    issue.assignees = []
    issue.repository = repository if repository is not None else Mock(spec=Repository)

    def create_comment(body: str) -> Mock:
        comment = Mock(spec=IssueComment)
        comment.id = 1000 + number
        comment.body = body
        comment.html_url = f"https://github.com/acme/repo1/issues/{number}#issuecomment-{comment.id}"
        return comment

    issue.create_comment.side_effect = create_comment
    return issue


def make_github(login: str = "bot", repository: FakeRepository | None = None) -> Mock:
    github = Mock(spec=Github)
    user = Mock(spec=AuthenticatedUser)
    user.login = login
    github.get_user.return_value = user
    if repository is not None:
        github.get_repo.return_value = repository.repo
    return github


@pytest.fixture
def fake_repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def github_client(fake_repository: FakeRepository) -> Mock:
    return make_github(repository=fake_repository)


@pytest.fixture
def github_factory(github_client: Mock) -> Mock:
    """A `Github` constructor stand-in that records the auth it was built with."""
    return Mock(return_value=github_client)


@pytest.fixture
def client_result(github_client: Mock) -> ClientResult:
    return ClientResult.authenticated(github_client, "bot")


@pytest.fixture
def password_settings() -> PlatformSettings:
    return PlatformSettings(username="bot", password="s3cr3t")


@pytest.fixture
def issue_factory():
    """Build PyGithub-shaped issue mocks: `issue_factory(number=3, title="Bug")`."""
    return make_issue


@pytest.fixture
def repository_factory():
    """Build extra fake repositories: `repository_factory(labels=["triage"])`."""
    return FakeRepository
