"""Action descriptors: one immutable value per remote operation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from github.Issue import Issue


class ActionKind(StrEnum):
    ASSIGN_USER = "assign_user"
    COMMENT_ISSUE = "comment_issue"
    GET_ISSUE = "get_issue"
    OPEN_ISSUE = "open_issue"
    SET_LABEL = "set_label"


# Fields each kind must carry; everything else must be left unset.
_REQUIRED_FIELDS: dict[ActionKind, tuple[str, ...]] = {
    ActionKind.ASSIGN_USER: ("issue", "username"),
    ActionKind.COMMENT_ISSUE: ("issue", "comment"),
    ActionKind.GET_ISSUE: ("owner", "repository", "issue_number"),
    ActionKind.OPEN_ISSUE: ("owner", "repository", "title", "body"),
    ActionKind.SET_LABEL: ("issue", "label"),
}

# Text fields allowed to be empty strings (an issue may have no description).
_MAY_BE_EMPTY: frozenset[str] = frozenset({"body"})

_PAYLOAD_FIELDS: tuple[str, ...] = (
    "issue",
    "owner",
    "repository",
    "issue_number",
    "title",
    "body",
    "comment",
    "username",
    "label",
)


@dataclass(frozen=True, slots=True)
class ActionDescriptor:
    """One remote operation to perform, with its target and payload.

    Descriptors are immutable and validated on construction, so the dispatcher
    can rely on every required field being present. Build them through the
    per-kind constructors (``ActionDescriptor.open_issue(...)`` etc).
    """

    kind: ActionKind
    issue: Issue | None = None
    owner: str | None = None
    repository: str | None = None
    issue_number: int | None = None
    title: str | None = None
    body: str | None = None
    comment: str | None = None
    username: str | None = None
    label: str | None = None

    def __post_init__(self) -> None:
        required = _REQUIRED_FIELDS[self.kind]
        for name in _PAYLOAD_FIELDS:
            value = getattr(self, name)
            if name not in required:
                if value is not None:
                    raise ValueError(f"{self.kind} does not take a {name!r}")
                continue
            if value is None:
                raise ValueError(f"{self.kind} requires a {name!r}")
            if isinstance(value, str) and name not in _MAY_BE_EMPTY and not value.strip():
                raise ValueError(f"{self.kind} requires a non-empty {name!r}")

        if self.issue_number is not None:
            object.__setattr__(self, "issue_number", _parse_issue_number(self.issue_number))

    @classmethod
    def assign_user(cls, issue: Issue, username: str) -> ActionDescriptor:
        return cls(kind=ActionKind.ASSIGN_USER, issue=issue, username=username)

    @classmethod
    def comment_issue(cls, issue: Issue, comment: str) -> ActionDescriptor:
        return cls(kind=ActionKind.COMMENT_ISSUE, issue=issue, comment=comment)

    @classmethod
    def get_issue(cls, owner: str, repository: str, issue_number: int | str) -> ActionDescriptor:
        return cls(
            kind=ActionKind.GET_ISSUE,
            owner=owner,
            repository=repository,
            issue_number=issue_number,  # type: ignore[arg-type]
        )

    @classmethod
    def open_issue(cls, owner: str, repository: str, title: str, body: str) -> ActionDescriptor:
        return cls(
            kind=ActionKind.OPEN_ISSUE,
            owner=owner,
            repository=repository,
            title=title,
            body=body,
        )

    @classmethod
    def set_label(cls, issue: Issue, label: str) -> ActionDescriptor:
        return cls(kind=ActionKind.SET_LABEL, issue=issue, label=label)

    @property
    def full_repository_name(self) -> str:
        """``owner/repository`` for kinds that address a repository directly."""

        if self.owner is None or self.repository is None:
            raise ValueError(f"{self.kind} does not address a repository by name")
        return f"{self.owner.strip()}/{self.repository.strip()}"

    def describe(self) -> dict[str, object]:
        """Loggable summary of the target (never the payload text)."""

        details: dict[str, object] = {"action": str(self.kind)}
        if self.issue is not None:
            details["issue_number"] = self.issue.number
        if self.owner is not None and self.repository is not None:
            details["repo"] = self.full_repository_name
        if self.issue_number is not None:
            details["issue_number"] = self.issue_number
        return details


def _parse_issue_number(value: int | str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"Invalid issue number: {value!r}")
    if isinstance(value, str):
        text = value.strip().lstrip("#")
        if not text.isdigit():
            raise ValueError(f"Invalid issue number: {value!r}")
        value = int(text)
    if value <= 0:
        raise ValueError("issue_number must be a positive integer")
    return value
