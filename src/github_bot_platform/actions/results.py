"""Result envelope for executed actions, and the typed unwrapper."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from github.Issue import Issue
from github.IssueComment import IssueComment

from github_bot_platform.errors import InternalTypeError, PlatformError

from .descriptors import ActionKind

# The success value type produced by each kind.
RESULT_TYPES: dict[ActionKind, type] = {
    ActionKind.ASSIGN_USER: str,
    ActionKind.COMMENT_ISSUE: IssueComment,
    ActionKind.GET_ISSUE: Issue,
    ActionKind.OPEN_ISSUE: Issue,
    ActionKind.SET_LABEL: str,
}


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Outcome of one dispatched action.

    Exactly one of ``value`` (success) or ``error`` (failure) is meaningful,
    as reported by ``ok``. ``context`` is the caller's execution context,
    returned untouched for correlation.
    """

    kind: ActionKind
    context: Any
    value: Any = None
    error: PlatformError | None = None
    execution_time_ms: float = 0.0

    @classmethod
    def success(
        cls, kind: ActionKind, context: Any, value: Any, *, execution_time_ms: float = 0.0
    ) -> ActionResult:
        return cls(kind=kind, context=context, value=value, execution_time_ms=execution_time_ms)

    @classmethod
    def failure(
        cls,
        kind: ActionKind,
        context: Any,
        error: PlatformError,
        *,
        execution_time_ms: float = 0.0,
    ) -> ActionResult:
        return cls(kind=kind, context=context, error=error, execution_time_ms=execution_time_ms)

    @property
    def ok(self) -> bool:
        return self.error is None


def unwrap(result: ActionResult, expected_kind: ActionKind) -> Any:
    """Return the success value of ``result`` or raise its error.

    Raises:
        InternalTypeError: If the result was produced by a different kind of
            action, or its value is not the type that kind produces.
        PlatformError: The original failure, if the action failed.
    """

    if result.kind != expected_kind:
        raise InternalTypeError(
            f"Expected a {expected_kind} result, got a {result.kind} result"
        )
    if result.error is not None:
        raise result.error

    expected_type = RESULT_TYPES[expected_kind]
    if not isinstance(result.value, expected_type):
        raise InternalTypeError(
            f"{expected_kind} produced a {type(result.value).__name__}, "
            f"expected {expected_type.__name__}"
        )
    return result.value
