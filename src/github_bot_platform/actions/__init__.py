"""Typed GitHub actions and the pipeline that executes them.

- ``ActionDescriptor``: an immutable description of one remote operation
- ``ActionDispatcher``: executes a descriptor and wraps the outcome
- ``ActionResult`` / ``unwrap``: the result envelope and its typed extraction
"""

from github_bot_platform.actions.descriptors import ActionDescriptor, ActionKind
from github_bot_platform.actions.dispatcher import ActionDispatcher
from github_bot_platform.actions.results import RESULT_TYPES, ActionResult, unwrap

__all__ = [
    "RESULT_TYPES",
    "ActionDescriptor",
    "ActionDispatcher",
    "ActionKind",
    "ActionResult",
    "unwrap",
]
