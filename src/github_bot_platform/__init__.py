"""GitHub Bot Platform.

Lets a conversational/automation engine run GitHub issue operations
(get/open issues, comment, assign, label) under one authenticated session:
- credentials resolved and validated once per platform
- each operation an immutable, typed action descriptor
- results and failures returned through a uniform envelope
"""

__version__ = "0.1.0"

from github_bot_platform.config import PlatformSettings
from github_bot_platform.platform import ExecutionContext, GitHubPlatform, Platform

__all__ = ["__version__", "ExecutionContext", "GitHubPlatform", "Platform", "PlatformSettings"]
