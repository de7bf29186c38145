#!/usr/bin/env python3
"""Programmatic usage example.

This demonstrates driving the platform the way a conversational engine does:

* start the platform once from a configuration mapping (or `.env`)
* open an issue, comment on it and label it under one conversation context

Credentials come from `GITHUB_BOT_USERNAME`/`GITHUB_BOT_PASSWORD` or
`GITHUB_BOT_OAUTH_TOKEN`; the repository is passed as an argument.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from github_bot_platform import ExecutionContext, GitHubPlatform, PlatformSettings
from github_bot_platform.errors import PlatformError
from github_bot_platform.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Open, comment and label a GitHub issue.")
    parser.add_argument("--repo", required=True, help='Target repository in the form "owner/repo"')
    parser.add_argument("--title", required=True, help="Issue title")
    parser.add_argument("--body", default="", help="Issue body")
    parser.add_argument("--comment", default="ack", help="Comment to post on the new issue")
    parser.add_argument("--label", default="bug", help="Label to apply to the new issue")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    owner, _, name = args.repo.partition("/")

    settings = PlatformSettings()
    configure_logging(settings.log_level)

    platform = GitHubPlatform.from_config(settings)
    context = ExecutionContext(context_id="example")

    try:
        issue = platform.open_issue(context, owner, name, args.title, args.body)
        comment = platform.comment_issue(context, issue, args.comment)
        label = platform.set_label(context, issue, args.label)
    except PlatformError as exc:
        print(f"Failed: {exc}")
        return 1
    finally:
        platform.close()

    print(f"Created issue #{issue.number}: {issue.title}")
    print(f"Comment: {comment.html_url}")
    print(f"Label: {label}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
