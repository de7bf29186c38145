"""CLI entrypoint for running platform operations by hand.

Useful to check credentials (`whoami`) and to exercise each operation against a
real repository with the same configuration the engine uses.
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid

from pydantic import ValidationError

from github_bot_platform import __version__
from github_bot_platform.config import PlatformSettings
from github_bot_platform.errors import ConfigurationError, PlatformError
from github_bot_platform.logging import configure_logging
from github_bot_platform.platform import ExecutionContext, GitHubPlatform

logger = logging.getLogger(__name__)


def _split_repository(value: str) -> tuple[str, str]:
    owner, sep, name = value.strip().strip("/").partition("/")
    if not sep or not owner or not name or "/" in name:
        raise argparse.ArgumentTypeError("repository must be in the form 'owner/repo'")
    return owner, name


def _add_issue_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        type=_split_repository,
        required=True,
        help="Target repository in the form 'owner/repo'",
    )
    parser.add_argument("--number", type=int, required=True, help="Issue number")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-bot-platform",
        description="Run GitHub issue operations through the bot platform",
    )
    parser.add_argument(
        "--version", action="version", version=f"github-bot-platform {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("whoami", help="Validate credentials and print the GitHub login")

    get_issue = subparsers.add_parser("get-issue", help="Print an issue")
    _add_issue_args(get_issue)

    open_issue = subparsers.add_parser("open-issue", help="Open a new issue")
    open_issue.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        type=_split_repository,
        required=True,
        help="Target repository in the form 'owner/repo'",
    )
    open_issue.add_argument("--title", required=True, help="Issue title")
    open_issue.add_argument("--body", default="", help="Issue body")

    comment = subparsers.add_parser("comment", help="Comment on an issue")
    _add_issue_args(comment)
    comment.add_argument("--body", required=True, help="Comment body")

    assign = subparsers.add_parser("assign", help="Assign a user to an issue")
    _add_issue_args(assign)
    assign.add_argument("--user", required=True, help="GitHub login to assign")

    label = subparsers.add_parser(
        "label", help="Apply a label to an issue (created on the repository if missing)"
    )
    _add_issue_args(label)
    label.add_argument("--label", required=True, help="Label name")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = PlatformSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    platform = GitHubPlatform()
    context = ExecutionContext(context_id=f"cli-{uuid.uuid4().hex[:8]}")

    try:
        platform.start(settings)

        if args.command == "whoami":
            # Raises ClientNotInitializedError when no credentials are configured.
            platform.github_client  # noqa: B018
            print(platform.authenticated_login)
            return 0

        if args.command == "open-issue":
            owner, name = args.repository
            issue = platform.open_issue(context, owner, name, args.title, args.body)
            print(f"Created issue #{issue.number}: {issue.title}")
            return 0

        owner, name = args.repository
        issue = platform.get_issue(context, owner, name, args.number)

        if args.command == "get-issue":
            print(f"#{issue.number} [{issue.state}] {issue.title}")
            return 0

        if args.command == "comment":
            comment = platform.comment_issue(context, issue, args.body)
            print(f"Commented on issue #{issue.number}: {comment.html_url}")
            return 0

        if args.command == "assign":
            username = platform.assign_user(context, issue, args.user)
            print(f"Assigned issue #{issue.number} to {username}")
            return 0

        if args.command == "label":
            applied = platform.set_label(context, issue, args.label)
            print(f"Labelled issue #{issue.number} with {applied!r}")
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except ConfigurationError as e:
        logger.error("Invalid configuration", extra={"error": str(e)})
        print(str(e), file=sys.stderr)
        return 2

    except ValueError as e:
        print(f"Invalid arguments: {e}", file=sys.stderr)
        return 2

    except PlatformError as e:
        logger.error("Command failed", extra={"command": args.command, "error": str(e)})
        print(str(e), file=sys.stderr)
        return 1

    finally:
        platform.close()


if __name__ == "__main__":
    raise SystemExit(main())
