"""Entry point for ``python -m ghrest``.

Usage:
    python -m ghrest rate-limit
    python -m ghrest user octocat
    python -m ghrest repo octocat/Hello-World
"""

from __future__ import annotations

import argparse
import logging
import sys

from ghrest.client import GitHubClient
from ghrest.config import ClientSettings
from ghrest.exceptions import GitHubError
from ghrest.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="GitHub REST API client")
    parser.add_argument("--log-level", default=None, help="Override GHREST_LOG_LEVEL")
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default=None,
        help="Override GHREST_LOG_FORMAT",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("rate-limit", help="Show the current quota")
    user = sub.add_parser("user", help="Show a user profile")
    user.add_argument("login")
    repo = sub.add_parser("repo", help="Show a repository")
    repo.add_argument("full_name", help="owner/name")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = ClientSettings()
    setup_logging(
        args.log_level or settings.log_level,
        args.log_format or settings.log_format,
    )

    try:
        with GitHubClient(settings) as client:
            if args.command == "rate-limit":
                result = client.rate_limit.get()
            elif args.command == "user":
                result = client.users.get(args.login)
            else:
                owner, _, name = args.full_name.partition("/")
                if not name:
                    logger.error("Expected owner/name, got %r", args.full_name)
                    return 2
                result, _ = client.repositories.get(owner, name)
    except GitHubError as exc:
        logger.error("%s", exc)
        return 1

    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
