"""Command-line entry point: fetch a GitHub user's activity and print it."""

import argparse
import asyncio
import logging
import sys

from github_activity.config import Settings, resolve_token, settings
from github_activity.services.activity import (
    ActivityFetcher,
    FetchOptions,
    parse_since,
    render_activity,
    render_raw,
    summarize,
)
from github_activity.services.activity.fetcher import DEFAULT_LIMIT
from github_activity.services.github import (
    CacheStore,
    GitHubAPIError,
    GitHubClient,
)
from github_activity.services.github.constants import RATE_LIMIT_WARNING_THRESHOLD

logger = logging.getLogger(__name__)

EXAMPLES = """\
examples:
  github-activity octocat
  github-activity torvalds -l 20
  github-activity microsoft --since 2024-01-01
  github-activity github --stats
  github-activity nodejs --raw | jq .

configuration:
  Put {"githubToken": "your_token"} in the config file
  (GITHUB_ACTIVITY_CONFIG_FILE) or set GITHUB_TOKEN for higher rate limits.
"""

TOKEN_TIP = (
    "💡 Tip: Add a GitHub token for higher rate limits (5000/hr vs 60/hr)\n"
    "     Set GITHUB_TOKEN or add githubToken to your config file"
)


def setup_logging(level: str | int = logging.WARNING) -> None:
    """Configure application logging. Logs go to stderr so stdout stays pipeable."""
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stderr,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)


def _limit_arg(value: str) -> int:
    try:
        limit = int(value)
    except ValueError:
        return DEFAULT_LIMIT
    return limit if limit > 0 else DEFAULT_LIMIT


def _since_arg(value: str) -> str:
    try:
        parse_since(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date {value!r} (expected YYYY-MM-DD)") from e
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="github-activity",
        description="Fetch and display GitHub user activity in your terminal.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("username", nargs="?", help="GitHub username.")
    p.add_argument(
        "-l", "--limit", type=_limit_arg, default=DEFAULT_LIMIT,
        help=f"Number of events to show (default: {DEFAULT_LIMIT}).",
    )
    p.add_argument("-r", "--raw", action="store_true", help="Print raw JSON (useful for piping to jq).")
    p.add_argument("--no-cache", dest="cache", action="store_false", help="Bypass the cache and do not update it.")
    p.add_argument("--since", type=_since_arg, default=None, help="Only show events since this date (YYYY-MM-DD).")
    p.add_argument("-s", "--stats", action="store_true", help="Show activity statistics.")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return p


async def check_rate_limit(client: GitHubClient) -> int | None:
    """Warn when few requests remain. Never fails the run."""
    status = await client.get_rate_limit()
    if status is None:
        return None
    if status.remaining < RATE_LIMIT_WARNING_THRESHOLD:
        reset_at = status.reset_at.astimezone().strftime("%X")
        logger.warning(f"⚠️  API Rate Limit: {status.remaining} requests remaining (resets at {reset_at})")
    return status.remaining


async def run(args: argparse.Namespace, config: Settings) -> int:
    token = resolve_token(config)
    options = FetchOptions(limit=args.limit, since=args.since, cache_enabled=args.cache)

    async with GitHubClient(token.token) as client:
        fetcher = ActivityFetcher(
            client,
            cache=CacheStore(config.cache_file),
            cache_ttl_minutes=config.cache_ttl_minutes,
        )
        try:
            await check_rate_limit(client)
            result = await fetcher.fetch(args.username, options)
        except GitHubAPIError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1

    if result.from_cache:
        print("📦 Using cached data (use --no-cache to refresh)", file=sys.stderr)

    if args.raw:
        print(render_raw(result))
        return 0

    summary = summarize(result.events) if args.stats else None
    print()
    print(render_activity(result, summary, group_by_date=not args.stats))

    if not client.authenticated:
        print()
        print(TOKEN_TIP)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.username:
        parser.print_help()
        return 0

    setup_logging(logging.DEBUG if args.verbose else settings.log_level.upper())
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    raise SystemExit(main())
