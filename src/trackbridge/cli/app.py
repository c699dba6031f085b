"""
CLI App - Main entry point for the trackbridge command line tool.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from trackbridge import __version__
from trackbridge.adapters.config import EnvironmentConfigProvider, FileConfigProvider
from trackbridge.application import TrackerRegistry, create_registry
from trackbridge.core.domain import Comment, Issue, IssueStatus, SearchCriteria
from trackbridge.core.exceptions import ConfigValidationError, TrackBridgeError
from trackbridge.core.ports.config_provider import ConfigProviderPort

from .exit_codes import ExitCode
from .logging import setup_logging
from .output import Console


logger = logging.getLogger("trackbridge")


def create_parser() -> argparse.ArgumentParser:
    """
    Create the command-line argument parser for trackbridge.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="trackbridge",
        description="Read, search and comment on issues across issue trackers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show one issue
  trackbridge get https://issues.example.org/browse/PROJ-123

  # Search a project for issues in progress
  trackbridge search --product PROJ --status assigned --max 20

  # Run a saved filter
  trackbridge filter https://issues.example.org/rest/api/2/filter/12322199

  # Comment on an issue, using several trackers from a config file
  trackbridge --config trackers.yaml comment https://issues.example.org/browse/PROJ-1 --body "Fixed upstream"

  # Comment on several issues at once, best effort
  trackbridge comment https://issues.example.org/browse/PROJ-1 https://issues.example.org/browse/PROJ-2 -b "Released in 1.2"
        """,
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="YAML or JSON config file listing trackers (default: environment / .env)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default="text",
        help="Log output format (default: text)",
    )
    parser.add_argument("--log-file", type=str, help="Also write logs to this file")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")

    subparsers = parser.add_subparsers(dest="command", required=True)

    get_parser = subparsers.add_parser("get", help="Show one issue")
    get_parser.add_argument("url", help="Issue URL (browse or REST form)")

    search_parser = subparsers.add_parser("search", help="Search issues on every tracker")
    search_parser.add_argument(
        "--status",
        choices=[s.name.lower() for s in IssueStatus if s is not IssueStatus.UNKNOWN],
        help="Canonical status",
    )
    search_parser.add_argument("--product", help="Project key")
    search_parser.add_argument("--assignee", help="Assignee user name")
    search_parser.add_argument("--max", type=int, dest="max_results", help="Maximum results")

    filter_parser = subparsers.add_parser("filter", help="Run a saved filter")
    filter_parser.add_argument("url", help="Filter URL")

    comment_parser = subparsers.add_parser("comment", help="Comment on one or more issues")
    comment_parser.add_argument("urls", nargs="+", metavar="url", help="Issue URL(s)")
    comment_parser.add_argument("--body", "-b", required=True, help="Comment text")
    comment_parser.add_argument(
        "--private", action="store_true", help="Restrict visibility where supported"
    )

    return parser


def load_config_provider(args: argparse.Namespace) -> ConfigProviderPort:
    """Pick the config source: an explicit file, else the environment."""
    if getattr(args, "config", None):
        return FileConfigProvider(Path(args.config))
    return EnvironmentConfigProvider()


# -------------------------------------------------------------------------
# Commands
# -------------------------------------------------------------------------


def run_get(registry: TrackerRegistry, args: argparse.Namespace, console: Console) -> int:
    console.issue(registry.get_issue(args.url))
    return ExitCode.SUCCESS


def run_search(registry: TrackerRegistry, args: argparse.Namespace, console: Console) -> int:
    criteria = SearchCriteria(
        status=IssueStatus.from_string(args.status) if args.status else None,
        product=args.product,
        assignee=args.assignee,
        max_results=args.max_results,
    )
    console.issues(registry.search_issues(criteria))
    return ExitCode.SUCCESS


def run_filter(registry: TrackerRegistry, args: argparse.Namespace, console: Console) -> int:
    console.issues(registry.search_issues_by_filter(args.url))
    return ExitCode.SUCCESS


def run_comment(registry: TrackerRegistry, args: argparse.Namespace, console: Console) -> int:
    """
    Post a comment.

    A single issue is commented on directly and its failure is fatal. Several
    issues are commented on best effort; any failure gives a non-zero exit.
    """
    comment = Comment(body=args.body, is_private=args.private)

    if len(args.urls) == 1:
        url = args.urls[0]
        registry.add_comment_to_issue(Issue(url=url), comment)
        if console.json_mode:
            console.emit({"posted": [url], "failed": []})
        else:
            console.success(f"Commented on {url}")
        return ExitCode.SUCCESS

    result = registry.add_comment_to_issues([Issue(url=url) for url in args.urls], comment)
    console.comment_result(result)
    return ExitCode.SUCCESS if result.all_posted else ExitCode.ERROR


COMMANDS = {
    "get": run_get,
    "search": run_search,
    "filter": run_filter,
    "comment": run_comment,
}


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the trackbridge CLI.

    Parses arguments, sets up logging, loads configuration and runs the
    selected command.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.WARNING
    setup_logging(level=log_level, log_format=args.log_format, log_file=args.log_file)

    console = Console(color=not args.no_color, verbose=args.verbose, json_mode=args.json)

    try:
        provider = load_config_provider(args)
        app_config = provider.load()
    except ConfigValidationError as e:
        console.config_errors(e.errors)
        return ExitCode.CONFIG_ERROR
    except TrackBridgeError as e:
        console.error(str(e))
        return ExitCode.from_exception(e)

    try:
        with create_registry(app_config) as registry:
            return COMMANDS[args.command](registry, args, console)
    except KeyboardInterrupt as e:
        console.warning("Interrupted")
        return ExitCode.from_exception(e)
    except ConfigValidationError as e:
        console.config_errors(e.errors)
        return ExitCode.CONFIG_ERROR
    except TrackBridgeError as e:
        logger.debug("Command failed", exc_info=True)
        console.error(str(e))
        return ExitCode.from_exception(e)
    except ValueError as e:
        console.error(str(e))
        return ExitCode.ERROR


def run() -> None:
    """
    Entry point for the console script.

    Calls main() and exits with its return code.
    """
    sys.exit(main())


if __name__ == "__main__":
    run()
