"""
Output - Console output formatting.

Provides pretty-printed output with colors, or JSON for scripting.
"""

from __future__ import annotations

import json
import sys
from typing import Any, TextIO

from trackbridge.application.sync import CommentBatchResult
from trackbridge.core.domain import Issue


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"


class Symbols:
    """Unicode symbols for terminal output."""

    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    DOT = "•"
    WARN = "⚠"
    INFO = "ℹ"


class Console:
    """
    Console output helper with colors and formatting.

    Attributes:
        color: Whether to use ANSI color codes.
        verbose: Whether to print debug messages.
        json_mode: Whether to output JSON format for programmatic use.
    """

    def __init__(
        self,
        color: bool = True,
        verbose: bool = False,
        json_mode: bool = False,
        stream: TextIO | None = None,
    ):
        """
        Initialize the console output helper.

        Args:
            color: Enable colored output. Disabled automatically off a TTY.
            verbose: Enable verbose debug output.
            json_mode: Output JSON instead of text.
            stream: Where to write (stdout by default)
        """
        self.stream = stream or sys.stdout
        self.json_mode = json_mode
        self.color = color and self.stream.isatty() and not json_mode
        self.verbose = verbose

    def _c(self, text: str, *codes: str) -> str:
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def print(self, text: str = "") -> None:
        print(text, file=self.stream)

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------

    def success(self, text: str) -> None:
        if self.json_mode:
            return
        self.print(self._c(f"{Symbols.CHECK} {text}", Colors.GREEN))

    def error(self, text: str) -> None:
        """Print an error. In JSON mode errors are emitted as an object."""
        if self.json_mode:
            self.emit({"error": text})
            return
        self.print(self._c(f"{Symbols.CROSS} {text}", Colors.RED))

    def warning(self, text: str) -> None:
        if self.json_mode:
            return
        self.print(self._c(f"{Symbols.WARN} {text}", Colors.YELLOW))

    def info(self, text: str) -> None:
        if self.json_mode:
            return
        self.print(self._c(f"{Symbols.INFO} {text}", Colors.CYAN))

    def config_errors(self, errors: list[str]) -> None:
        if self.json_mode:
            self.emit({"error": "Invalid configuration", "details": errors})
            return
        self.print(self._c(f"{Symbols.CROSS} Configuration errors:", Colors.RED, Colors.BOLD))
        for error in errors:
            self.print(f"    {Symbols.DOT} {error}")

    # -------------------------------------------------------------------------
    # Structured Output
    # -------------------------------------------------------------------------

    def emit(self, data: Any) -> None:
        """Write one JSON document."""
        self.print(json.dumps(data, indent=2, default=str))

    def issue(self, issue: Issue) -> None:
        """Print a single issue in detail."""
        if self.json_mode:
            self.emit(issue.to_dict())
            return

        self.print(self._c(f"{issue.tracker_id or issue.url}", Colors.BOLD, Colors.BLUE))
        if issue.summary:
            self.print(f"  {issue.summary}")
        self.print(f"  Status:   {issue.status.display_name}")
        self.print(f"  Type:     {issue.type.name.replace('_', ' ').title()}")
        if issue.product:
            self.print(f"  Project:  {issue.product}")
        if issue.assignee:
            self.print(f"  Assignee: {issue.assignee}")
        if issue.release:
            self.print(f"  Release:  {issue.release}")
        if issue.stage:
            flags = ", ".join(f"{f.name}{s.value}" for f, s in issue.stage.items())
            self.print(f"  Stage:    {flags}")
        for url in issue.blocks:
            self.print(self._c(f"  blocks {Symbols.ARROW} {url}", Colors.DIM))
        for url in issue.depends_on:
            self.print(self._c(f"  depends on {Symbols.ARROW} {url}", Colors.DIM))
        self.print(self._c(f"  {issue.url}", Colors.DIM))

    def issues(self, issues: list[Issue]) -> None:
        """Print a one-line summary per issue."""
        if self.json_mode:
            self.emit([issue.to_dict() for issue in issues])
            return

        if not issues:
            self.info("No issues found")
            return

        width = max(len(str(issue)) for issue in issues)
        for issue in issues:
            status = issue.status.display_name.ljust(10)
            self.print(
                f"{self._c(str(issue).ljust(width), Colors.BOLD)}  "
                f"{self._c(status, Colors.CYAN)}  {issue.summary or ''}"
            )
        self.print(self._c(f"{len(issues)} issue(s)", Colors.DIM))

    def comment_result(self, result: CommentBatchResult) -> None:
        if self.json_mode:
            self.emit(
                {
                    "posted": [str(o.issue) for o in result.posted],
                    "failed": [{"issue": str(o.issue), "error": o.error} for o in result.failed],
                }
            )
            return

        for outcome in result.outcomes:
            if outcome.posted:
                self.success(f"Commented on {outcome.issue}")
            else:
                self.error(f"Failed to comment on {outcome.issue}: {outcome.error}")
