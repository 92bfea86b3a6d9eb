"""
Command-line interface for the repo-composer tool.

This module orchestrates all other components:
- load the .compose.yml config of the private tree
- mirror and redact the declared entries into the public tree
- prune stale top-level entries of the public tree
- write the workspace manifest

With --check, only the directive validation runs and nothing is written.
"""

from __future__ import annotations

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from .config import CONFIG_NAME, TOOL_VERSION
from .manifest import Manifest
from .synchronizer import TreeSynchronizer
from .transformer import Transformer
from .workspace import write_workspace


class ComposeError(RuntimeError):
    """Raised when a stage of the run fails."""


# ---------------------------------------------------------------------------
# Color output helpers
# ---------------------------------------------------------------------------


class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    BLUE = "\033[94m"
    RESET = "\033[0m"


def colored(text: str, color: str) -> str:
    """Return colored text for terminal output."""
    return f"{color}{text}{Colors.RESET}"


def print_error(msg: str) -> None:
    """Print error message to stderr."""
    print(colored(f"✗ Error: {msg}", Colors.RED), file=sys.stderr)


def print_success(msg: str) -> None:
    """Print success message."""
    print(colored(f"✓ {msg}", Colors.GREEN))


def format_error_chain(exc: BaseException) -> str:
    """Join an exception and its causes into one line, outermost first."""
    messages = []
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        messages.append(str(current) or type(current).__name__)
        current = current.__cause__
    return ": ".join(messages)


# ---------------------------------------------------------------------------
# CLI context
# ---------------------------------------------------------------------------


class CLIContext:
    """Shared context for a run."""

    def __init__(
        self,
        in_path: str,
        out_path: str,
        config_path: Optional[str],
        verbose: bool,
        quiet: bool,
    ):
        self.in_path = Path(in_path)
        self.out_path = Path(out_path)
        self.config_path = Path(config_path) if config_path else self.in_path / CONFIG_NAME
        self.verbose = verbose
        self.quiet = quiet

        # Lazy-loaded
        self._manifest: Optional[Manifest] = None
        self._synchronizer: Optional[TreeSynchronizer] = None

    @property
    def manifest(self) -> Manifest:
        """Load config lazily."""
        if self._manifest is None:
            try:
                self._manifest = Manifest.load(self.config_path)
            except RuntimeError as exc:
                raise ComposeError("failed to read config") from exc
        return self._manifest

    @property
    def synchronizer(self) -> TreeSynchronizer:
        """Create synchronizer lazily."""
        if self._synchronizer is None:
            self._synchronizer = TreeSynchronizer(
                self.in_path,
                self.out_path,
                transformer=Transformer(self.manifest.syntax),
                excluded=self.manifest.no_copy,
            )
        return self._synchronizer

    def log_verbose(self, msg: str) -> None:
        """Log message if verbose."""
        if self.verbose and not self.quiet:
            print(colored(f"  → {msg}", Colors.BLUE))


# ---------------------------------------------------------------------------
# Command implementations
# ---------------------------------------------------------------------------


def cmd_compose(ctx: CLIContext, args: argparse.Namespace) -> int:
    """
    Build the public tree from the private tree.
    """
    manifest = ctx.manifest
    synchronizer = ctx.synchronizer

    if not args.no_process:
        try:
            ctx.out_path.mkdir(parents=True, exist_ok=True)
            report = synchronizer.sync(manifest.entries)
        except (OSError, RuntimeError) as exc:
            raise ComposeError("failed to process entries") from exc

        for path in report.redacted:
            ctx.log_verbose(f"redacted {path}")
        for path in report.copied:
            ctx.log_verbose(f"copied   {path}")
        for path in report.skipped:
            ctx.log_verbose(f"skipped  {path}")
    else:
        ctx.log_verbose("Skipping file processing")

    try:
        removed = synchronizer.prune(manifest.spare_set(args.spare))
    except RuntimeError as exc:
        raise ComposeError("failed to prune entries") from exc

    for path in removed:
        ctx.log_verbose(f"removed  {path}")

    try:
        descriptor = write_workspace(ctx.out_path, manifest, args.add_tool)
    except OSError as exc:
        raise ComposeError("failed to write workspace manifest") from exc

    ctx.log_verbose(f"wrote    {descriptor}")

    if ctx.quiet:
        return 0

    if args.no_process:
        print_success(f"Pruned {len(removed)} entry(ies) in {ctx.out_path}")
    else:
        print_success(
            f"Composed {ctx.out_path}: {len(report.redacted)} redacted, "
            f"{len(report.copied)} copied, {len(removed)} pruned"
        )
    return 0


def cmd_check(ctx: CLIContext, args: argparse.Namespace) -> int:
    """
    Validate every directive in the declared entries without writing.
    """
    manifest = ctx.manifest
    synchronizer = ctx.synchronizer

    try:
        regions = synchronizer.check(manifest.entries)
    except RuntimeError as exc:
        raise ComposeError("failed to check entries") from exc

    if not ctx.quiet:
        print_success(f"Directives OK: {regions} private region(s)")
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="repo-composer",
        description="Build a public skeleton tree from a private source tree",
    )

    parser.add_argument(
        "-i", "--in-path",
        required=True,
        help="Path to the private repo",
    )
    parser.add_argument(
        "-o", "--out-path",
        required=True,
        help="Path to the public repo",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help=f"Path to config file (default: <in-path>/{CONFIG_NAME})",
    )
    parser.add_argument(
        "--no-process",
        action="store_true",
        help="Disable file processing (prune and write manifest only)",
    )
    parser.add_argument(
        "-s", "--spare",
        action="append",
        default=[],
        metavar="NAME",
        help="Spare given entry from pruning (repeatable)",
    )
    parser.add_argument(
        "-t", "--add-tool",
        action="append",
        default=[],
        metavar="PATH",
        help="Add given tool to the workspace manifest (repeatable)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only validate directives, write nothing",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {TOOL_VERSION}",
    )

    return parser


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    ctx = CLIContext(
        in_path=args.in_path,
        out_path=args.out_path,
        config_path=args.config,
        verbose=args.verbose,
        quiet=args.quiet,
    )

    command = cmd_check if args.check else cmd_compose

    try:
        return command(ctx, args)
    except KeyboardInterrupt:
        print_error("Interrupted")
        return 130
    except ComposeError as exc:
        print_error(format_error_chain(exc))
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1
    except Exception as exc:
        print_error(f"Unexpected error: {format_error_chain(exc)}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
