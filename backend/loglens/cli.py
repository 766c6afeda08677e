"""loglens: rank errors and warnings in text log files and bucket them over time."""

import sys
from argparse import ArgumentParser
from typing import List, Optional

from loglens.core.config import settings
from loglens.core.logging import setup_logging, get_logger
from loglens.models.schemas import AnalysisView
from loglens.services.log_pipeline import GroupKeyPolicy, LogLevel
from loglens.services.orchestrator import (
    build_view, is_accepted, process_selection, selected_file_from_path
)
from loglens.services.session import SessionSnapshot

logger = get_logger(__name__)

TITLE_WIDTH = 80


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="loglens",
        description="Rank errors and warnings in log files and show when they happened.",
    )
    parser.add_argument(
        "files",
        nargs="+",
        help="Log file path(s) (.txt or .log)",
    )
    parser.add_argument(
        "--level",
        choices=[level.value for level in LogLevel],
        default=LogLevel.ERROR.value,
        help="Which entries to analyze (default: ERR)",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=None,
        help=f"Number of groups to show (default: {settings.top_n})",
    )
    parser.add_argument(
        "--group-key",
        choices=[policy.value for policy in GroupKeyPolicy],
        default=None,
        help="Group by the full message or only its first line",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the analysis view as JSON",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )
    return parser


def format_view_text(view: AnalysisView) -> str:
    lines: List[str] = []

    lines.append("Files:")
    for s in view.file_summaries:
        lines.append(f"  {s.file_name}: {s.error_count} errors, {s.warning_count} warnings")

    noun = "errors" if view.level == LogLevel.ERROR.value else "warnings"
    lines.append("")
    lines.append(f"Top {len(view.groups)} {noun} ({view.total_occurrences} of {view.total_entries} entries):")
    for g in view.groups:
        title = g.title if len(g.title) <= TITLE_WIDTH else g.title[:TITLE_WIDTH - 3] + "..."
        lines.append(f"  {g.rank:>3}. [{g.count:>5}] {title}")

    lines.append("")
    if view.timeline.start is None:
        lines.append("Timeline: no entries")
    else:
        lines.append(
            f"Timeline ({view.timeline.interval_minutes} min buckets, "
            f"{view.timeline.start:%Y-%m-%d %H:%M} - {view.timeline.end:%Y-%m-%d %H:%M} UTC):")
        for interval in view.timeline.intervals:
            if interval.count:
                lines.append(f"  {interval.start:%Y-%m-%d %H:%M}  {interval.count}")

    return "\n".join(lines)


def run(args) -> int:
    """Select, process and print. Returns the exit status."""
    snapshot = SessionSnapshot()

    selected = []
    for path in args.files:
        if not is_accepted(path):
            accepted = ", ".join(settings.allowed_extensions_list)
            print(f"Skipping {path}: not one of {accepted}", file=sys.stderr)
            continue
        selected.append(selected_file_from_path(path))

    snapshot = snapshot.with_files_added(*selected)
    snapshot, result = process_selection(snapshot)
    snapshot = snapshot.with_level(LogLevel(args.level))

    for failure in result.failures:
        print(f"Could not read {failure.file_name}: {failure.reason}", file=sys.stderr)

    if not selected or len(result.failures) == len(selected):
        print("Error: no readable log files", file=sys.stderr)
        return 1

    key_policy = GroupKeyPolicy(args.group_key) if args.group_key else None
    view = build_view(snapshot, top_n=args.top, key_policy=key_policy)

    if args.json:
        print(view.model_dump_json(indent=2))
    else:
        print(format_view_text(view))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.top is not None and args.top < 1:
        parser.error("--top must be at least 1")

    if args.verbose:
        setup_logging("DEBUG")

    try:
        return run(args)
    except KeyboardInterrupt:
        return 0
    except BrokenPipeError:
        return 0


if __name__ == "__main__":
    sys.exit(main())
