"""Command-line interface for the segmentation pipeline."""

import argparse
import logging
import sys
from pathlib import Path

from .config import Config
from .conflicts import ConflictSession, scan
from .granularity import PRESETS
from .models import RESOLUTIONS
from .ngrams import get_ngram_suggestions
from .pipeline import SegmentationPipeline
from .project import (
    DEFAULT_PROJECT_NAME,
    glossary_path_for,
    load_glossary,
    load_project,
    read_project,
    save_conflicts_csv,
    save_glossary,
    save_project,
)

COMMANDS = ("segment", "scan", "resolve", "suggest")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Segment Myanmar text and check segmentation consistency",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Using a config file
  myanseg segment --config config.yaml

  # Direct arguments
  myanseg segment --input data/input.txt --output data/output --preset word

  # List conflicts in a saved project
  myanseg scan --project data/output/Myanmar_Segmentation_Project.json

  # Rewrite every occurrence to the first form
  myanseg resolve --project project.json --word WORD --resolution fix_all --prefer formA
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    segment_parser = subparsers.add_parser("segment", help="Segment a text file")
    setup_segment_parser(segment_parser)

    scan_parser = subparsers.add_parser("scan", help="List segmentation conflicts")
    setup_scan_parser(scan_parser)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a conflict")
    setup_resolve_parser(resolve_parser)

    suggest_parser = subparsers.add_parser("suggest", help="Suggest frequent merges")
    setup_suggest_parser(suggest_parser)

    argv = sys.argv[1:] if argv is None else list(argv)

    # If no command specified, treat as segment command
    if not argv or (argv[0] not in COMMANDS and argv[0] not in ("-h", "--help")):
        argv = ["segment"] + argv

    return parser.parse_args(argv)


def add_verbose_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )


def setup_segment_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for segment command."""
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--input",
        type=Path,
        help="Path to input UTF-8 text file",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Output directory for the project and reports",
    )
    parser.add_argument(
        "--engine",
        choices=["sylbreak", "remote"],
        help="Segmentation engine (default: sylbreak)",
    )
    parser.add_argument(
        "--remote-url",
        type=str,
        help="Endpoint of the remote segmentation service",
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        help="Granularity preset (default: syllable)",
    )
    parser.add_argument(
        "--project-name",
        type=str,
        help="Project name used for output file names",
    )
    parser.add_argument(
        "--no-csv",
        action="store_true",
        help="Skip the segment and conflict CSV reports",
    )
    add_verbose_argument(parser)


def setup_scan_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for scan command."""
    parser.add_argument(
        "--project",
        type=Path,
        required=True,
        help="Path to project JSON file",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional CSV file for the conflict report",
    )
    parser.add_argument(
        "--max-window",
        type=int,
        default=4,
        choices=[2, 3, 4],
        help="Longest run of units compared (default: 4)",
    )
    add_verbose_argument(parser)


def setup_resolve_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for resolve command."""
    parser.add_argument(
        "--project",
        type=Path,
        required=True,
        help="Path to project JSON file",
    )
    parser.add_argument(
        "--word",
        type=str,
        required=True,
        help="Joined text of the conflict to resolve",
    )
    parser.add_argument(
        "--resolution",
        choices=list(RESOLUTIONS),
        required=True,
        help="How to resolve the conflict",
    )
    parser.add_argument(
        "--prefer",
        choices=["formA", "formB"],
        help="Canonical form for fix_all",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Where to write the updated project (default: overwrite --project)",
    )
    add_verbose_argument(parser)


def setup_suggest_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for suggest command."""
    parser.add_argument(
        "--project",
        type=Path,
        required=True,
        help="Path to project JSON file",
    )
    parser.add_argument(
        "--min-count",
        type=int,
        default=3,
        help="Minimum bigram frequency (default: 3)",
    )
    add_verbose_argument(parser)


def build_config(args: argparse.Namespace) -> Config:
    """Build configuration from arguments."""
    # Start with config file if provided
    if hasattr(args, "config") and args.config:
        config = Config.from_yaml(args.config)
    else:
        config = Config()

    # Override with command-line arguments
    if hasattr(args, "input") and args.input:
        config.input_file = args.input
    if hasattr(args, "output") and args.output:
        config.output.output_dir = args.output
    if hasattr(args, "project_name") and args.project_name:
        config.output.project_name = args.project_name
    if hasattr(args, "no_csv") and args.no_csv:
        config.output.save_segments_csv = False
        config.output.save_conflicts_csv = False

    if hasattr(args, "engine") and args.engine:
        config.segmentation.engine = args.engine
    if hasattr(args, "remote_url") and args.remote_url:
        config.remote.url = args.remote_url
    if hasattr(args, "preset") and args.preset:
        config.granularity.preset = args.preset

    return config


def handle_segment(args: argparse.Namespace) -> int:
    """Handle segment command."""
    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not config.input_file:
        print("Error: Input file is required (use --input or --config)", file=sys.stderr)
        return 1

    try:
        pipeline = SegmentationPipeline(config)
        line_count = pipeline.run()
        print(f"\nProcessed {line_count} lines, {len(pipeline.conflicts)} conflicts")
        return 0
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Segmentation failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1


def handle_scan(args: argparse.Namespace) -> int:
    """Handle scan command."""
    try:
        lines = load_project(args.project)
        conflicts = scan(lines, args.max_window)
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Scan failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for conflict in conflicts:
        print(
            f"{conflict.id}\t{conflict.word}\t"
            f"formA={conflict.form_a_key} ({len(conflict.locations_a)})\t"
            f"formB={conflict.form_b_key} ({len(conflict.locations_b)})"
        )
    print(f"\n{len(conflicts)} conflicts in {len(lines)} lines")

    if args.output:
        save_conflicts_csv(args.output, conflicts)
        print(f"Conflict report saved in: {args.output}")
    return 0


def handle_resolve(args: argparse.Namespace) -> int:
    """Handle resolve command."""
    try:
        lines, meta = read_project(args.project)
        glossary = load_glossary(glossary_path_for(args.project))
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Loading project failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    session = ConflictSession(glossary=glossary)
    session.scan(lines)
    conflict = session.find_by_word(args.word)
    if conflict is None:
        print(f"Error: No conflict for {args.word!r}", file=sys.stderr)
        return 1

    try:
        lines = session.resolve(conflict.id, args.resolution, args.prefer)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output = args.output or args.project
    save_project(output, lines, name=meta.get("name", DEFAULT_PROJECT_NAME))
    save_glossary(glossary_path_for(output), glossary)
    print(f"Resolved {conflict.word!r} as {args.resolution}; project saved in: {output}")
    return 0


def handle_suggest(args: argparse.Namespace) -> int:
    """Handle suggest command."""
    try:
        lines = load_project(args.project)
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Loading project failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    suggestions = get_ngram_suggestions(lines, min_count=args.min_count)
    for suggestion in suggestions:
        a, b = suggestion.bigram
        print(f"{a} + {b} -> {suggestion.merged_form}\t{suggestion.count}")
    print(f"\n{len(suggestions)} suggestions")
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose if hasattr(args, "verbose") else False)

    if args.command == "scan":
        return handle_scan(args)
    elif args.command == "resolve":
        return handle_resolve(args)
    elif args.command == "suggest":
        return handle_suggest(args)
    else:
        return handle_segment(args)


if __name__ == "__main__":
    sys.exit(main())
