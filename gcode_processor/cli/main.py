"""
CLI entry point for the gcode-processor command.

Two commands wrap the core entry points:
- annotate: parse a program, append line descriptions, write a copy
- merge: merge every fragmented program in a directory, optionally deleting
  the fragments once every program has been written
"""

import argparse
import logging
import sys
from dataclasses import dataclass

from gcode_processor import __version__
from gcode_processor.annotate import annotate_file
from gcode_processor.config import COMMENT_STYLES, LOG_LEVEL_DEFAULT, TRACE
from gcode_processor.grouping import group_fragment_files
from gcode_processor.merge import delete_sources, merge_batch
from gcode_processor.utils.errors import FragmentFormatError, FragmentGroupError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    """What a front-end shows the user for a failed operation"""

    message: str
    title: str
    severity: str  # 'error' or 'warning'


def to_notice(exc: BaseException) -> Notice:
    """Map a core exception to a (message, title, severity) notice."""
    if isinstance(exc, FileNotFoundError):
        return Notice(str(exc), "File Not Found", "error")
    if isinstance(exc, FragmentFormatError):
        return Notice(str(exc), "Malformed Program Fragment", "error")
    if isinstance(exc, FragmentGroupError):
        return Notice(str(exc), "Ambiguous Fragment Files", "error")
    return Notice(str(exc), "Unexpected Error", "error")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gcode-processor",
        description="Annotate G-code programs and merge CAM program fragments",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Only log errors')
    parser.add_argument('--log-level', choices=['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Set specific log level')

    sub = parser.add_subparsers(dest="command", required=True)

    annotate = sub.add_parser("annotate", help="Append line descriptions as comments")
    annotate.add_argument("file", help="G-code program to annotate")
    annotate.add_argument("-o", "--output", help="Output path (default: '<name> Commented<ext>')")
    annotate.add_argument("--style", choices=COMMENT_STYLES, help="Comment style for descriptions")

    merge = sub.add_parser("merge", help="Merge program fragments split at tool changes")
    merge.add_argument("directory", help="Directory holding NAME-0, NAME-1, ... fragment files")
    merge.add_argument("-o", "--output-dir", help="Where merged programs go (default: the input directory)")
    merge.add_argument("--extension", help="Fragment file extension (default: .nc)")
    merge.add_argument("--delete-sources", action="store_true",
                       help="Delete the fragments once every program has been merged")
    return parser


def _log_level(args: argparse.Namespace) -> int:
    if args.log_level:
        if args.log_level == 'TRACE':
            return TRACE
        return getattr(logging, args.log_level)
    if args.verbose >= 3:
        return TRACE
    if args.verbose == 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.ERROR
    return getattr(logging, LOG_LEVEL_DEFAULT, logging.WARNING)


def run_annotate(args: argparse.Namespace) -> int:
    out = annotate_file(args.file, args.output, style=args.style)
    print(out)
    return 0


def run_merge(args: argparse.Namespace) -> int:
    groups = group_fragment_files(args.directory, extension=args.extension)
    if not groups:
        logger.warning(f"No fragment files found in {args.directory}")
        return 0

    output_dir = args.output_dir or args.directory
    sources = merge_batch(groups, output_dir, extension=args.extension)
    for name in groups:
        print(name)

    if args.delete_sources:
        delete_sources(sources)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=_log_level(args),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    handlers = {"annotate": run_annotate, "merge": run_merge}
    try:
        return handlers[args.command](args)
    except (FileNotFoundError, FragmentFormatError, FragmentGroupError) as e:
        notice = to_notice(e)
        logger.error(f"{notice.title}: {notice.message}")
        return 1


def main_entry():
    """Entry point for the gcode-processor command."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
