"""
copynotice Main Entry Point

Usage:
    copynotice --dir SRC DST [--dir SRC DST ...] --ext EXT [--ext EXT ...]
               (--note TEXT | --notef FILE) [--recurse] [--replace]
               [--syntax PREFIX] [--verbose]

Examples:
    # Write a one-line notice into every .h and .c file under program/code
    copynotice --dir program/code temp --note "Written by John Doe." --ext h --ext c --verbose

    # Replace existing '# ' comment headers in a Python tree, recursively
    copynotice --dir src out --notef NOTICE.txt --ext py --syntax "# " --replace --recurse

    # Take directories and options from a YAML file
    copynotice --config config/copynotice.yaml

Exit status is 0 on success and 1 when the configuration is invalid or the
run stops on a traversal or file error.
"""

import argparse
import logging
import sys
from typing import List, Optional

from copynotice import __version__
from copynotice.config.settings import build_settings
from copynotice.console import Console
from copynotice.core.exceptions import ConfigError, NoticeIOError, TraversalError
from copynotice.logging import configure_logging, get_logger, set_level
from copynotice.runner import CopyNoticeRun
from copynotice.utils.config_loader import ConfigLoader

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command line parser"""
    parser = argparse.ArgumentParser(
        prog='copynotice',
        description='Copy source trees, writing a comment notice at the top of every matched file',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    # Targets
    parser.add_argument(
        '--dir',
        nargs=2,
        action='append',
        metavar=('SRC', 'DST'),
        dest='directories',
        help='Directory to search and directory to place output files in. May be repeated.'
    )
    parser.add_argument(
        '--ext',
        action='append',
        metavar='EXT',
        dest='extensions',
        help='Target file extension, without the dot. May be repeated.'
    )

    # Notice
    notice = parser.add_mutually_exclusive_group()
    notice.add_argument(
        '--note',
        metavar='TEXT',
        help='Notice to write into the output files'
    )
    notice.add_argument(
        '--notef',
        metavar='FILE',
        help='File containing the notice to write into the output files (CRLF line breaks)'
    )
    parser.add_argument(
        '--syntax',
        metavar='PREFIX',
        help='Comment prefix written before every notice line (default: "// ")'
    )

    # Behaviour
    parser.add_argument(
        '--recurse',
        action='store_true',
        help='Search through subdirectories'
    )
    parser.add_argument(
        '--replace',
        action='store_true',
        help='Replace a comment already present at the beginning of a source file'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log extended information'
    )

    # Configuration and logging
    parser.add_argument(
        '--config',
        metavar='FILE',
        help='YAML run configuration; command-line values extend or override it'
    )
    parser.add_argument(
        '--log-config',
        metavar='FILE',
        help='YAML logging configuration (logging.config.dictConfig schema)'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Structured log level (default: $COPYNOTICE_LOG_LEVEL or WARNING)'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def echo_command_line(console: Console, argv: List[str]) -> None:
    for index, arg in enumerate(argv):
        console.line(f"Argument {index}: \"{arg}\"", "muted")


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """
    Run copynotice.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])
        console: Console collaborator (default: stdout/stdin)

    Returns:
        Process exit code
    """
    if argv is None:
        argv = sys.argv[1:]
    console = console or Console()
    console.banner()

    parser = build_parser()
    if not argv:
        console.line("No arguments specified.", "error")
        parser.print_help(console.output)
        return 1

    args = parser.parse_args(argv)

    if args.log_config:
        configure_logging(args.log_config)
    if args.log_level:
        set_level(getattr(logging, args.log_level))

    if args.verbose:
        echo_command_line(console, argv)

    try:
        if args.config:
            file_config = ConfigLoader.load_with_env_override(args.config)
        else:
            file_config = ConfigLoader.apply_env_overrides({})

        settings = build_settings(file_config, cli={
            'directories': args.directories,
            'extensions': args.extensions,
            'note': args.note,
            'notef': args.notef,
            'syntax': args.syntax,
            'recurse': args.recurse,
            'replace': args.replace,
            'verbose': args.verbose
        })

        run = CopyNoticeRun()
        run.initialize({'settings': settings, 'console': console})
        run.execute()
        payload = run.finalize()
    except ConfigError as e:
        console.report_exception(f"Error: {e}")
        logger.error(f"Configuration error: {e}")
        return 1
    except (TraversalError, NoticeIOError) as e:
        console.report_exception(str(e))
        logger.error(f"Run aborted: {e}", exc_info=True)
        return 1
    except EOFError:
        console.report_exception("Input closed before an answer was given.")
        logger.error("Run aborted: console input closed")
        return 1

    logger.info("Run complete", extra={'extra_fields': payload['result']})
    return 0


if __name__ == "__main__":
    sys.exit(main())
