import argparse
import logging
import sys
import textwrap
import tomllib
from pathlib import Path
from typing import Iterable, TextIO

from . import Scanner, Settings, ReportStore, DuplicateGroup, FingerprintError
from .scanner import configure_logging_from_settings
from .utils.profiling import profile_main

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='treedup',
        description='Fingerprint every file, directory and symbolic link under a path and list the ones that are '
                    'duplicates of each other.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              treedup scan /home/user/photos
              treedup scan . --ignore '*/.git/' --ignore '*.pyc'
              treedup show outputs/1730332456.report
            ''').strip()
    )
    parser.add_argument(
        '--config',
        metavar='PATH',
        help='Path to a TOML configuration file. If not provided, uses TREEDUP_CONFIG environment variable or '
             'treedup.toml in the current directory when present.')
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log progress, including every visited path, to standard error')
    parser.add_argument(
        '--log-file',
        metavar='PATH',
        help='Path to log file for operation logging. If not provided, uses logging.path from the configuration or no '
             'logging.')
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to INFO when --log-file is provided.')
    subparsers = parser.add_subparsers(
        dest='command',
        title='Commands',
        required=True,
        help='Use "treedup COMMAND --help" for command-specific help'
    )

    parser_scan = subparsers.add_parser(
        'scan',
        help='Fingerprint a tree and list duplicated entries',
        description='Computes a fingerprint for every node under ROOT. Files are fingerprinted by content, symbolic '
                    'links by their target text and directories by the names and fingerprints of their children. '
                    'Nodes sharing a fingerprint are printed as duplicates and saved to a timestamped report.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Ignore patterns are shell-style globs matched against the full path as
            given on the command line. Directories are matched with a trailing
            separator, so '*/build/' skips build directories and symbolic links
            to them, but not files named build.
            ''').strip())
    parser_scan.add_argument(
        'root',
        metavar='ROOT',
        help='The root directory of scanning')
    parser_scan.add_argument(
        '--ignore',
        metavar='IGNORE-GLOB',
        action='append',
        default=[],
        help='Glob of files or directories to ignore; may be repeated')
    parser_scan.add_argument(
        '--report-dir',
        metavar='DIR',
        help='Directory where the report is written (default: report.directory from the configuration, or outputs)')
    parser_scan.add_argument(
        '--no-report',
        action='store_true',
        help='Only print duplicates, do not write a report')
    parser_scan.set_defaults(method=_scan)

    parser_show = subparsers.add_parser(
        'show',
        help='Show duplicates stored in a report',
        description='Prints the duplicate groups stored in REPORT. When paths are given, prints the fingerprint of '
                    'each path and the other paths sharing it.')
    parser_show.add_argument(
        'report',
        metavar='REPORT',
        help='Report directory written by "treedup scan"')
    parser_show.add_argument(
        'paths',
        nargs='*',
        metavar='PATH',
        help='Paths to look up, spelled as they were during the scan')
    parser_show.set_defaults(method=_show)

    return parser


def _configure_logging(args, settings: Settings):
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=getattr(logging, args.log_level or 'INFO'),
            format=LOG_FORMAT
        )
    else:
        configure_logging_from_settings(settings)

    if args.verbose:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.root.addHandler(handler)
        logging.root.setLevel(logging.DEBUG)


@profile_main
def treedup_main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.discover(args.config)
    except (OSError, tomllib.TOMLDecodeError) as e:
        print(f"Error: cannot load configuration: {e}", file=sys.stderr)
        return 2
    return args.method(settings, args, sys.stdout)


def _print_failure(path: Path, error: FingerprintError):
    print(f"{error.kind}: {path}", file=sys.stderr)


def _print_groups(groups: Iterable[DuplicateGroup], output: TextIO) -> bool:
    any_dup = False
    for group in groups:
        any_dup = True
        print(group.hex, file=output)
        for path in group.paths:
            print(f"    {path}", file=output)
    if not any_dup:
        print("No duplicated entries", file=output)
    return any_dup


def _scan(settings: Settings, args, output: TextIO) -> int:
    try:
        scanner = Scanner(settings, args.ignore, on_failure=_print_failure)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    _configure_logging(args, settings)

    result = scanner.scan(
        args.root,
        report_directory=Path(args.report_dir) if args.report_dir else None,
        write_report=False if args.no_report else None,
    )

    _print_groups(result.groups.duplicates(), output)
    if result.report_dir is not None:
        print(f"Report: {result.report_dir}", file=sys.stderr)

    return 0 if result.root_fingerprint is not None else 1


def _show(settings: Settings, args, output: TextIO) -> int:
    _configure_logging(args, settings)

    store = ReportStore(Path(args.report))
    try:
        store.open_database()
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        if not args.paths:
            _print_groups(store.iter_groups(), output)
            return 0
        return _show_paths(store, [Path(p) for p in args.paths], output)
    finally:
        store.close_database()


def _show_paths(store: ReportStore, paths: list[Path], output: TextIO) -> int:
    status = 0
    for path in paths:
        fingerprint = store.lookup_fingerprint(path)
        if fingerprint is None:
            print(f"Not fingerprinted: {path}", file=sys.stderr)
            status = 1
            continue

        print(f"{fingerprint.hex().upper()}  {path}", file=output)
        group = store.read_group(fingerprint)
        if group is not None:
            for duplicate in group.paths:
                if duplicate != path:
                    print(f"    {duplicate}", file=output)
    return status


if __name__ == '__main__':
    sys.exit(treedup_main())
