"""CLI entry point for tokentrim: diff, find, grep, version."""

import argparse
import logging
import os
import sys

from tokentrim import __version__, config, data_dir
from tokentrim.commands import run_diff, run_diff_stdin, run_find, run_grep


def setup_logging(verbose: int):
    """Send progress notices to stderr for -v (INFO) and -vv (DEBUG).

    With TOKENTRIM_DEBUG=true, everything is also written to
    ~/.tokentrim/debug.log.
    """
    log = logging.getLogger("tokentrim")
    log.setLevel(logging.DEBUG)
    log.propagate = False
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()

    if verbose > 0:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.DEBUG if verbose > 1 else logging.INFO)
        handler.setFormatter(logging.Formatter("%(message)s"))
        log.addHandler(handler)

    if config.get("debug"):
        log_dir = data_dir()
        os.makedirs(log_dir, exist_ok=True)
        handler = logging.FileHandler(os.path.join(log_dir, "debug.log"))
        handler.setFormatter(logging.Formatter("%(asctime)s [%(name)s] %(levelname)s: %(message)s"))
        log.addHandler(handler)

    if not log.handlers:
        log.addHandler(logging.NullHandler())


def cmd_version(_args):
    """Print current version."""
    print(f"tokentrim v{__version__}")


def cmd_diff(args):
    files = [f for f in args.files if f != "-"]
    if not files:
        run_diff_stdin()
    elif len(files) == 2:
        run_diff(files[0], files[1])
    else:
        args.parser.error("diff takes two files, or none to read a unified diff from stdin")


def cmd_find(args):
    run_find(args.pattern, args.path, max_results=args.max_results)


def cmd_grep(args):
    run_grep(
        args.pattern,
        args.path,
        max_line_len=args.max_len,
        max_results=args.max_results,
        context_only=args.context_only,
    )


def _int_at_least(minimum: int):
    def parse(value: str) -> int:
        try:
            n = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
        if n < minimum:
            raise argparse.ArgumentTypeError(f"must be at least {minimum}, got {n}")
        return n

    return parse


_positive_int = _int_at_least(1)
# Room for one character plus the '...' marker
_line_cap = _int_at_least(4)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tokentrim",
        description="tokentrim: condensed diff, find and grep output",
    )
    # -v before and after the subcommand add up
    verbosity = argparse.ArgumentParser(add_help=False)
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="count",
        dest="sub_verbose",
        default=0,
        help="Progress notices on stderr (-vv for debug detail)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help=argparse.SUPPRESS)

    subparsers = parser.add_subparsers(dest="command")

    # version
    subparsers.add_parser("version", help="Show current version")

    # diff
    diff_parser = subparsers.add_parser(
        "diff",
        parents=[verbosity],
        help="Condensed diff of two files, or of a unified diff on stdin",
    )
    diff_parser.add_argument("files", nargs="*", metavar="FILE", help="Old and new file")
    diff_parser.set_defaults(parser=diff_parser)

    # find
    find_parser = subparsers.add_parser(
        "find", parents=[verbosity], help="Find files, grouped by directory"
    )
    find_parser.add_argument("pattern", help="File name glob, e.g. '*.py'")
    find_parser.add_argument("path", nargs="?", default=".", help="Search root (default: .)")
    find_parser.add_argument(
        "-m",
        "--max-results",
        type=_positive_int,
        default=config.get("find_max_results"),
        help="Maximum number of results to show",
    )

    # grep
    grep_parser = subparsers.add_parser(
        "grep", parents=[verbosity], help="Search file contents, grouped by file"
    )
    grep_parser.add_argument("pattern", help="Search pattern")
    grep_parser.add_argument("path", nargs="?", default=".", help="Search root (default: .)")
    grep_parser.add_argument(
        "-l",
        "--max-len",
        type=_line_cap,
        default=config.get("grep_max_line_len"),
        help="Maximum displayed line length",
    )
    grep_parser.add_argument(
        "-m",
        "--max-results",
        type=_positive_int,
        default=config.get("grep_max_results"),
        help="Maximum number of matches to show",
    )
    grep_parser.add_argument(
        "-c",
        "--context-only",
        action="store_true",
        help="Show only a short lead-in before each match",
    )

    return parser


def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    setup_logging(args.verbose + getattr(args, "sub_verbose", 0))

    commands = {
        "version": cmd_version,
        "diff": cmd_diff,
        "find": cmd_find,
        "grep": cmd_grep,
    }
    try:
        commands[args.command](args)
    except (OSError, UnicodeDecodeError) as e:
        print(f"[tokentrim] Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
