"""Command handlers: gather input, run a processor, print the summary."""

import logging
import sys

from .processors import DiffProcessor, FindProcessor, GrepProcessor, Processor
from .runner import find_commands, grep_commands, run_first_available

_log = logging.getLogger("tokentrim.commands")


def _read_lines(path: str) -> list[str]:
    # Strict UTF-8: a decode error is fatal, like any other read error.
    # newline="" keeps a lone \r as line content.
    with open(path, encoding="utf-8", newline="") as f:
        return Processor.split_lines(f.read())


def run_diff(file1: str, file2: str):
    """Print a condensed positional diff of two files."""
    _log.info("Comparing: %s vs %s", file1, file2)
    lines1 = _read_lines(file1)
    lines2 = _read_lines(file2)
    print(DiffProcessor().process(lines1, lines2, file1, file2))


def run_diff_stdin(stream=None):
    """Print a per-file summary of unified diff text read from stdin."""
    _log.info("Reading unified diff from stdin")
    if stream is None:
        # Raw bytes so a lone \r stays inside its line; malformed input is best-effort.
        text = sys.stdin.buffer.read().decode("utf-8", errors="replace")
    else:
        text = stream.read()
    print(DiffProcessor().condense_unified_diff(text))


def run_find(pattern: str, path: str = ".", max_results: int | None = None):
    """Print a directory-grouped summary of files matching pattern."""
    _log.info("Finding: %s in %s", pattern, path)
    output = run_first_available(find_commands(pattern, path))
    print(FindProcessor().process(output, pattern, max_results))


def run_grep(
    pattern: str,
    path: str = ".",
    max_line_len: int | None = None,
    max_results: int | None = None,
    context_only: bool = False,
):
    """Print a file-grouped summary of lines matching pattern."""
    _log.info("Searching: '%s' in %s", pattern, path)
    output = run_first_available(grep_commands(pattern, path))
    print(
        GrepProcessor().process(
            output,
            pattern,
            path,
            max_line_len=max_line_len,
            max_results=max_results,
            context_only=context_only,
        )
    )
