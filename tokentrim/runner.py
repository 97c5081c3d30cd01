"""Run external search tools, falling back to the next candidate when one is missing."""

import logging
import subprocess

_log = logging.getLogger("tokentrim.runner")


def run_first_available(commands: list[list[str]]) -> str:
    """Run the first command that starts and return its stdout.

    Exit status is ignored: grep and rg exit 1 when nothing matches. Only a
    failure to start the process (missing binary, permission denied) moves on
    to the next candidate. If none can be started, the last error propagates.
    Output is decoded as UTF-8 with invalid bytes replaced.
    """
    if not commands:
        raise ValueError("no commands to run")

    last_error: OSError | None = None
    for argv in commands:
        _log.debug("Running: %s", " ".join(argv))
        try:
            result = subprocess.run(  # noqa: S603
                argv,
                capture_output=True,
                check=False,
            )
        except OSError as e:
            _log.debug("Could not start %s: %s", argv[0], e)
            last_error = e
            continue
        if result.returncode not in (0, 1):
            _log.debug(
                "%s exited with %d: %s",
                argv[0],
                result.returncode,
                result.stderr.decode("utf-8", errors="replace").strip(),
            )
        return result.stdout.decode("utf-8", errors="replace")

    raise last_error


def find_commands(pattern: str, path: str) -> list[list[str]]:
    """fd (or fdfind, its Debian name) with glob matching, then find."""
    fd_args = ["--glob", "--type", "f", pattern, path]
    return [
        ["fd", *fd_args],
        ["fdfind", *fd_args],
        ["find", path, "-name", pattern, "-type", "f"],
    ]


def grep_commands(pattern: str, path: str) -> list[list[str]]:
    """ripgrep, then recursive grep."""
    return [
        ["rg", "-n", "--no-heading", pattern, path],
        ["grep", "-rn", pattern, path],
    ]
