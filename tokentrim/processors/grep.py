"""Grep processor: rg/grep matches grouped by file, with trimmed match lines."""

import re

from .. import config
from .base import Processor

_BINARY_NOTICE_RE = re.compile(r"^(Binary file .* matches|grep: .*: binary file matches)$")


def parse_line(line: str, path: str) -> tuple[str, int, str] | None:
    """Parse 'file:line:content' or single-file 'line:content' search output.

    Returns None for lines of any other shape. A line number that does not
    parse becomes 0.
    """
    if _BINARY_NOTICE_RE.match(line):
        return None
    parts = line.split(":", 2)
    if len(parts) == 3:
        file_path, num, content = parts
    elif len(parts) == 2:
        file_path = path
        num, content = parts
    else:
        return None
    try:
        line_number = int(num)
    except ValueError:
        line_number = 0
    return file_path, line_number, content


def clean_line(line: str, max_len: int, context_only: bool, pattern: str) -> str:
    """Trim a matched line to at most max_len characters, keeping the match visible.

    With context_only, a short lead-in before the match through end of line is
    preferred when it fits. Long lines are windowed around the first
    case-insensitive occurrence of pattern, with '...' marking each cut side.
    """
    trimmed = line.strip()
    escaped = re.escape(pattern)

    if context_only:
        lead = config.get("grep_context_chars")
        m = re.search(rf".{{0,{lead}}}{escaped}.*", trimmed, re.IGNORECASE)
        if m and len(m.group(0)) <= max_len:
            return m.group(0)

    if len(trimmed) <= max_len:
        return trimmed

    m = re.search(escaped, trimmed, re.IGNORECASE)
    if m:
        length = len(trimmed)
        start = max(m.start() - max_len // 3, 0)
        end = min(start + max_len, length)
        if end == length:
            start = max(end - max_len, 0)

        # The '...' markers take their room from the window.
        if start > 0:
            start += 3
        if end < length:
            end -= 3
        if start < end:
            prefix = "..." if start > 0 else ""
            suffix = "..." if end < length else ""
            return f"{prefix}{trimmed[start:end]}{suffix}"

    return trimmed[: max(max_len - 3, 0)] + "..."


def compact_path(path: str) -> str:
    """Shorten deep, long paths to first/.../parent/name."""
    if len(path) <= config.get("path_compact_threshold"):
        return path
    parts = path.split("/")
    if len(parts) <= 3:
        return path
    return f"{parts[0]}/.../{parts[-2]}/{parts[-1]}"


class GrepProcessor(Processor):
    @property
    def name(self) -> str:
        return "grep"

    def group_matches(
        self, output: str, pattern: str, path: str, max_line_len: int, context_only: bool
    ) -> dict[str, list[tuple[int, str]]]:
        by_file: dict[str, list[tuple[int, str]]] = {}
        for line in self.split_lines(output):
            parsed = parse_line(line, path)
            if parsed is None:
                continue
            file_path, line_number, content = parsed
            cleaned = clean_line(content, max_line_len, context_only, pattern)
            by_file.setdefault(file_path, []).append((line_number, cleaned))
        return by_file

    def process(
        self,
        output: str,
        pattern: str,
        path: str = ".",
        max_line_len: int | None = None,
        max_results: int | None = None,
        context_only: bool = False,
    ) -> str:
        if max_line_len is None:
            max_line_len = config.get("grep_max_line_len")
        if max_results is None:
            max_results = config.get("grep_max_results")
        max_per_file = config.get("grep_max_per_file")

        if not output.strip():
            return f"No matches for '{pattern}'"

        by_file = self.group_matches(output, pattern, path, max_line_len, context_only)
        total_matches = sum(len(v) for v in by_file.values())

        result = [f"🔍 {total_matches} matches in {len(by_file)} files:", ""]

        shown = 0
        for file_path in sorted(by_file):
            if shown >= max_results:
                break

            matches = by_file[file_path]
            result.append(f"📄 {compact_path(file_path)} ({len(matches)}):")
            for line_number, content in matches[:max_per_file]:
                result.append(f"  {line_number:>4}: {content}")
                shown += 1
                if shown >= max_results:
                    break

            if len(matches) > max_per_file:
                result.append(f"  ... +{len(matches) - max_per_file} more in this file")
            result.append("")

        if total_matches > shown:
            result.append(f"... +{total_matches - shown} more matches (use -m to show more)")

        return "\n".join(result)
