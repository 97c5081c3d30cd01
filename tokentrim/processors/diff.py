"""Diff processor: positional line diff of two files, unified diff condensing.

The file-vs-file diff is positional: line i of the old file is compared with
line i of the new file and nothing is re-aligned. A single inserted line
therefore shifts every later line into a Modified or Removed/Added pair.
"""

from enum import Enum

from .. import config
from .base import Processor


class ChangeKind(Enum):
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


class DiffChange:
    """One changed line. Added carries new_text, Removed old_text, Modified both."""

    __slots__ = ("kind", "line_number", "old_text", "new_text")

    def __init__(self, kind: ChangeKind, line_number: int, old_text=None, new_text=None):
        self.kind = kind
        self.line_number = line_number
        self.old_text = old_text
        self.new_text = new_text

    @classmethod
    def added(cls, line_number: int, text: str) -> "DiffChange":
        return cls(ChangeKind.ADDED, line_number, new_text=text)

    @classmethod
    def removed(cls, line_number: int, text: str) -> "DiffChange":
        return cls(ChangeKind.REMOVED, line_number, old_text=text)

    @classmethod
    def modified(cls, line_number: int, old_text: str, new_text: str) -> "DiffChange":
        return cls(ChangeKind.MODIFIED, line_number, old_text, new_text)

    def _key(self):
        return (self.kind, self.line_number, self.old_text, self.new_text)

    def __eq__(self, other):
        if not isinstance(other, DiffChange):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        if self.kind is ChangeKind.ADDED:
            return f"Added({self.line_number}, {self.new_text!r})"
        if self.kind is ChangeKind.REMOVED:
            return f"Removed({self.line_number}, {self.old_text!r})"
        return f"Modified({self.line_number}, {self.old_text!r}, {self.new_text!r})"


class DiffResult:
    """Ordered change list; the per-kind counts are derived from it."""

    def __init__(self, changes: list[DiffChange] | None = None):
        self.changes = list(changes or [])

    def _count(self, kind: ChangeKind) -> int:
        return sum(1 for c in self.changes if c.kind is kind)

    @property
    def added(self) -> int:
        return self._count(ChangeKind.ADDED)

    @property
    def removed(self) -> int:
        return self._count(ChangeKind.REMOVED)

    @property
    def modified(self) -> int:
        return self._count(ChangeKind.MODIFIED)

    def __len__(self):
        return len(self.changes)

    def __bool__(self):
        return bool(self.changes)


def similarity(a: str, b: str) -> float:
    """Jaccard similarity of the two strings' distinct-character sets."""
    a_chars = set(a)
    b_chars = set(b)
    union = a_chars | b_chars
    if not union:
        return 1.0
    return len(a_chars & b_chars) / len(union)


class DiffProcessor(Processor):
    @property
    def name(self) -> str:
        return "diff"

    def compute_diff(self, lines1: list[str], lines2: list[str]) -> DiffResult:
        threshold = config.get("diff_similarity_threshold")
        changes: list[DiffChange] = []

        for i in range(max(len(lines1), len(lines2))):
            line_number = i + 1
            old = lines1[i] if i < len(lines1) else None
            new = lines2[i] if i < len(lines2) else None

            if old is not None and new is not None:
                if old == new:
                    continue
                if similarity(old, new) > threshold:
                    changes.append(DiffChange.modified(line_number, old, new))
                else:
                    changes.append(DiffChange.removed(line_number, old))
                    changes.append(DiffChange.added(line_number, new))
            elif old is not None:
                changes.append(DiffChange.removed(line_number, old))
            else:
                changes.append(DiffChange.added(line_number, new))

        return DiffResult(changes)

    def format_diff(self, label1: str, label2: str, result: DiffResult) -> str:
        if not result:
            return "✅ Files are identical"

        max_changes = config.get("diff_max_changes")
        width = config.get("diff_line_width")
        mod_width = config.get("diff_modified_width")

        lines = [
            f"📊 {label1} → {label2}",
            f"   +{result.added} added, -{result.removed} removed, ~{result.modified} modified",
            "",
        ]
        for change in result.changes[:max_changes]:
            n = change.line_number
            if change.kind is ChangeKind.ADDED:
                lines.append(f"+{n:4} {self.truncate(change.new_text, width)}")
            elif change.kind is ChangeKind.REMOVED:
                lines.append(f"-{n:4} {self.truncate(change.old_text, width)}")
            else:
                old = self.truncate(change.old_text, mod_width)
                new = self.truncate(change.new_text, mod_width)
                lines.append(f"~{n:4} {old} → {new}")

        if len(result) > max_changes:
            lines.append(f"... +{len(result) - max_changes} more changes")

        return "\n".join(lines)

    def process(self, lines1: list[str], lines2: list[str], label1: str, label2: str) -> str:
        return self.format_diff(label1, label2, self.compute_diff(lines1, lines2))

    def condense_unified_diff(self, diff: str) -> str:
        """Summarize unified diff text per file: counts plus a few sample lines."""
        max_samples = config.get("unified_max_samples")
        show_samples = config.get("unified_show_samples")
        width = config.get("unified_line_width")

        result: list[str] = []
        current_file = ""
        added = 0
        removed = 0
        samples: list[str] = []

        def flush():
            if not current_file or (added == 0 and removed == 0):
                return
            result.append(f"📄 {current_file} (+{added} -{removed})")
            for sample in samples[:show_samples]:
                result.append(f"  {sample}")
            if len(samples) > show_samples:
                result.append(f"  ... +{len(samples) - show_samples} more")

        for line in self.split_lines(diff):
            if line.startswith(("diff --git", "--- ", "+++ ")):
                if line.startswith("+++ "):
                    flush()
                    current_file = line[4:]
                    if current_file.startswith("b/"):
                        current_file = current_file[2:]
                    added = 0
                    removed = 0
                    samples = []
            elif line.startswith("+") and not line.startswith("+++"):
                added += 1
                if len(samples) < max_samples:
                    samples.append(self.truncate(line, width))
            elif line.startswith("-") and not line.startswith("---"):
                removed += 1
                if len(samples) < max_samples:
                    samples.append(self.truncate(line, width))

        flush()
        return "\n".join(result)
