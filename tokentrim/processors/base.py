"""Base class for the condensing processors."""

from abc import ABC, abstractmethod


class Processor(ABC):
    """Turns raw input (file lines, tool output) into a short summary.

    Processors never run commands or touch the filesystem; they take text
    and return text.
    """

    @property
    @abstractmethod
    def name(self) -> str: ...

    @staticmethod
    def truncate(text: str, max_len: int) -> str:
        """Cut text to max_len characters, marking the cut with '...'."""
        if len(text) <= max_len:
            return text
        return text[: max(max_len - 3, 0)] + "..."

    @staticmethod
    def split_lines(text: str) -> list[str]:
        """Split on '\\n' only, dropping one trailing '\\r' per line.

        Form feeds and other characters str.splitlines() treats as breaks
        are line content in source files and tool output.
        """
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return [line[:-1] if line.endswith("\r") else line for line in lines]
