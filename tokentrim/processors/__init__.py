"""Condensing processors: one per command (diff, find, grep)."""

from .base import Processor
from .diff import DiffProcessor
from .find import FindProcessor
from .grep import GrepProcessor

__all__ = ["DiffProcessor", "FindProcessor", "GrepProcessor", "Processor"]
