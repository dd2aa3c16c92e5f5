"""Render sinks (in-memory tree, rich terminal)."""

from .rich_console import DEFAULT_THEME, RichConsoleSink
from .sink import MemorySink, Node, OutputSink

__all__ = [
    "DEFAULT_THEME",
    "MemorySink",
    "Node",
    "OutputSink",
    "RichConsoleSink",
]
