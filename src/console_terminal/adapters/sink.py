"""Boundary for render sink integrations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


class OutputSink(Protocol):
    """Minimal capabilities a front end provides to host rendered output."""

    @property
    def root(self) -> Any:
        """Top-level container that line nodes are appended under."""

    def append_child(self, parent: Any, tag: str, style_class: str | None) -> Any:
        """Create a child node under ``parent`` and return it."""

    def append_text(self, node: Any, text: str) -> None:
        """Append a text run to ``node``."""

    def scroll_to_end(self) -> None:
        """Bring the newest output into view."""

    def clear(self) -> None:
        """Discard everything rendered so far."""


@dataclass(slots=True, eq=False)
class Node:
    """Element of the in-memory output tree."""

    tag: str
    style_class: str | None = None
    children: list[Node | str] = field(default_factory=list)

    def text(self) -> str:
        """Flatten the node's visible content; line breaks become newlines."""
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, str):
                parts.append(child)
            elif child.tag == "br":
                parts.append("\n")
            else:
                parts.append(child.text())
        return "".join(parts)

    def elements(self) -> list[Node]:
        return [child for child in self.children if isinstance(child, Node)]


class MemorySink:
    """Sink that records output as a node tree; used by tests and embedders."""

    def __init__(self) -> None:
        self._root = Node(tag="output")
        self.scroll_count = 0
        self.clear_count = 0

    @property
    def root(self) -> Node:
        return self._root

    @property
    def lines(self) -> list[Node]:
        return self._root.elements()

    def line_texts(self) -> list[str]:
        return [line.text() for line in self.lines]

    def append_child(self, parent: Node, tag: str, style_class: str | None) -> Node:
        child = Node(tag=tag, style_class=style_class)
        parent.children.append(child)
        return child

    def append_text(self, node: Node, text: str) -> None:
        if node.children and isinstance(node.children[-1], str):
            node.children[-1] += text
        else:
            node.children.append(text)

    def scroll_to_end(self) -> None:
        self.scroll_count += 1

    def clear(self) -> None:
        self._root.children.clear()
        self.clear_count += 1
