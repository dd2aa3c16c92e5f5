"""Terminal sink that streams rendered output to a ``rich`` console."""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.errors import MissingStyle
from rich.style import Style
from rich.theme import Theme

DEFAULT_THEME = Theme(
    {
        "system": "cyan",
        "error": "bold red",
        "success": "green",
        "game": "white",
        "plain": "default",
        "prompt": "bright_black",
        "command": "bold yellow",
        "title": "bold",
        "location": "magenta",
        "current-user": "bold green",
        "admin-badge": "bold red",
        "user-online": "green",
        "user-offline": "dim",
    }
)


@dataclass(slots=True, eq=False)
class TerminalNode:
    tag: str
    style: Style | None = None


class RichConsoleSink:
    """Writes each appended text run straight to the terminal.

    Lines are separated by newlines; a span uses its own class as style and
    falls back to the style of the line it sits in. Classes the console theme
    does not know are rendered unstyled.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(theme=DEFAULT_THEME, highlight=False)
        self._root = TerminalNode(tag="output")
        self._line_open = False

    @property
    def console(self) -> Console:
        return self._console

    @property
    def root(self) -> TerminalNode:
        return self._root

    def append_child(self, parent: TerminalNode, tag: str, style_class: str | None) -> TerminalNode:
        if parent is self._root:
            self._end_line()
            self._line_open = True
            return TerminalNode(tag=tag, style=self._resolve_style(style_class))

        if tag == "br":
            self._console.file.write("\n")
            return TerminalNode(tag=tag, style=parent.style)
        return TerminalNode(tag=tag, style=self._resolve_style(style_class) or parent.style)

    def append_text(self, node: TerminalNode, text: str) -> None:
        self._console.print(text, style=node.style, end="", markup=False, highlight=False, soft_wrap=True)

    def scroll_to_end(self) -> None:
        self._console.file.flush()

    def clear(self) -> None:
        self._console.clear()
        self._line_open = False

    def finish(self) -> None:
        """Terminate the last open line, e.g. before showing an input prompt."""
        self._end_line()
        self.scroll_to_end()

    def _end_line(self) -> None:
        if self._line_open:
            self._console.file.write("\n")
            self._line_open = False

    def _resolve_style(self, style_class: str | None) -> Style | None:
        if not style_class:
            return None
        for candidate in style_class.split():
            try:
                return self._console.get_style(candidate)
            except MissingStyle:
                continue
        return None
