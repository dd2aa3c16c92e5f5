"""Command history with a navigation cursor."""

from __future__ import annotations


class CommandHistory:
    """Append-only list of submitted inputs.

    The cursor is ``None`` when nothing is selected (past the newest entry);
    every ``append`` resets it there.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._cursor: int | None = None

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def cursor(self) -> int | None:
        return self._cursor

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, raw_input: str) -> None:
        self._entries.append(raw_input)
        self._cursor = None

    def reset(self) -> None:
        self._cursor = None

    def previous(self) -> str | None:
        """Step back one entry; stays on the oldest one."""
        if not self._entries:
            return None
        if self._cursor is None:
            self._cursor = len(self._entries) - 1
        else:
            self._cursor = max(0, self._cursor - 1)
        return self._entries[self._cursor]

    def next(self) -> str | None:
        """Step forward; returns ``""`` when stepping past the newest entry."""
        if self._cursor is None:
            return None
        if self._cursor + 1 >= len(self._entries):
            self._cursor = None
            return ""
        self._cursor += 1
        return self._entries[self._cursor]
