from __future__ import annotations

from console_terminal.history import CommandHistory


def test_navigation_from_past_the_end() -> None:
    history = CommandHistory()
    for entry in ("help", "look", "status"):
        history.append(entry)

    assert history.cursor is None
    assert history.previous() == "status"
    assert history.previous() == "look"
    assert history.previous() == "help"
    assert history.previous() == "help"
    assert history.next() == "look"
    assert history.next() == "status"
    assert history.next() == ""
    assert history.cursor is None
    assert history.next() is None


def test_append_resets_cursor() -> None:
    history = CommandHistory()
    history.append("help")
    history.previous()

    history.append("look")

    assert history.cursor is None
    assert history.entries == ["help", "look"]
    assert len(history) == 2


def test_empty_history() -> None:
    history = CommandHistory()

    assert history.previous() is None
    assert history.next() is None
