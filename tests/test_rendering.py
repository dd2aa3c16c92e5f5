from __future__ import annotations

import asyncio
import itertools

from console_terminal.adapters import MemorySink, Node
from console_terminal.markup import tokenize
from console_terminal.rendering import IncrementalRenderer


class CountingSink(MemorySink):
    def __init__(self) -> None:
        super().__init__()
        self.text_calls: list[str] = []

    def append_text(self, node: Node, text: str) -> None:
        self.text_calls.append(text)
        super().append_text(node, text)


async def _no_sleep(_delay: float) -> None:
    await asyncio.sleep(0)


def _render(markup: str, *, sink: MemorySink | None = None, instant: bool = False, **kwargs) -> tuple[Node, list[str]]:
    sink = sink or MemorySink()
    renderer = IncrementalRenderer(char_delay_seconds=0, sleep=_no_sleep, **kwargs)
    line = sink.append_child(sink.root, "line", "plain")
    done: list[str] = []

    asyncio.run(renderer.render(tokenize(markup), sink, line, on_done=lambda: done.append("done"), instant=instant))
    return line, done


def test_span_becomes_child_node() -> None:
    line, done = _render("a<span class='x'>b</span>c")

    assert done == ["done"]
    assert line.children[0] == "a"
    span = line.children[1]
    assert isinstance(span, Node)
    assert span.tag == "span"
    assert span.style_class == "x"
    assert span.text() == "b"
    assert line.children[2] == "c"
    assert line.text() == "abc"


def test_closing_tag_returns_to_root_even_when_nested() -> None:
    line, _ = _render("<b>x<i>y</i>z</b>w")

    assert line.text() == "xyzw"
    assert line.children[-1] == "zw"
    outer = line.children[0]
    assert isinstance(outer, Node)
    assert outer.elements()[0].tag == "i"


def test_line_break_appends_break_under_line() -> None:
    line, _ = _render('<span class="title">one</span><br>two')

    assert [child.tag for child in line.elements()] == ["span", "br"]
    assert line.text() == "one\ntwo"


def test_text_after_line_break_inside_span_goes_to_root() -> None:
    line, _ = _render('<span class="x">one<br>two')

    assert line.children[-1] == "two"


def test_empty_markup_calls_on_done_immediately() -> None:
    line, done = _render("")

    assert done == ["done"]
    assert line.children == []


def test_characters_are_revealed_one_at_a_time() -> None:
    sink = CountingSink()
    _render("abc<span class='x'>de</span>", sink=sink)

    assert sink.text_calls == ["a", "b", "c", "d", "e"]


def test_instant_render_appends_whole_runs() -> None:
    sink = CountingSink()
    line, _ = _render("abc<span class='x'>de</span>", sink=sink, instant=True)

    assert sink.text_calls == ["abc", "de"]
    assert line.text() == "abcde"


def test_scroll_requests_are_coalesced() -> None:
    sink = MemorySink()
    _render("abcd", sink=sink, scroll_interval_seconds=10, clock=lambda: 0.0)

    # first character scrolls, the rest fall in the same window, then one final scroll
    assert sink.scroll_count == 2


def test_scroll_every_character_when_window_elapsed() -> None:
    sink = MemorySink()
    ticks = itertools.count(step=10)
    _render("abcd", sink=sink, scroll_interval_seconds=10, clock=lambda: float(next(ticks)))

    assert sink.scroll_count == 5


def test_character_delay_is_applied_between_characters() -> None:
    delays: list[float] = []

    async def _record(delay: float) -> None:
        delays.append(delay)

    sink = MemorySink()
    renderer = IncrementalRenderer(char_delay_seconds=0.5, token_delay_seconds=0.0, sleep=_record)
    line = sink.append_child(sink.root, "line", None)
    asyncio.run(renderer.render(tokenize("ab<br>c"), sink, line))

    assert delays.count(0.5) == 1
    assert line.text() == "ab\nc"
