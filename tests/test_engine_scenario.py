from __future__ import annotations

import asyncio

import pytest

from console_terminal.adapters import MemorySink
from console_terminal.config import Settings
from console_terminal.engine import ConsoleEngine


@pytest.fixture()
def config() -> Settings:
    return Settings(char_delay_seconds=0, settle_delay_seconds=0, scroll_interval_seconds=0)


def test_register_login_start_move_scenario(config: Settings) -> None:
    sink = MemorySink()
    engine = ConsoleEngine(sink, config=config)

    async def _run() -> None:
        for line in ("register neo", "login neo", "start", "move north"):
            engine.submit(line)
        await engine.drain()

    asyncio.run(_run())

    texts = sink.line_texts()
    assert engine.world.location == "corridor"
    assert engine.session.whoami().name == "neo"
    assert "You moved north. Now you are in: corridor" in texts
    assert texts[-1] == "corridor: " + engine.world.graph.describe("corridor")
    assert texts[0] == "user@terminal:~$ register neo"
    assert "neo@terminal:~$ move north" in texts


def test_output_lines_keep_submission_order(config: Settings) -> None:
    sink = MemorySink()
    engine = ConsoleEngine(sink, config=config)

    async def _run() -> None:
        engine.greet()
        engine.submit("about")
        await asyncio.sleep(0)
        engine.submit("whoami")
        await engine.drain()

    asyncio.run(_run())

    texts = sink.line_texts()
    assert texts[0].startswith("Type help")
    assert texts[2] == "user@terminal:~$ about"
    assert texts[3].startswith("=== CONSOLE TERMINAL v2.0 ===")
    assert texts[4] == "user@terminal:~$ whoami"
    assert [line.style_class for line in sink.lines][-1] == "error"


def test_grant_item_updates_inventory_and_output(config: Settings) -> None:
    sink = MemorySink()
    engine = ConsoleEngine(sink, config=config)

    engine.grant_item("rusty key")
    asyncio.run(engine.drain())

    assert sink.line_texts() == ["Received item: rusty key"]
    assert sink.lines[0].style_class == "success"
    engine.submit("login admin")
    engine.submit("start")
    assert engine.world.inventory() == ["rusty key"]


def test_clear_wipes_rendered_lines(config: Settings) -> None:
    sink = MemorySink()
    engine = ConsoleEngine(sink, config=config)

    async def _run() -> None:
        engine.submit("help")
        await engine.drain()
        engine.submit("clear")
        await engine.drain()

    asyncio.run(_run())

    assert sink.line_texts() == ["Screen cleared."]


def test_engine_loads_world_file(tmp_path, config: Settings) -> None:
    world_file = tmp_path / "world.json"
    world_file.write_text(
        '{"exits": {"gate": {"south": "yard"}, "yard": {}, "beginning": {}},'
        ' "descriptions": {"gate": "An iron gate.", "yard": "A muddy yard."}}',
        encoding="utf-8",
    )
    engine = ConsoleEngine(
        MemorySink(),
        config=config.model_copy(update={"world_file": str(world_file), "entry_room": "gate"}),
    )

    engine.submit("login admin")
    engine.submit("start")
    engine.submit("move south")

    assert engine.world.location == "yard"
