"""CLI startup entrypoint for the console terminal."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich import print

from console_terminal.adapters import RichConsoleSink
from console_terminal.cli import TerminalRepl
from console_terminal.config import Settings, settings
from console_terminal.engine import ConsoleEngine
from console_terminal.telemetry import configure_logging

app = typer.Typer(help="Console terminal: a text adventure with a user system")


def _build_engine(config: Settings) -> tuple[ConsoleEngine, RichConsoleSink]:
    configure_logging(config.log_level)
    sink = RichConsoleSink()
    try:
        engine = ConsoleEngine(sink, config=config)
    except (OSError, ValueError) as exc:
        print({"error": f"Unable to load the location graph: {exc}"})
        raise typer.Exit(code=1)
    return engine, sink


@app.command()
def info() -> None:
    """Show runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "log_level": settings.log_level,
            "animate": settings.animate,
            "char_delay_seconds": settings.char_delay_seconds,
            "settle_delay_seconds": settings.settle_delay_seconds,
            "entry_room": settings.entry_room,
            "world_file": settings.world_file,
        }
    )


@app.command()
def play(
    instant: bool = typer.Option(False, help="Print responses without the typing animation"),
) -> None:
    """Start an interactive session; type 'exit' or press Ctrl+D to leave."""
    engine, sink = _build_engine(settings.model_copy(update={"animate": False}) if instant else settings)
    repl = TerminalRepl(engine, sink)
    try:
        asyncio.run(repl.run())
    except KeyboardInterrupt:
        sink.finish()


@app.command()
def run(
    commands: list[str] = typer.Argument(None, help="Commands to run in order, e.g. 'register neo'"),
    script: Path = typer.Option(None, help="File with one command per line"),
    instant: bool = typer.Option(False, help="Print responses without the typing animation"),
) -> None:
    """Run commands non-interactively and print the rendered output."""
    lines = list(commands or [])
    if script is not None:
        if not script.exists():
            raise typer.BadParameter(f"Script not found: {script}")
        lines.extend(script.read_text(encoding="utf-8").splitlines())
    if not lines:
        raise typer.BadParameter("Provide commands as arguments or via --script")

    engine, sink = _build_engine(settings.model_copy(update={"animate": False}) if instant else settings)
    asyncio.run(TerminalRepl(engine, sink).run_script(lines))


if __name__ == "__main__":
    app()
