"""Text console simulation: command engine with an incremental markup renderer."""

from .engine import ConsoleEngine

__all__ = ["ConsoleEngine"]
