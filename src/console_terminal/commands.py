"""Command parsing and dispatch to session and world handlers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from console_terminal.errors import (
    ConsoleError,
    InternalConsistencyError,
    NotAuthenticatedError,
    UnknownCommandError,
    ValidationError,
)
from console_terminal.history import CommandHistory
from console_terminal.output_queue import OutputEntry, OutputQueue, StyleClass
from console_terminal.session import SessionManager, User
from console_terminal.world import WorldStateMachine

APP_TITLE = "CONSOLE TERMINAL v2.0"


class CommandVerb(str, Enum):
    START = "start"
    HELP = "help"
    ABOUT = "about"
    STATUS = "status"
    INVENTORY = "inventory"
    CLEAR = "clear"
    MOVE = "move"
    LOOK = "look"
    REGISTER = "register"
    LOGIN = "login"
    LOGOUT = "logout"
    SHOWUSERS = "showusers"
    WHOAMI = "whoami"


@dataclass(frozen=True, slots=True)
class ParsedCommand:
    verb: str
    args: tuple[str, ...] = ()


def parse_command(raw_input: str) -> ParsedCommand:
    """Split input into a lowercased verb and whitespace-separated args."""
    parts = raw_input.split()
    if not parts:
        return ParsedCommand(verb="")
    return ParsedCommand(verb=parts[0].lower(), args=tuple(parts[1:]))


def resolve_verb(verb: str) -> CommandVerb:
    try:
        return CommandVerb(verb.lower())
    except ValueError:
        raise UnknownCommandError(
            f"Error: command '{verb}' not found. Type 'help' for a list of commands."
        ) from None


Handler = Callable[[tuple[str, ...]], list[OutputEntry]]


def _command(name: str) -> str:
    return f'<span class="command">{name}</span>'


class CommandDispatcher:
    """Maps verbs to handlers and funnels every outcome into the output queue.

    User-facing errors raised by handlers are turned into error lines here and
    never propagate. ``InternalConsistencyError`` is not caught.
    """

    def __init__(
        self,
        *,
        session: SessionManager,
        world: WorldStateMachine,
        queue: OutputQueue,
        history: CommandHistory,
        host_name: str = "terminal",
        logger: logging.Logger | None = None,
    ) -> None:
        self._session = session
        self._world = world
        self._queue = queue
        self._history = history
        self._host_name = host_name
        self._logger = logger or logging.getLogger("console_terminal.commands")

        self._handlers: dict[CommandVerb, Handler] = {
            CommandVerb.START: self._start,
            CommandVerb.HELP: self._help,
            CommandVerb.ABOUT: self._about,
            CommandVerb.STATUS: self._status,
            CommandVerb.INVENTORY: self._inventory,
            CommandVerb.CLEAR: self._clear,
            CommandVerb.MOVE: self._move,
            CommandVerb.LOOK: self._look,
            CommandVerb.REGISTER: self._register,
            CommandVerb.LOGIN: self._login,
            CommandVerb.LOGOUT: self._logout,
            CommandVerb.SHOWUSERS: self._show_users,
            CommandVerb.WHOAMI: self._whoami,
        }
        missing = set(CommandVerb) - set(self._handlers)
        if missing:
            raise InternalConsistencyError(f"No handler for verbs: {sorted(verb.value for verb in missing)}")

    def prompt(self) -> str:
        user = self._session.whoami()
        return f"{user.name if user else 'user'}@{self._host_name}:~$ "

    def dispatch(self, raw_input: str) -> None:
        """Record, echo and execute one line of input."""
        text = raw_input.strip()
        if not text:
            return

        self._history.append(text)
        self._queue.enqueue(f'<span class="prompt">{self.prompt()}</span>{text}')

        command = parse_command(text)
        try:
            verb = resolve_verb(command.verb)
            messages = self._handlers[verb](command.args)
        except ConsoleError as exc:
            self._logger.info(
                "command_rejected",
                extra={"verb": command.verb, "error_type": type(exc).__name__},
            )
            messages = [OutputEntry(exc.message, StyleClass.ERROR)]
            if exc.hint:
                messages.append(OutputEntry(exc.hint, StyleClass.SYSTEM))
        else:
            self._logger.info("command_dispatched", extra={"verb": verb.value, "arg_count": len(command.args)})

        for message in messages:
            self._queue.enqueue(message.markup, message.style, animate=message.animate)

    def _start(self, args: tuple[str, ...]) -> list[OutputEntry]:
        self._world.start()
        user = self._require_user()
        return [
            OutputEntry("=== STARTING GAME MODULE ===", StyleClass.SYSTEM),
            OutputEntry(f'Welcome, <span class="current-user">{user.name}</span>!', StyleClass.GAME),
            OutputEntry("You find yourself in a dark room. Silence all around...", StyleClass.GAME),
            OutputEntry("What will you do?", StyleClass.GAME),
            *self._status(args),
        ]

    def _help(self, args: tuple[str, ...]) -> list[OutputEntry]:
        user = self._session.whoami()
        if user:
            account_lines = [
                f"{_command('whoami')}    - Show information about the current user",
                f"{_command('logout')}    - Log out",
                f"{_command('showusers')} - Show all users",
            ]
        else:
            account_lines = [
                f"{_command('register [name]')} - Register a new user",
                f"{_command('login [name]')}    - Log in as a user",
            ]

        lines = [
            '<span class="title">=== AVAILABLE COMMANDS ===</span>',
            _command("SYSTEM COMMANDS:"),
            *account_lines,
            f"{_command('start')}      - Start the game (login required)",
            f"{_command('status')}     - Show status",
            f"{_command('inventory')}  - Show inventory",
            f"{_command('move [direction]')} - Move north, south, east or west",
            f"{_command('look')}       - Look around",
            f"{_command('clear')}      - Clear the screen",
            f"{_command('about')}      - About this system",
            f"{_command('help')}       - This help",
            f"Current user: {user.name if user else 'not logged in'}",
        ]
        return [OutputEntry("<br>".join(lines), StyleClass.SYSTEM)]

    def _about(self, args: tuple[str, ...]) -> list[OutputEntry]:
        lines = [
            f'<span class="title">=== {APP_TITLE} ===</span>',
            "User system:",
            "- Registration and login without passwords",
            "- Tracking of online users",
            "- Information about registered users",
            "- Prompt that follows the current user",
            "User commands: register, login, logout, whoami, showusers",
            "Idea: a text adventure game with a user system.",
        ]
        return [OutputEntry("<br>".join(lines), StyleClass.SYSTEM)]

    def _status(self, args: tuple[str, ...]) -> list[OutputEntry]:
        state = self._world.status()
        user = self._session.whoami()
        user_info = (
            f'User: <span class="current-user">{user.name}</span>' if user else "User: not logged in"
        )
        lines = [
            '<span class="title">=== SYSTEM STATUS ===</span>',
            user_info,
            f'Location: <span class="location">{state.location}</span>',
            f"Health: {state.health}%",
            f"Energy: {state.energy}%",
            f"Level: {state.level}",
            f"Items: {len(state.inventory)}",
        ]
        return [OutputEntry("<br>".join(lines), StyleClass.SYSTEM)]

    def _inventory(self, args: tuple[str, ...]) -> list[OutputEntry]:
        items = self._world.inventory()
        if not items:
            return [OutputEntry("Inventory is empty.", StyleClass.SYSTEM)]
        return [
            OutputEntry('<span class="title">=== INVENTORY ===</span>', StyleClass.SYSTEM),
            *(OutputEntry(f"• {item}", StyleClass.GAME) for item in items),
        ]

    def _clear(self, args: tuple[str, ...]) -> list[OutputEntry]:
        self._queue.clear()
        return [OutputEntry("Screen cleared.", StyleClass.SYSTEM)]

    def _move(self, args: tuple[str, ...]) -> list[OutputEntry]:
        raw_direction = args[0] if args else ""
        description = self._world.move(raw_direction)
        location = self._world.location
        return [
            OutputEntry(
                f'You moved {raw_direction.lower()}. Now you are in: <span class="location">{location}</span>',
                StyleClass.SUCCESS,
            ),
            self._look_line(location, description),
        ]

    def _look(self, args: tuple[str, ...]) -> list[OutputEntry]:
        description = self._world.look()
        return [self._look_line(self._world.location, description)]

    @staticmethod
    def _look_line(location: str, description: str) -> OutputEntry:
        return OutputEntry(f'<span class="location">{location}</span>: {description}', StyleClass.GAME)

    def _register(self, args: tuple[str, ...]) -> list[OutputEntry]:
        if not args:
            raise ValidationError("Usage: register [user_name]")
        user = self._session.register(args[0])
        return [
            OutputEntry(f"User '{user.name}' registered successfully.", StyleClass.SUCCESS),
            OutputEntry(f"You can now log in with: {_command(f'login {user.name}')}", StyleClass.SYSTEM),
        ]

    def _login(self, args: tuple[str, ...]) -> list[OutputEntry]:
        if not args:
            raise ValidationError("Usage: login [user_name]")
        user = self._session.login(args[0])
        messages = [OutputEntry(f'Logged in as: <span class="current-user">{user.name}</span>', StyleClass.SUCCESS)]
        if user.is_admin:
            messages.append(OutputEntry('<span class="admin-badge">⚡ SYSTEM ADMINISTRATOR</span>', StyleClass.SYSTEM))
        return messages

    def _logout(self, args: tuple[str, ...]) -> list[OutputEntry]:
        user = self._session.logout()
        return [OutputEntry(f'Logged out: <span class="current-user">{user.name}</span>', StyleClass.SUCCESS)]

    def _show_users(self, args: tuple[str, ...]) -> list[OutputEntry]:
        users = self._session.list_users()
        if not users:
            return [OutputEntry("There are no registered users.", StyleClass.SYSTEM)]

        active = self._session.whoami()
        lines = ['<span class="title">=== REGISTERED USERS ===</span>']
        for user in users:
            lines.append(self._user_summary(user, is_current=active is not None and active.name == user.name))
            lines.append(f"  Registered: {user.registered_at.date().isoformat()}")

        totals = f"Total users: {len(users)} | Online: {len(self._session.online_users())}"
        return [
            OutputEntry("<br>".join(lines), StyleClass.SYSTEM),
            OutputEntry(totals, StyleClass.SYSTEM),
        ]

    def _whoami(self, args: tuple[str, ...]) -> list[OutputEntry]:
        user = self._session.whoami()
        if user is None:
            raise NotAuthenticatedError(f"You are not logged in. Use {_command('login')} or {_command('register')}.")
        role = '<span class="admin-badge">Administrator</span>' if user.is_admin else "User"
        lines = [
            '<span class="title">=== USER INFORMATION ===</span>',
            f'Name: <span class="current-user">{user.name}</span>',
            'Status: <span class="user-online">● online</span>',
            f"Role: {role}",
            f"Registered: {user.registered_at.date().isoformat()}",
        ]
        return [OutputEntry("<br>".join(lines), StyleClass.SYSTEM)]

    def _require_user(self) -> User:
        user = self._session.whoami()
        if user is None:
            raise InternalConsistencyError("World started without an active user")
        return user

    @staticmethod
    def _user_summary(user: User, *, is_current: bool) -> str:
        badge = '<span class="admin-badge"> [ADMIN]</span>' if user.is_admin else ""
        if user.is_online:
            status = '<span class="user-online"> ● online</span>'
        else:
            status = '<span class="user-offline"> ● offline</span>'
        current = '<span class="current-user"> ← YOU</span>' if is_current else ""
        return f"• <strong>{user.name}</strong>{badge}{status}{current}"

