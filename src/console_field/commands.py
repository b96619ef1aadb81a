"""Command table: executes buffered command text and completes arguments."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from console_field.grammar import tokenize
from console_field.segments import split
from console_field.types import Candidate

CommandHandler = Callable[[list[str]], None]
# (arg_num, args, prefix) -> candidates
ArgumentCompleter = Callable[[int, list[str], str], Iterable[Candidate]]


@dataclass
class Command:
    name: str
    handler: CommandHandler
    description: str = ""
    completer: ArgumentCompleter | None = None


def _matches(prefix: str, name: str) -> bool:
    return name.lower().startswith(prefix.lower())


def complete_from(values: Iterable[str | tuple[str, str]]) -> ArgumentCompleter:
    """Build a completer offering fixed names, optionally with descriptions."""
    items = [v if isinstance(v, tuple) else (v, "") for v in values]

    def completer(arg_num: int, args: list[str], prefix: str) -> list[Candidate]:
        return [Candidate(name, desc) for name, desc in items if _matches(prefix, name)]

    return completer


def complete_paths(root: str | Path = ".") -> ArgumentCompleter:
    """Build a completer for file paths relative to `root`.

    Directories are offered with a trailing "/" so that completing one
    leaves the cursor ready for the next path component.
    """
    base = Path(root)

    def completer(arg_num: int, args: list[str], prefix: str) -> list[Candidate]:
        head, sep, name = prefix.rpartition("/")
        if sep:
            # An empty head means the prefix is directly under "/"
            directory = base / (head or "/")
            dir_prefix = f"{head}/"
        else:
            directory = base
            dir_prefix = ""
        if not directory.is_dir():
            return []
        result = []
        for entry in directory.iterdir():
            if not _matches(name, entry.name):
                continue
            if entry.is_dir():
                result.append(Candidate(f"{dir_prefix}{entry.name}/", "dir"))
            else:
                result.append(Candidate(f"{dir_prefix}{entry.name}"))
        return result

    return completer


class CommandRegistry:
    """Registered commands plus a queue of command text waiting to run.

    Command names are case-insensitive. Messages for the user (unknown
    commands) go through `emit`.
    """

    def __init__(self, emit: Callable[[str], None] | None = None):
        self._commands: dict[str, Command] = {}
        self._queue: deque[str] = deque()
        self.emit = emit if emit is not None else print

    def register(
        self,
        name: str,
        handler: CommandHandler,
        description: str = "",
        completer: ArgumentCompleter | None = None,
    ) -> Command:
        if not name or any(ch.isspace() for ch in name):
            raise ValueError(f"invalid command name: {name!r}")
        key = name.lower()
        if key in self._commands:
            raise ValueError(f"command already registered: {name}")
        cmd = Command(name, handler, description, completer)
        self._commands[key] = cmd
        return cmd

    def unregister(self, name: str):
        self._commands.pop(name.lower(), None)

    def get(self, name: str) -> Command | None:
        return self._commands.get(name.lower())

    def names(self) -> list[str]:
        return sorted(cmd.name for cmd in self._commands.values())

    def complete_argument(self, args: list[str], index: int) -> list[Candidate]:
        """Candidates for args[index]; index 0 is the command name."""
        prefix = args[index] if index < len(args) else ""
        if index == 0:
            return [
                Candidate(cmd.name, cmd.description)
                for cmd in self._commands.values()
                if _matches(prefix, cmd.name)
            ]
        cmd = self.get(args[0]) if args else None
        if cmd is None or cmd.completer is None:
            return []
        return list(cmd.completer(index, args, prefix))

    # --- Command buffer ---

    @property
    def pending(self) -> list[str]:
        return list(self._queue)

    def buffer_command_text(self, text: str, append: bool = True):
        """Queue command text. With append=False it runs before anything already queued."""
        if append:
            self._queue.append(text)
        else:
            self._queue.appendleft(text)

    def execute_buffered(self) -> int:
        """Run all queued command text. Returns the number of commands run."""
        count = 0
        while self._queue:
            text = self._queue.popleft()
            for start, end in split(text):
                args = [t.text for t in tokenize(text[start:end])]
                if not args:
                    continue
                cmd = self.get(args[0])
                if cmd is None:
                    self.emit(f"Unknown command '{args[0]}'")
                    continue
                cmd.handler(args)
                count += 1
        return count
