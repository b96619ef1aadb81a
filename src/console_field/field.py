from __future__ import annotations

from collections.abc import Callable

from console_field.commands import CommandRegistry
from console_field.config import Config
from console_field.debug_log import DebugLogger
from console_field.engine import CompletionEngine
from console_field.grammar import escape
from console_field.history import HistoryCursor, LineHistory
from console_field.input_buffer import InputBuffer
from console_field.types import CompletionResult


class ConsoleField:
    """A command line input field: editing, history recall and tab completion.

    Each field owns its buffer and history; several fields sharing one
    CommandRegistry do not affect each other's state. Display lines
    produced by completion go to `emit`.
    """

    def __init__(
        self,
        commands: CommandRegistry,
        config: Config | None = None,
        emit: Callable[[str], None] | None = None,
        logger: DebugLogger | None = None,
    ):
        self.config = config if config is not None else Config()
        self.commands = commands
        self.emit = emit if emit is not None else commands.emit
        self.buffer = InputBuffer()
        self.history = HistoryCursor(
            LineHistory(
                max_size=self.config.history.max_size,
                prefix_filter=self.config.history.prefix_filter,
            )
        )
        self.engine = CompletionEngine(
            commands.complete_argument,
            escape_markers=self.config.completion.escape_markers,
        )
        if logger is None:
            logger = DebugLogger(self.config.debug.directory)
            if self.config.debug.enabled:
                logger.start()
        self.logger = logger

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def cursor(self) -> int:
        return self.buffer.cursor

    def insert(self, text: str):
        """Type text at the cursor. Any edit ends history browsing."""
        self.buffer.insert(text)
        self.history.reset()

    def history_prev(self):
        text = self.history.prev(self.buffer.text)
        self.buffer.set_text(text)
        self.logger.log_history("PREV", text)

    def history_next(self):
        text = self.history.next(self.buffer.text)
        self.buffer.set_text(text)
        self.logger.log_history("NEXT", text)

    def auto_complete(self) -> CompletionResult:
        """Complete the argument under the cursor and show ambiguous matches."""
        before, cursor = self.buffer.text, self.buffer.cursor
        result = self.engine.complete(before, cursor)
        self.buffer.set_text(result.text, result.cursor)
        if result.text != before:
            self.history.reset()
        for line in result.lines:
            self.emit(line)
        self.logger.log_completion(before, cursor, result)
        return result

    def run_command(self, default_command: str | None = None) -> str | None:
        """Submit the line to the command buffer.

        Lines starting with an escape marker are commands; other lines are
        passed as one escaped argument to `default_command` (or the
        configured default) when there is one. Returns the buffered text,
        or None for an empty line.
        """
        current = self.buffer.text
        if not current:
            return None
        if default_command is None:
            default_command = self.config.commands.default_command

        if current[0] in self.config.completion.escape_markers:
            dispatched = current[1:]
        elif not default_command:
            dispatched = current
        else:
            dispatched = f"{default_command} {escape(current)}"
        self.commands.buffer_command_text(dispatched)
        self.history.add(current)
        self.buffer.clear()
        self.logger.log_command(current, dispatched)
        return dispatched
