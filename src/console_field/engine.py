"""Tab completion over a command line.

The engine works on a copy of the caller's text and returns the edited
text, the new cursor and the lines to show, so it never touches a widget
or an output channel itself.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from console_field.arguments import active_argument
from console_field.grouping import candidate_lines
from console_field.input_buffer import InputBuffer
from console_field.prefix import longest_iprefix_size
from console_field.segments import last_segment
from console_field.types import Candidate, CompletionResult, normalize_candidates

# (args, index) -> candidates for args[index]
CandidateProvider = Callable[[list[str], int], Iterable[Candidate | tuple[str, str]]]

DEFAULT_ESCAPE_MARKERS = "/\\"


class CompletionEngine:
    """Completes the argument under the cursor of a command line.

    Lines are treated as commands: text not starting with one of
    `escape_markers` gets the first marker prepended before completing.
    """

    def __init__(self, provider: CandidateProvider, escape_markers: str = DEFAULT_ESCAPE_MARKERS):
        if not escape_markers:
            raise ValueError("at least one escape marker is required")
        self.provider = provider
        self.escape_markers = escape_markers

    def complete(self, text: str, cursor: int) -> CompletionResult:
        if not 0 <= cursor <= len(text):
            raise ValueError(f"cursor {cursor} outside text of length {len(text)}")
        if not text:
            return CompletionResult(text, cursor)

        buf = InputBuffer(text, cursor)
        if text[0] not in self.escape_markers:
            buf.insert_at(0, self.escape_markers[0])
        elif buf.cursor == 0:
            # Completing in front of the marker would push it out of position 0
            buf.set_cursor(1)

        # Only the last statement before the cursor is completed
        command_text = buf.text[1 : buf.cursor]
        start, _ = last_segment(command_text)
        active = active_argument(command_text[start:])

        candidates = normalize_candidates(self.provider(active.args, active.index))
        if not candidates:
            return CompletionResult(buf.text, buf.cursor, arg_num=active.index)

        first = candidates[0].text
        prefix_size = min(longest_iprefix_size(c.text, first) for c in candidates)
        completed = first[:prefix_size]

        # A unique match gets a trailing space so the next tab moves on,
        # except for paths which the user may want to keep descending into.
        if (
            len(candidates) == 1
            and not buf.char_at(buf.cursor).isspace()
            and not completed.endswith("/")
        ):
            completed += " "

        buf.delete_prev(len(active.prefix))
        buf.insert(completed)

        lines: list[str] = []
        if len(candidates) >= 2:
            lines.append(f"-> {buf.text}")
            # Namespaces only make sense for command and variable names
            lines.extend(candidate_lines(candidates, prefix_size, group=active.index <= 1))
        return CompletionResult(buf.text, buf.cursor, lines, candidates, active.index)
