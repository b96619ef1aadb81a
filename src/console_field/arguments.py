from __future__ import annotations

from console_field.grammar import tokenize
from console_field.types import ActiveArgument


def active_argument(segment: str, cursor: int | None = None) -> ActiveArgument:
    """Work out which argument of `segment` the cursor is completing.

    Index 0 is the command name. When the segment is empty or the cursor
    follows whitespace, the cursor starts a new argument with an empty
    prefix. Otherwise it extends the last argument, and the prefix is that
    argument's raw text (quotes and escapes included) so that it can be
    deleted character for character.
    """
    if cursor is None:
        cursor = len(segment)
    if not 0 <= cursor <= len(segment):
        raise ValueError(f"cursor {cursor} outside segment of length {len(segment)}")
    text = segment[:cursor]
    tokens = tokenize(text)
    args = [t.text for t in tokens]
    if not tokens or text[-1].isspace():
        return ActiveArgument(len(tokens), "", args)
    last = tokens[-1]
    return ActiveArgument(len(tokens) - 1, text[last.start : last.end], args)
