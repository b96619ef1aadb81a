from __future__ import annotations

from console_field.grammar import find_separator


def split(text: str) -> list[tuple[int, int]]:
    """Return the (start, end) range of every statement in `text`.

    Separators are excluded from the ranges. Text without separators is a
    single statement, so the result is never empty.
    """
    ranges: list[tuple[int, int]] = []
    start = 0
    while True:
        sep = find_separator(text, start)
        if sep < 0:
            ranges.append((start, len(text)))
            return ranges
        ranges.append((start, sep))
        start = sep + 1


def last_segment(text: str, cursor: int | None = None) -> tuple[int, int]:
    """Return the range of the statement being typed at `cursor`.

    The range runs from the start of the last statement before the cursor
    up to the cursor itself.
    """
    if cursor is None:
        cursor = len(text)
    if not 0 <= cursor <= len(text):
        raise ValueError(f"cursor {cursor} outside text of length {len(text)}")
    start = 0
    while True:
        sep = find_separator(text[:cursor], start)
        if sep < 0:
            return start, cursor
        start = sep + 1
