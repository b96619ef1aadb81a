"""Command line grammar: statement separators, quoting and escaping.

A command line holds one or more statements separated by ``;`` or a
newline. Inside a statement, arguments are split on whitespace. A double
quote toggles quoting (whitespace and separators inside quotes are
literal) and a backslash makes the following character literal.
"""

from __future__ import annotations

from console_field.types import Token

SEPARATORS = ";\n"
QUOTE = '"'
ESCAPE = "\\"

_SPECIAL = set(SEPARATORS) | {QUOTE, ESCAPE}


def find_separator(text: str, start: int = 0) -> int:
    """Return the index of the next unquoted separator at or after `start`, or -1."""
    in_quote = False
    i = start
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == ESCAPE:
            i += 2
            continue
        if ch == QUOTE:
            in_quote = not in_quote
        elif ch in SEPARATORS and not in_quote:
            return i
        i += 1
    return -1


def tokenize(segment: str) -> list[Token]:
    """Split one statement into argument tokens.

    Each token carries its parsed value and the raw [start, end) span it
    was read from. An unterminated quote runs to the end of the segment.
    """
    tokens: list[Token] = []
    i = 0
    n = len(segment)
    while i < n:
        if segment[i].isspace():
            i += 1
            continue
        start = i
        chars: list[str] = []
        in_quote = False
        while i < n and (in_quote or not segment[i].isspace()):
            ch = segment[i]
            if ch == ESCAPE and i + 1 < n:
                chars.append(segment[i + 1])
                i += 2
                continue
            if ch == QUOTE:
                in_quote = not in_quote
            else:
                chars.append(ch)
            i += 1
        tokens.append(Token("".join(chars), start, i))
    return tokens


def escape(text: str) -> str:
    """Quote `text` so that tokenize() reads it back as a single argument."""
    if text and not any(ch.isspace() or ch in _SPECIAL for ch in text):
        return text
    quoted = text.replace(ESCAPE, ESCAPE * 2).replace(QUOTE, ESCAPE + QUOTE)
    return f"{QUOTE}{quoted}{QUOTE}"
