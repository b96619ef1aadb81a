from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class Candidate:
    """A completion candidate. Only `text` takes part in comparisons."""

    text: str
    description: str = field(default="", compare=False)


@dataclass(frozen=True)
class Token:
    text: str  # unquoted, unescaped value
    start: int  # raw span within the tokenized text
    end: int


@dataclass(frozen=True)
class ActiveArgument:
    index: int
    prefix: str  # raw text of the argument up to the cursor
    args: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class NamespaceGroup:
    namespace: str
    members: list[Candidate]

    @property
    def count(self) -> int:
        return len(self.members)


@dataclass
class CompletionResult:
    text: str
    cursor: int
    lines: list[str] = field(default_factory=list)
    candidates: list[Candidate] = field(default_factory=list)
    arg_num: int | None = None  # None when no candidates were requested


def normalize_candidates(items: Iterable[Candidate | tuple[str, str]]) -> list[Candidate]:
    """Deduplicate candidates by text and sort them ascending.

    Accepts Candidate objects or (text, description) pairs. When several
    providers return the same text, the lowest description wins so the
    result does not depend on provider order.
    """
    pairs = sorted(
        (c.text, c.description) if isinstance(c, Candidate) else (c[0], c[1])
        for c in items
    )
    result: list[Candidate] = []
    for text, description in pairs:
        if result and result[-1].text == text:
            continue
        result.append(Candidate(text, description))
    return result


def ts_str(t: float) -> str:
    lt = time.localtime(t)
    return time.strftime("%H:%M:%S", lt)
