"""Compact display of completion candidates.

Command and variable names use dots as namespace separators (``cg.fov``,
``cg.thirdperson``, ``net.port``). When many candidates are listed, runs of
candidates sharing a namespace beyond what the user has already typed are
collapsed into a single ``cg.{x2}`` summary line.
"""

from __future__ import annotations

from console_field.prefix import longest_prefix_size
from console_field.types import Candidate, NamespaceGroup

INDENT = "   "


def _check_sorted(candidates: list[Candidate]):
    for a, b in zip(candidates, candidates[1:]):
        if a.text >= b.text:
            raise ValueError(
                f"candidates must be sorted and unique: {a.text!r} before {b.text!r}"
            )


def group_candidates(
    candidates: list[Candidate], prefix_size: int
) -> list[Candidate | NamespaceGroup]:
    """Group consecutive candidates that share a namespace.

    `candidates` must be sorted by text without duplicates; sorting is what
    makes members of a namespace adjacent. `prefix_size` is the length of
    the prefix common to all candidates: namespaces that end inside it are
    not worth grouping on.

    The pass is greedy: for each head candidate it extends the group while
    the next candidate shares a namespace boundary (a dot) with the head at
    or beyond `prefix_size`, and the group is named after the last such
    boundary.
    """
    _check_sorted(candidates)
    entries: list[Candidate | NamespaceGroup] = []
    i = 0
    n = len(candidates)
    while i < n:
        head = candidates[i].text
        last = i
        ns_len = 0
        for j in range(i + 1, n):
            common = longest_prefix_size(head, candidates[j].text)
            common_ns = head.rfind(".", 0, common + 1)
            # The shared text must run past a dot, and that dot must not
            # sit inside the part every candidate already has.
            if common_ns == common or common_ns < prefix_size:
                break
            last = j
            ns_len = common_ns
        if last == i:
            entries.append(candidates[i])
        else:
            entries.append(NamespaceGroup(head[:ns_len], candidates[i : last + 1]))
        i = last + 1
    return entries


def format_candidate(candidate: Candidate, width: int) -> str:
    filler = " " * (width - len(candidate.text))
    return f"{INDENT}{candidate.text}{filler} {candidate.description}".rstrip()


def format_group(group: NamespaceGroup) -> str:
    return f"{INDENT}{group.namespace}.{{x{group.count}}}"


def candidate_lines(
    candidates: list[Candidate], prefix_size: int, group: bool = True
) -> list[str]:
    """Render candidates as display lines, one per candidate or namespace group."""
    if not candidates:
        return []
    width = max(len(c.text) for c in candidates)
    if not group:
        _check_sorted(candidates)
        return [format_candidate(c, width) for c in candidates]
    lines = []
    for entry in group_candidates(candidates, prefix_size):
        if isinstance(entry, NamespaceGroup):
            lines.append(format_group(entry))
        else:
            lines.append(format_candidate(entry, width))
    return lines
