from __future__ import annotations

import enum


class LineHistory:
    """Submitted lines with prefix-filtered prev/next navigation."""

    def __init__(self, max_size: int = 1000, prefix_filter: bool = True):
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self._lines: list[str] = []
        self._max_size = max_size
        self._prefix_filter = prefix_filter
        self._index = -1  # -1 means not browsing
        self._saved_input = ""  # pending line before browsing started
        self._prefix = ""  # prefix filter locked when browsing starts

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def browsing(self) -> bool:
        return self._index != -1

    def add_line(self, text: str):
        """Add a line to history. Skip blank lines and consecutive duplicates."""
        self.reset()
        if not text.strip():
            return
        if self._lines and self._lines[-1] == text:
            return
        self._lines.append(text)
        if len(self._lines) > self._max_size:
            self._lines = self._lines[-self._max_size :]

    def reset(self):
        """Forget the browsing position and the saved pending line."""
        self._index = -1
        self._saved_input = ""
        self._prefix = ""

    def _filtered(self) -> list[str]:
        if not self._prefix:
            return self._lines
        lp = self._prefix.lower()
        return [h for h in self._lines if h.lower().startswith(lp)]

    def prev_line(self, current: str) -> str:
        """Step to an older entry. Returns the text to show."""
        if not self._lines:
            return current
        if self._index == -1:
            self._saved_input = current
            self._prefix = current if self._prefix_filter else ""
        filtered = self._filtered()
        if not filtered:
            self.reset()
            return current
        if self._index == -1:
            self._index = len(filtered) - 1
        elif self._index > 0:
            self._index -= 1
        return filtered[self._index]

    def next_line(self, current: str) -> str:
        """Step to a newer entry. Past the newest, the saved pending line comes back."""
        if self._index == -1:
            return current
        filtered = self._filtered()
        if self._index < len(filtered) - 1:
            self._index += 1
            return filtered[self._index]
        result = self._saved_input
        self.reset()
        return result


class HistoryState(enum.Enum):
    IDLE = "idle"
    BROWSING = "browsing"


class HistoryCursor:
    """Relays prev/next/add between an input field and a LineHistory.

    The store owns the position and the pending line; the cursor only
    tracks whether the field currently shows a history entry.
    """

    def __init__(self, store: LineHistory | None = None):
        self.store = store if store is not None else LineHistory()
        self.state = HistoryState.IDLE

    def _sync(self):
        self.state = HistoryState.BROWSING if self.store.browsing else HistoryState.IDLE

    def prev(self, current: str) -> str:
        text = self.store.prev_line(current)
        self._sync()
        return text

    def next(self, current: str) -> str:
        text = self.store.next_line(current)
        self._sync()
        return text

    def add(self, final: str):
        self.store.add_line(final)
        self.state = HistoryState.IDLE

    def reset(self):
        self.store.reset()
        self.state = HistoryState.IDLE
