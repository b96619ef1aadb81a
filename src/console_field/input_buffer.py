class InputBuffer:
    """Editable text buffer with cursor position tracking.

    The cursor is an insertion point in 0..len(text). Editing primitives
    used by completion (insert_at, delete_prev, set_cursor) refuse positions
    outside the text instead of clamping them.
    """

    def __init__(self, text: str = "", cursor: int | None = None):
        self._text = ""
        self._cursor = 0
        self.set_text(text, cursor)

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    def _check_pos(self, pos: int):
        if not 0 <= pos <= len(self._text):
            raise ValueError(f"position {pos} outside buffer of length {len(self._text)}")

    def set_text(self, text: str, cursor: int | None = None):
        """Replace buffer content. The cursor moves to the end unless given."""
        self._text = text
        self._cursor = len(text)
        if cursor is not None:
            self.set_cursor(cursor)

    def set_cursor(self, pos: int):
        self._check_pos(pos)
        self._cursor = pos

    def char_at(self, pos: int) -> str:
        """Return the character at `pos`, or "" at the end of the buffer."""
        self._check_pos(pos)
        return self._text[pos : pos + 1]

    def insert(self, s: str):
        """Insert text at the cursor position."""
        self._text = self._text[: self._cursor] + s + self._text[self._cursor :]
        self._cursor += len(s)

    def insert_at(self, pos: int, s: str):
        """Insert text at `pos`, keeping the cursor on the same character."""
        self._check_pos(pos)
        self._text = self._text[:pos] + s + self._text[pos:]
        if pos <= self._cursor:
            self._cursor += len(s)

    def delete_prev(self, count: int):
        """Delete `count` characters before the cursor."""
        if not 0 <= count <= self._cursor:
            raise ValueError(f"cannot delete {count} characters before cursor {self._cursor}")
        self._text = self._text[: self._cursor - count] + self._text[self._cursor :]
        self._cursor -= count

    def backspace(self):
        """Delete the character before the cursor."""
        if self._cursor > 0:
            self.delete_prev(1)

    def delete(self):
        """Delete the character at the cursor."""
        if self._cursor < len(self._text):
            self._text = self._text[: self._cursor] + self._text[self._cursor + 1 :]

    def move_left(self):
        if self._cursor > 0:
            self._cursor -= 1

    def move_right(self):
        if self._cursor < len(self._text):
            self._cursor += 1

    def move_home(self):
        self._cursor = 0

    def move_end(self):
        self._cursor = len(self._text)

    def clear(self) -> str:
        """Clear the buffer and return the previous content."""
        text = self._text
        self._text = ""
        self._cursor = 0
        return text
