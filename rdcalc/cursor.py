"""Character cursor over one line of input.

There is no separate tokenizing pass: the parser asks the cursor whether the
next non-whitespace character is the one it wants, and the answer decides
which grammar alternative to take.
"""

from __future__ import annotations

from typing import Optional


class Cursor:
    """Read position over ``text``. The position never moves backwards."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def __repr__(self) -> str:
        return f"Cursor(pos={self._pos}, rest={self._text[self._pos:]!r})"

    @property
    def text(self) -> str:
        return self._text

    @property
    def position(self) -> int:
        return self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._text)

    def peek(self) -> Optional[str]:
        """Next character without consuming it, or None at end of input."""
        if self.at_end():
            return None
        return self._text[self._pos]

    def skip_whitespace_and_peek(self) -> Optional[str]:
        """Advance past whitespace, then peek."""
        while not self.at_end() and self._text[self._pos].isspace():
            self._pos += 1
        return self.peek()

    def try_consume(self, expected: str) -> bool:
        """Consume ``expected`` if it is the next non-whitespace character.

        Returns False and leaves the character in place on a mismatch;
        a mismatch is not necessarily an error for the caller.
        """
        if self.skip_whitespace_and_peek() != expected:
            return False
        self._pos += 1
        return True
