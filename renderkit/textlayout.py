"""Text layout queries used by the editing state: rows, hit testing, caret lookup."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass
class TextRow:
    """Layout of one displayed row of characters."""

    x0: float = 0.0
    x1: float = 0.0
    baseline_y_delta: float = 0.0
    ymin: float = 0.0
    ymax: float = 0.0
    num_chars: int = 0


@dataclass
class FindState:
    """Position of a character and facts about its row and the row before it."""

    x: float = 0.0
    y: float = 0.0
    height: float = 0.0
    first_char: int = 0
    length: int = 0
    prev_first: int = 0


class TextBuffer(abc.ABC):
    """A string being edited, together with its layout."""

    NEWLINE = "\n"

    @abc.abstractmethod
    def __len__(self) -> int:
        """Number of characters."""

    @abc.abstractmethod
    def get_char(self, index: int) -> str:
        """Character at index."""

    @abc.abstractmethod
    def layout_row(self, start: int) -> TextRow:
        """Lay out the row that begins at character start."""

    @abc.abstractmethod
    def char_width(self, line_start: int, index: int) -> float:
        """Advance of the index'th character of the row starting at line_start."""

    @abc.abstractmethod
    def insert_chars(self, pos: int, chars: Sequence[str]) -> bool:
        """Insert chars at pos; return False if they could not be inserted."""

    @abc.abstractmethod
    def delete_chars(self, pos: int, count: int) -> None:
        """Delete count characters starting at pos."""

    def is_space(self, ch: str) -> bool:
        """True for characters that separate words."""
        return ch.isspace()


class PlainText(TextBuffer):
    """Monospaced text split into rows at newlines."""

    def __init__(
        self,
        text: str = "",
        char_width: float = 1.0,
        line_height: float = 1.0,
        max_length: Optional[int] = None,
    ) -> None:
        if max_length is not None and len(text) > max_length:
            raise ValueError("text is longer than max_length")
        self.text = text
        self.width = char_width
        self.line_height = line_height
        self.max_length = max_length

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text

    def get_char(self, index: int) -> str:
        return self.text[index]

    def layout_row(self, start: int) -> TextRow:
        """Row from start up to and including the next newline."""
        if start >= len(self.text):
            return TextRow(0.0, 0.0, self.line_height, 0.0, self.line_height, 0)
        end = self.text.find(self.NEWLINE, start)
        stop = len(self.text) if end < 0 else end + 1
        visible = (stop - start) - (0 if end < 0 else 1)
        return TextRow(
            x0=0.0,
            x1=visible * self.width,
            baseline_y_delta=self.line_height,
            ymin=0.0,
            ymax=self.line_height,
            num_chars=stop - start,
        )

    def char_width(self, line_start: int, index: int) -> float:
        pos = line_start + index
        if pos >= len(self.text) or self.text[pos] == self.NEWLINE:
            return 0.0
        return self.width

    def insert_chars(self, pos: int, chars: Sequence[str]) -> bool:
        if not 0 <= pos <= len(self.text):
            raise IndexError(f"insert position {pos} out of range")
        added = "".join(chars)
        if self.max_length is not None and len(self.text) + len(added) > self.max_length:
            return False
        self.text = self.text[:pos] + added + self.text[pos:]
        return True

    def delete_chars(self, pos: int, count: int) -> None:
        if pos < 0 or count < 0 or pos + count > len(self.text):
            raise IndexError(f"cannot delete {count} characters at {pos}")
        self.text = self.text[:pos] + self.text[pos + count:]


def locate_coord(text: TextBuffer, x: float, y: float) -> int:
    """Return the caret position nearest to the display point (x, y)."""
    n = len(text)
    base_y = 0.0
    i = 0
    r = TextRow()

    while i < n:
        r = text.layout_row(i)
        if r.num_chars <= 0:
            return n
        if i == 0 and y < base_y + r.ymin:
            return 0
        if y < base_y + r.ymax:
            break
        i += r.num_chars
        base_y += r.baseline_y_delta

    if i >= n:
        return n

    if x < r.x0:
        return i

    if x < r.x1:
        prev_x = r.x0
        for k in range(r.num_chars):
            w = text.char_width(i, k)
            if x < prev_x + w:
                return k + i if x < prev_x + w / 2 else k + i + 1
            prev_x += w

    last = i + r.num_chars - 1
    if text.get_char(last) == text.NEWLINE:
        return last
    return i + r.num_chars


def find_charpos(text: TextBuffer, n: int, single_line: bool) -> FindState:
    """Locate character n, remembering where its row and the previous row start."""
    z = len(text)
    if not 0 <= n <= z:
        raise IndexError(f"character position {n} out of range")
    find = FindState()

    if n == z:
        if single_line:
            r = text.layout_row(0)
            find.y = 0.0
            find.first_char = 0
            find.length = z
            find.height = r.ymax - r.ymin
            find.x = r.x1
        else:
            find.y = 0.0
            find.x = 0.0
            find.height = 1.0
            i = 0
            prev_start = 0
            while i < z:
                r = text.layout_row(i)
                prev_start = i
                i += r.num_chars
            find.first_char = i
            find.length = 0
            find.prev_first = prev_start
        return find

    i = 0
    prev_start = 0
    while True:
        r = text.layout_row(i)
        if n < i + r.num_chars:
            break
        prev_start = i
        i += r.num_chars
        find.y += r.baseline_y_delta

    first = i
    find.first_char = first
    find.length = r.num_chars
    find.height = r.ymax - r.ymin
    find.prev_first = prev_start
    find.x = r.x0 + sum(text.char_width(first, k) for k in range(n - first))
    return find