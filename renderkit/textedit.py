"""Editing state for a text field: cursor, selection, keyboard and mouse input."""

from __future__ import annotations

import enum
from typing import Sequence, Union

from renderkit.textlayout import TextBuffer, find_charpos, locate_coord
from renderkit.textundo import UndoState

_KEY_BASE = 0x200000


class Key(enum.IntEnum):
    """Editing keys; combine a key with SHIFT (key | Key.SHIFT) to extend the selection."""

    LEFT = _KEY_BASE + 1
    RIGHT = _KEY_BASE + 2
    UP = _KEY_BASE + 3
    DOWN = _KEY_BASE + 4
    PGUP = _KEY_BASE + 5
    PGDOWN = _KEY_BASE + 6
    LINESTART = _KEY_BASE + 7
    LINEEND = _KEY_BASE + 8
    TEXTSTART = _KEY_BASE + 9
    TEXTEND = _KEY_BASE + 10
    DELETE = _KEY_BASE + 11
    BACKSPACE = _KEY_BASE + 12
    UNDO = _KEY_BASE + 13
    REDO = _KEY_BASE + 14
    INSERT = _KEY_BASE + 15
    WORDLEFT = _KEY_BASE + 16
    WORDRIGHT = _KEY_BASE + 17
    SHIFT = 0x400000


KeyInput = Union[int, str]


class TextEditState:
    """Cursor, selection, insert mode and undo history of one text field."""

    def __init__(self, single_line: bool = False) -> None:
        self.undo_state = UndoState()
        self.clear(single_line)

    def clear(self, single_line: bool = False) -> None:
        """Reset to the initial state, forgetting the undo history."""
        self.undo_state.clear()
        self.select_start = 0
        self.select_end = 0
        self.cursor = 0
        self.has_preferred_x = False
        self.preferred_x = 0.0
        self.cursor_at_end_of_line = False
        self.initialized = True
        self.single_line = bool(single_line)
        self.insert_mode = False
        self.row_count_per_page = 0

    def has_selection(self) -> bool:
        """True when some text is selected."""
        return self.select_start != self.select_end

    # ---- mouse ----

    def click(self, text: TextBuffer, x: float, y: float) -> None:
        """Move the cursor to the clicked point and drop the selection."""
        if self.single_line:
            y = text.layout_row(0).ymin
        self.cursor = locate_coord(text, x, y)
        self.select_start = self.cursor
        self.select_end = self.cursor
        self.has_preferred_x = False

    def drag(self, text: TextBuffer, x: float, y: float) -> None:
        """Move the cursor and the selection end to the dragged point."""
        if self.single_line:
            y = text.layout_row(0).ymin
        if self.select_start == self.select_end:
            self.select_start = self.cursor
        p = locate_coord(text, x, y)
        self.cursor = self.select_end = p

    # ---- clipboard ----

    def cut(self, text: TextBuffer) -> bool:
        """Delete the selection; return True if there was one."""
        if self.has_selection():
            self._delete_selection(text)
            self.has_preferred_x = False
            return True
        return False

    def paste(self, text: TextBuffer, chars: Sequence[str]) -> bool:
        """Replace the selection (or insert at the cursor) with chars."""
        chars = list(chars)
        self._clamp(text)
        self._delete_selection(text)
        if text.insert_chars(self.cursor, chars):
            self.undo_state.make_undo_insert(self.cursor, len(chars))
            self.cursor += len(chars)
            self.has_preferred_x = False
            return True
        if self.undo_state.undo_point:
            self.undo_state.undo_point -= 1
        return False

    # ---- helpers ----

    def _clamp(self, text: TextBuffer) -> None:
        n = len(text)
        if self.has_selection():
            self.select_start = min(self.select_start, n)
            self.select_end = min(self.select_end, n)
            if self.select_start == self.select_end:
                self.cursor = self.select_start
        self.cursor = min(self.cursor, n)

    def _delete(self, text: TextBuffer, where: int, length: int) -> None:
        self.undo_state.make_undo_delete(text, where, length)
        text.delete_chars(where, length)
        self.has_preferred_x = False

    def _delete_selection(self, text: TextBuffer) -> None:
        self._clamp(text)
        if not self.has_selection():
            return
        if self.select_start < self.select_end:
            self._delete(text, self.select_start, self.select_end - self.select_start)
            self.select_end = self.cursor = self.select_start
        else:
            self._delete(text, self.select_end, self.select_start - self.select_end)
            self.select_start = self.cursor = self.select_end
        self.has_preferred_x = False

    def _sort_selection(self) -> None:
        if self.select_end < self.select_start:
            self.select_start, self.select_end = self.select_end, self.select_start

    def _move_to_first(self) -> None:
        if self.has_selection():
            self._sort_selection()
            self.cursor = self.select_start
            self.select_end = self.select_start
            self.has_preferred_x = False

    def _move_to_last(self, text: TextBuffer) -> None:
        if self.has_selection():
            self._sort_selection()
            self._clamp(text)
            self.cursor = self.select_end
            self.select_start = self.select_end
            self.has_preferred_x = False

    def _prep_selection_at_cursor(self) -> None:
        if not self.has_selection():
            self.select_start = self.select_end = self.cursor
        else:
            self.cursor = self.select_end

    @staticmethod
    def _is_word_boundary(text: TextBuffer, idx: int) -> bool:
        if idx <= 0:
            return True
        return text.is_space(text.get_char(idx - 1)) and not text.is_space(
            text.get_char(idx)
        )

    def _word_left(self, text: TextBuffer, c: int) -> int:
        c -= 1
        while c >= 0 and not self._is_word_boundary(text, c):
            c -= 1
        return max(c, 0)

    def _word_right(self, text: TextBuffer, c: int) -> int:
        n = len(text)
        c += 1
        while c < n and not self._is_word_boundary(text, c):
            c += 1
        return min(c, n)

    def _line_start(self, text: TextBuffer) -> None:
        if self.single_line:
            self.cursor = 0
            return
        while self.cursor > 0 and text.get_char(self.cursor - 1) != text.NEWLINE:
            self.cursor -= 1

    def _line_end(self, text: TextBuffer) -> None:
        n = len(text)
        if self.single_line:
            self.cursor = n
            return
        while self.cursor < n and text.get_char(self.cursor) != text.NEWLINE:
            self.cursor += 1

    def _seek_in_row(self, text: TextBuffer, start: int, goal_x: float) -> None:
        row = text.layout_row(start)
        self.cursor = start
        x = row.x0
        for i in range(row.num_chars):
            if text.get_char(start + i) == text.NEWLINE:
                break
            x += text.char_width(start, i)
            if x > goal_x:
                break
            self.cursor += 1

    def _type_char(self, text: TextBuffer, ch: str) -> None:
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        if ch == "\0":
            return
        if ch == text.NEWLINE and self.single_line:
            return
        if self.insert_mode and not self.has_selection() and self.cursor < len(text):
            self.undo_state.make_undo_replace(text, self.cursor, 1, 1)
            text.delete_chars(self.cursor, 1)
            if text.insert_chars(self.cursor, [ch]):
                self.cursor += 1
                self.has_preferred_x = False
        else:
            self._delete_selection(text)
            if text.insert_chars(self.cursor, [ch]):
                self.undo_state.make_undo_insert(self.cursor, 1)
                self.cursor += 1
                self.has_preferred_x = False

    # ---- keyboard ----

    def key(self, text: TextBuffer, key: KeyInput) -> None:
        """Apply one keyboard input: a character to type or a Key, optionally with SHIFT."""
        if isinstance(key, str):
            self._type_char(text, key)
            return

        key = int(key)
        shift = key & Key.SHIFT
        base = key & ~Key.SHIFT

        if key == Key.INSERT:
            self.insert_mode = not self.insert_mode
        elif key == Key.UNDO:
            cursor = self.undo_state.undo(text)
            if cursor is not None:
                self.cursor = cursor
            self.has_preferred_x = False
        elif key == Key.REDO:
            cursor = self.undo_state.redo(text)
            if cursor is not None:
                self.cursor = cursor
            self.has_preferred_x = False
        elif key == Key.LEFT:
            if self.has_selection():
                self._move_to_first()
            elif self.cursor > 0:
                self.cursor -= 1
            self.has_preferred_x = False
        elif key == Key.RIGHT:
            if self.has_selection():
                self._move_to_last(text)
            else:
                self.cursor += 1
            self._clamp(text)
            self.has_preferred_x = False
        elif key == Key.LEFT | Key.SHIFT:
            self._clamp(text)
            self._prep_selection_at_cursor()
            if self.select_end > 0:
                self.select_end -= 1
            self.cursor = self.select_end
            self.has_preferred_x = False
        elif key == Key.RIGHT | Key.SHIFT:
            self._prep_selection_at_cursor()
            self.select_end += 1
            self._clamp(text)
            self.cursor = self.select_end
            self.has_preferred_x = False
        elif key == Key.WORDLEFT:
            if self.has_selection():
                self._move_to_first()
            else:
                self.cursor = self._word_left(text, self.cursor)
                self._clamp(text)
        elif key == Key.WORDLEFT | Key.SHIFT:
            if not self.has_selection():
                self._prep_selection_at_cursor()
            self.cursor = self._word_left(text, self.cursor)
            self.select_end = self.cursor
            self._clamp(text)
        elif key == Key.WORDRIGHT:
            if self.has_selection():
                self._move_to_last(text)
            else:
                self.cursor = self._word_right(text, self.cursor)
                self._clamp(text)
        elif key == Key.WORDRIGHT | Key.SHIFT:
            if not self.has_selection():
                self._prep_selection_at_cursor()
            self.cursor = self._word_right(text, self.cursor)
            self.select_end = self.cursor
            self._clamp(text)
        elif base in (Key.DOWN, Key.PGDOWN):
            self._move_down(text, base == Key.PGDOWN, bool(shift))
        elif base in (Key.UP, Key.PGUP):
            self._move_up(text, base == Key.PGUP, bool(shift))
        elif base == Key.DELETE:
            if self.has_selection():
                self._delete_selection(text)
            elif self.cursor < len(text):
                self._delete(text, self.cursor, 1)
            self.has_preferred_x = False
        elif base == Key.BACKSPACE:
            if self.has_selection():
                self._delete_selection(text)
            else:
                self._clamp(text)
                if self.cursor > 0:
                    self._delete(text, self.cursor - 1, 1)
                    self.cursor -= 1
            self.has_preferred_x = False
        elif key == Key.TEXTSTART:
            self.cursor = self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif key == Key.TEXTEND:
            self.cursor = len(text)
            self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif key == Key.TEXTSTART | Key.SHIFT:
            self._prep_selection_at_cursor()
            self.cursor = self.select_end = 0
            self.has_preferred_x = False
        elif key == Key.TEXTEND | Key.SHIFT:
            self._prep_selection_at_cursor()
            self.cursor = self.select_end = len(text)
            self.has_preferred_x = False
        elif key == Key.LINESTART:
            self._clamp(text)
            self._move_to_first()
            self._line_start(text)
            self.has_preferred_x = False
        elif key == Key.LINEEND:
            self._clamp(text)
            self._move_to_first()
            self._line_end(text)
            self.has_preferred_x = False
        elif key == Key.LINESTART | Key.SHIFT:
            self._clamp(text)
            self._prep_selection_at_cursor()
            self._line_start(text)
            self.select_end = self.cursor
            self.has_preferred_x = False
        elif key == Key.LINEEND | Key.SHIFT:
            self._clamp(text)
            self._prep_selection_at_cursor()
            self._line_end(text)
            self.select_end = self.cursor
            self.has_preferred_x = False

    def _move_down(self, text: TextBuffer, is_page: bool, sel: bool) -> None:
        if not is_page and self.single_line:
            self.key(text, Key.RIGHT | (Key.SHIFT if sel else 0))
            return
        row_count = self.row_count_per_page if is_page else 1

        if sel:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_last(text)

        self._clamp(text)
        find = find_charpos(text, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            start = find.first_char + find.length
            if find.length == 0:
                break
            if text.get_char(find.first_char + find.length - 1) != text.NEWLINE:
                break
            self._seek_in_row(text, start, goal_x)
            self._clamp(text)
            self.has_preferred_x = True
            self.preferred_x = goal_x
            if sel:
                self.select_end = self.cursor
            find.first_char = start
            find.length = text.layout_row(start).num_chars

    def _move_up(self, text: TextBuffer, is_page: bool, sel: bool) -> None:
        if not is_page and self.single_line:
            self.key(text, Key.LEFT | (Key.SHIFT if sel else 0))
            return
        row_count = self.row_count_per_page if is_page else 1

        if sel:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_first()

        self._clamp(text)
        find = find_charpos(text, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            if find.prev_first == find.first_char:
                break
            self._seek_in_row(text, find.prev_first, goal_x)
            self._clamp(text)
            self.has_preferred_x = True
            self.preferred_x = goal_x
            if sel:
                self.select_end = self.cursor
            prev_scan = find.prev_first - 1 if find.prev_first > 0 else 0
            while prev_scan > 0 and text.get_char(prev_scan - 1) != text.NEWLINE:
                prev_scan -= 1
            find.first_char = find.prev_first
            find.prev_first = prev_scan