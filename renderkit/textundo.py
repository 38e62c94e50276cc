"""Bounded undo/redo history for text editing.

Undo records grow from the bottom of a fixed-size record array and redo
records from the top. Deleted characters live in a shared character pool
that is used the same way. When either runs out of room, the oldest
entries are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from renderkit.textlayout import TextBuffer

UNDO_STATE_COUNT = 99
UNDO_CHAR_COUNT = 999


@dataclass
class UndoRecord:
    """One undoable edit: delete insert_length stored chars and reinsert delete_length."""

    where: int = 0
    insert_length: int = 0
    delete_length: int = 0
    char_storage: int = -1


class UndoState:
    """Undo and redo history with a fixed number of records and stored characters."""

    def __init__(
        self,
        state_count: int = UNDO_STATE_COUNT,
        char_count: int = UNDO_CHAR_COUNT,
    ) -> None:
        if state_count < 1 or char_count < 1:
            raise ValueError("state_count and char_count must be positive")
        self.state_count = state_count
        self.char_count = char_count
        self.records = [UndoRecord() for _ in range(state_count)]
        self.chars: list[str] = [""] * char_count
        self.undo_point = 0
        self.redo_point = state_count
        self.undo_char_point = 0
        self.redo_char_point = char_count

    def clear(self) -> None:
        """Forget all undo and redo history."""
        self.undo_point = 0
        self.undo_char_point = 0
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def flush_redo(self) -> None:
        """Drop every redo record."""
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def discard_undo(self) -> None:
        """Drop the oldest undo record and the characters it stores."""
        if self.undo_point <= 0:
            return
        oldest = self.records[0]
        if oldest.char_storage >= 0:
            n = oldest.insert_length
            self.undo_char_point -= n
            self.chars[: self.undo_char_point] = self.chars[n : n + self.undo_char_point]
            for rec in self.records[: self.undo_point]:
                if rec.char_storage >= 0:
                    rec.char_storage -= n
        self.undo_point -= 1
        self.records[: self.undo_point] = [
            replace(rec) for rec in self.records[1 : self.undo_point + 1]
        ]

    def discard_redo(self) -> None:
        """Drop the oldest redo record and the characters it stores."""
        k = self.state_count - 1
        if self.redo_point > k:
            return
        last = self.records[k]
        if last.char_storage >= 0:
            n = last.insert_length
            self.redo_char_point += n
            self.chars[self.redo_char_point : self.char_count] = self.chars[
                self.redo_char_point - n : self.char_count - n
            ]
            for rec in self.records[self.redo_point : k]:
                if rec.char_storage >= 0:
                    rec.char_storage += n
        self.records[self.redo_point + 1 : self.state_count] = [
            replace(rec) for rec in self.records[self.redo_point : self.state_count - 1]
        ]
        self.redo_point += 1

    def _create_record(self, numchars: int) -> Optional[UndoRecord]:
        self.flush_redo()
        if self.undo_point == self.state_count:
            self.discard_undo()
        if numchars > self.char_count:
            self.undo_point = 0
            self.undo_char_point = 0
            return None
        while self.undo_char_point + numchars > self.char_count:
            self.discard_undo()
        record = self.records[self.undo_point]
        self.undo_point += 1
        return record

    def create_undo(self, pos: int, insert_len: int, delete_len: int) -> Optional[int]:
        """Add an undo record; return the pool offset for its characters, if any."""
        record = self._create_record(insert_len)
        if record is None:
            return None
        record.where = pos
        record.insert_length = insert_len
        record.delete_length = delete_len
        if insert_len == 0:
            record.char_storage = -1
            return None
        record.char_storage = self.undo_char_point
        self.undo_char_point += insert_len
        return record.char_storage

    def _store(self, offset: Optional[int], text: TextBuffer, where: int, length: int) -> None:
        if offset is None:
            return
        self.chars[offset : offset + length] = [
            text.get_char(where + i) for i in range(length)
        ]

    def make_undo_insert(self, where: int, length: int) -> None:
        """Record that length characters were inserted at where."""
        self.create_undo(where, 0, length)

    def make_undo_delete(self, text: TextBuffer, where: int, length: int) -> None:
        """Record the length characters at where, before they are deleted."""
        offset = self.create_undo(where, length, 0)
        self._store(offset, text, where, length)

    def make_undo_replace(
        self, text: TextBuffer, where: int, old_length: int, new_length: int
    ) -> None:
        """Record old_length characters at where about to be replaced by new_length."""
        offset = self.create_undo(where, old_length, new_length)
        self._store(offset, text, where, old_length)

    def undo(self, text: TextBuffer) -> Optional[int]:
        """Revert the latest edit; return the new cursor, or None if nothing was undone."""
        if self.undo_point == 0:
            return None
        u = replace(self.records[self.undo_point - 1])
        r = self.records[self.redo_point - 1]
        r.char_storage = -1
        r.insert_length = u.delete_length
        r.delete_length = u.insert_length
        r.where = u.where

        if u.delete_length:
            if self.undo_char_point + u.delete_length >= self.char_count:
                r.insert_length = 0
            else:
                while self.undo_char_point + u.delete_length > self.redo_char_point:
                    if self.redo_point == self.state_count:
                        return None
                    self.discard_redo()
                r = self.records[self.redo_point - 1]
                r.char_storage = self.redo_char_point - u.delete_length
                self.redo_char_point -= u.delete_length
                self._store(r.char_storage, text, u.where, u.delete_length)
            text.delete_chars(u.where, u.delete_length)

        if u.insert_length:
            stored = self.chars[u.char_storage : u.char_storage + u.insert_length]
            text.insert_chars(u.where, stored)
            self.undo_char_point -= u.insert_length

        self.undo_point -= 1
        self.redo_point -= 1
        return u.where + u.insert_length

    def redo(self, text: TextBuffer) -> Optional[int]:
        """Reapply the latest undone edit; return the new cursor, or None if none."""
        if self.redo_point == self.state_count:
            return None
        u = self.records[self.undo_point]
        r = replace(self.records[self.redo_point])

        u.delete_length = r.insert_length
        u.insert_length = r.delete_length
        u.where = r.where
        u.char_storage = -1

        if r.delete_length:
            if self.undo_char_point + u.insert_length > self.redo_char_point:
                u.insert_length = 0
                u.delete_length = 0
            else:
                u.char_storage = self.undo_char_point
                self.undo_char_point += u.insert_length
                self._store(u.char_storage, text, u.where, u.insert_length)
            text.delete_chars(r.where, r.delete_length)

        if r.insert_length:
            stored = self.chars[r.char_storage : r.char_storage + r.insert_length]
            text.insert_chars(r.where, stored)
            self.redo_char_point += r.insert_length

        self.undo_point += 1
        self.redo_point += 1
        return r.where + r.insert_length