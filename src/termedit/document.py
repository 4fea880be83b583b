from __future__ import annotations

from collections.abc import Iterable

from .constants import TAB_STOP
from .models import Row, Syntax
from .syntax import Highlighter


class Document:
    def __init__(
        self,
        path: str | None = None,
        syntax: Syntax | None = None,
        tab_stop: int = TAB_STOP,
    ) -> None:
        self.rows: list[Row] = []
        self.dirty = 0
        self.path = path
        self.tab_stop = tab_stop
        self.highlighter = Highlighter(syntax)

    @property
    def numrows(self) -> int:
        return len(self.rows)

    @property
    def syntax(self) -> Syntax | None:
        return self.highlighter.syntax

    def set_syntax(self, syntax: Syntax | None) -> None:
        self.highlighter = Highlighter(syntax)
        self.highlighter.update_all(self.rows)

    def update_row(self, row: Row) -> None:
        row.update_render(self.tab_stop)
        self.highlighter.update(self.rows, row.idx)

    def _renumber(self, start: int) -> None:
        for j in range(start, self.numrows):
            self.rows[j].idx = j

    def insert_row(self, at: int, s: str) -> None:
        if at < 0 or at > self.numrows:
            return
        self.rows.insert(at, Row(idx=at, raw=s))
        self._renumber(at + 1)
        self.update_row(self.rows[at])
        self.dirty += 1

    def delete_row(self, at: int) -> None:
        if at < 0 or at >= self.numrows:
            return
        del self.rows[at]
        self._renumber(at)
        self.highlighter.refresh_from(self.rows, at)
        self.dirty += 1

    def row_insert_char(self, row: Row, at: int, c: str) -> None:
        if at < 0 or at > row.size:
            at = row.size
        row.raw = row.raw[:at] + c + row.raw[at:]
        self.update_row(row)
        self.dirty += 1

    def row_append_string(self, row: Row, s: str) -> None:
        row.raw += s
        self.update_row(row)
        self.dirty += 1

    def row_del_char(self, row: Row, at: int) -> None:
        if at < 0 or at >= row.size:
            return
        row.raw = row.raw[:at] + row.raw[at + 1 :]
        self.update_row(row)
        self.dirty += 1

    def row_truncate(self, row: Row, at: int) -> None:
        row.raw = row.raw[:at]
        self.update_row(row)
        self.dirty += 1

    def insert_char(self, row_idx: int, col: int, c: str) -> None:
        if row_idx == self.numrows:
            self.insert_row(self.numrows, "")
        self.row_insert_char(self.rows[row_idx], col, c)

    def delete_char_before(self, row_idx: int, col: int) -> tuple[int, int] | None:
        """Backspace at (row_idx, col); returns the new (col, row) or None."""
        if row_idx >= self.numrows or (col == 0 and row_idx == 0):
            return None
        if col > 0:
            self.row_del_char(self.rows[row_idx], col - 1)
            return col - 1, row_idx
        return self.join_row_into_previous(row_idx), row_idx - 1

    def split_row(self, row_idx: int, col: int) -> None:
        if row_idx >= self.numrows or col == 0:
            self.insert_row(row_idx, "")
            return
        row = self.rows[row_idx]
        col = min(col, row.size)
        self.insert_row(row_idx + 1, row.raw[col:])
        self.row_truncate(self.rows[row_idx], col)

    def join_row_into_previous(self, row_idx: int) -> int:
        prev = self.rows[row_idx - 1]
        joined_at = prev.size
        self.row_append_string(prev, self.rows[row_idx].raw)
        self.delete_row(row_idx)
        return joined_at

    def serialize(self) -> str:
        return "".join(f"{row.raw}\n" for row in self.rows)

    def load(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.insert_row(self.numrows, line)
        self.dirty = 0
