from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .constants import STATUS_MSG_TIMEOUT, TAB_STOP

if TYPE_CHECKING:
    from .document import Document


def expand_tabs(raw: str, tab_stop: int = TAB_STOP) -> str:
    out: list[str] = []
    idx = 0
    for ch in raw:
        if ch == "\t":
            out.append(" ")
            idx += 1
            while idx % tab_stop != 0:
                out.append(" ")
                idx += 1
        else:
            out.append(ch)
            idx += 1
    return "".join(out)


@dataclass(slots=True)
class Syntax:
    filetype: str
    filematch: tuple[str, ...]
    keywords: tuple[str, ...]
    singleline_comment_start: str
    multiline_comment_start: str
    multiline_comment_end: str
    flags: int


@dataclass(slots=True)
class Row:
    idx: int
    raw: str
    rendered: str = ""
    highlight: list[int] = field(default_factory=list)
    comment_open: bool = False
    # Carry-in flag the current highlight was computed with; None until first pass.
    carry_in: bool | None = None

    @property
    def size(self) -> int:
        return len(self.raw)

    @property
    def rsize(self) -> int:
        return len(self.rendered)

    def update_render(self, tab_stop: int = TAB_STOP) -> None:
        self.rendered = expand_tabs(self.raw, tab_stop)

    def cx_to_rx(self, cx: int, tab_stop: int = TAB_STOP) -> int:
        rx = 0
        for ch in self.raw[:cx]:
            if ch == "\t":
                rx += (tab_stop - 1) - (rx % tab_stop)
            rx += 1
        return rx

    def rx_to_cx(self, rx: int, tab_stop: int = TAB_STOP) -> int:
        cur_rx = 0
        for cx, ch in enumerate(self.raw):
            if ch == "\t":
                cur_rx += (tab_stop - 1) - (cur_rx % tab_stop)
            cur_rx += 1
            if cur_rx > rx:
                return cx
        return self.size


@dataclass(slots=True)
class ViewState:
    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0
    screenrows: int = 0
    screencols: int = 0

    def scroll(self, document: Document) -> None:
        self.rx = 0
        if self.cy < document.numrows:
            self.rx = document.rows[self.cy].cx_to_rx(self.cx, document.tab_stop)

        if self.cy < self.rowoff:
            self.rowoff = self.cy
        if self.cy >= self.rowoff + self.screenrows:
            self.rowoff = self.cy - self.screenrows + 1
        if self.rx < self.coloff:
            self.coloff = self.rx
        if self.rx >= self.coloff + self.screencols:
            self.coloff = self.rx - self.screencols + 1

    def snapshot(self) -> tuple[int, int, int, int]:
        return self.cx, self.cy, self.coloff, self.rowoff

    def restore(self, saved: tuple[int, int, int, int]) -> None:
        self.cx, self.cy, self.coloff, self.rowoff = saved


@dataclass(slots=True)
class StatusMessage:
    text: str = ""
    set_at: float = 0.0

    def set(self, fmt: str, *args: object, now: float | None = None) -> None:
        self.text = fmt % args if args else fmt
        self.set_at = time.time() if now is None else now

    def visible(self, now: float | None = None) -> str:
        now = time.time() if now is None else now
        if self.text and now - self.set_at < STATUS_MSG_TIMEOUT:
            return self.text
        return ""
