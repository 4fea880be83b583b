from __future__ import annotations

import os
import time
from collections.abc import Callable

from .constants import (
    ANSI_CLEAR_LINE,
    ANSI_CURSOR_HOME,
    ANSI_DEFAULT_FG,
    ANSI_HIDE_CURSOR,
    ANSI_INVERT_OFF,
    ANSI_INVERT_ON,
    ANSI_SHOW_CURSOR,
    HL_NORMAL,
    STATUS_FILENAME_WIDTH,
    TERMEDIT_VERSION,
)
from .document import Document
from .models import Row, StatusMessage, ViewState
from .syntax import syntax_to_color


def is_control(ch: str) -> bool:
    return ord(ch) < 32 or ord(ch) == 127


def control_symbol(ch: str) -> str:
    return chr(ord("@") + ord(ch)) if ord(ch) <= 26 else "?"


def draw_welcome(view: ViewState, out: list[str]) -> None:
    welcome = f"termedit -- version {TERMEDIT_VERSION}"
    if len(welcome) > view.screencols:
        welcome = welcome[: view.screencols]
    pad = (view.screencols - len(welcome)) // 2
    if pad:
        out.append("~")
        pad -= 1
    if pad > 0:
        out.append(" " * pad)
    out.append(welcome)


def draw_row(row: Row, view: ViewState, out: list[str]) -> None:
    text = row.rendered[view.coloff : view.coloff + view.screencols]
    hl = row.highlight[view.coloff : view.coloff + view.screencols]
    current_color = -1
    for ch, h in zip(text, hl):
        if is_control(ch):
            out.append(ANSI_INVERT_ON)
            out.append(control_symbol(ch))
            out.append(ANSI_INVERT_OFF)
            if current_color != -1:
                out.append(f"\x1b[{current_color}m")
        elif h == HL_NORMAL:
            if current_color != -1:
                out.append(ANSI_DEFAULT_FG)
                current_color = -1
            out.append(ch)
        else:
            color = syntax_to_color(h)
            if color != current_color:
                out.append(f"\x1b[{color}m")
                current_color = color
            out.append(ch)
    out.append(ANSI_DEFAULT_FG)


def draw_rows(document: Document, view: ViewState, out: list[str]) -> None:
    for y in range(view.screenrows):
        filerow = view.rowoff + y
        if filerow < document.numrows:
            draw_row(document.rows[filerow], view, out)
        elif document.numrows == 0 and y == view.screenrows // 3:
            draw_welcome(view, out)
        else:
            out.append("~")
        out.append(ANSI_CLEAR_LINE)
        out.append("\r\n")


def draw_status_bar(document: Document, view: ViewState, out: list[str]) -> None:
    # Filenames are shown as their on-disk bytes, like row text.
    name = os.fsencode(document.path).decode("latin-1") if document.path else "[No Name]"
    mod = "(modified)" if document.dirty else ""
    status = f"{name:.{STATUS_FILENAME_WIDTH}} - {document.numrows} lines {mod}"
    filetype = document.highlighter.filetype or "no ft"
    rstatus = f"{filetype} | {view.cy + 1}/{document.numrows}"
    status = status[: view.screencols]
    out.append(ANSI_INVERT_ON)
    out.append(status)
    fill = len(status)
    while fill < view.screencols:
        if view.screencols - fill == len(rstatus):
            out.append(rstatus)
            break
        out.append(" ")
        fill += 1
    out.append(ANSI_INVERT_OFF)
    out.append("\r\n")


def draw_message_bar(message: StatusMessage, view: ViewState, out: list[str], now: float) -> None:
    out.append(ANSI_CLEAR_LINE)
    out.append(message.visible(now)[: view.screencols])


def cursor_escape(view: ViewState) -> str:
    return f"\x1b[{view.cy - view.rowoff + 1};{view.rx - view.coloff + 1}H"


class Renderer:
    def __init__(self, write: Callable[[bytes], object]) -> None:
        self.write = write

    @classmethod
    def for_fd(cls, fd: int) -> "Renderer":
        return cls(lambda data: os.write(fd, data))

    def compose(
        self,
        document: Document,
        view: ViewState,
        message: StatusMessage,
        now: float | None = None,
    ) -> bytes:
        now = time.time() if now is None else now
        out: list[str] = [ANSI_HIDE_CURSOR, ANSI_CURSOR_HOME]
        draw_rows(document, view, out)
        draw_status_bar(document, view, out)
        draw_message_bar(message, view, out, now)
        out.append(cursor_escape(view))
        out.append(ANSI_SHOW_CURSOR)
        return "".join(out).encode("latin-1", errors="replace")

    def refresh(self, document: Document, view: ViewState, message: StatusMessage) -> None:
        view.scroll(document)
        self.write(self.compose(document, view, message))
