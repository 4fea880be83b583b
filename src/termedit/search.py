from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_H,
    DEL_KEY,
    ENTER,
    ESC,
    HL_MATCH,
    KEY_NULL,
)

if TYPE_CHECKING:
    from .editor import Editor

logger = logging.getLogger(__name__)

PromptCallback = Callable[[str, int], None]


def is_prompt_char(c: int) -> bool:
    return 32 <= c < 127


def prompt(editor: Editor, template: str, callback: PromptCallback | None = None) -> str | None:
    """Read a line in the message bar; returns None when aborted with ESC."""
    buf = ""
    while True:
        editor.set_status_message(template, buf)
        editor.refresh_screen()

        c = editor.decoder.read_key()
        if c == KEY_NULL:
            continue
        if c in (DEL_KEY, CTRL_H, BACKSPACE):
            buf = buf[:-1]
        elif c == ESC:
            editor.set_status_message("")
            if callback is not None:
                callback(buf, c)
            return None
        elif c == ENTER:
            if buf:
                editor.set_status_message("")
                if callback is not None:
                    callback(buf, c)
                return buf
        elif is_prompt_char(c):
            buf += chr(c)

        if callback is not None:
            callback(buf, c)


class SearchController:
    def __init__(self, editor: Editor) -> None:
        self.editor = editor
        self.last_match = -1
        self.direction = 1
        self.saved_hl_line = -1
        self.saved_hl: list[int] | None = None

    def restore_highlight(self) -> None:
        rows = self.editor.document.rows
        if self.saved_hl is not None and 0 <= self.saved_hl_line < len(rows):
            rows[self.saved_hl_line].highlight = self.saved_hl
        self.saved_hl = None
        self.saved_hl_line = -1

    def reset(self) -> None:
        self.last_match = -1
        self.direction = 1

    def on_key(self, query: str, key: int) -> None:
        self.restore_highlight()

        if key in (ENTER, ESC):
            self.reset()
            return
        if key in (ARROW_RIGHT, ARROW_DOWN):
            self.direction = 1
        elif key in (ARROW_LEFT, ARROW_UP):
            self.direction = -1
        else:
            self.reset()

        if not query:
            return
        self.find_next(query)

    def find_next(self, query: str) -> bool:
        document = self.editor.document
        view = self.editor.view
        numrows = document.numrows
        # A fresh query scans from the cursor row itself.
        current = self.last_match if self.last_match != -1 else view.cy - 1
        for _ in range(numrows):
            current += self.direction
            if current < 0:
                current = numrows - 1
            elif current >= numrows:
                current = 0
            row = document.rows[current]
            rx = row.rendered.find(query)
            if rx == -1:
                continue

            self.last_match = current
            view.cy = current
            view.cx = row.rx_to_cx(rx, document.tab_stop)
            view.rowoff = numrows

            self.saved_hl_line = current
            self.saved_hl = row.highlight.copy()
            end = min(rx + len(query), row.rsize)
            row.highlight[rx:end] = [HL_MATCH] * (end - rx)
            logger.debug("match for %r at row %d col %d", query, current, rx)
            return True
        return False

    def run(self) -> str | None:
        saved = self.editor.view.snapshot()
        query = prompt(self.editor, "Search: %s (Use ESC/Arrows/Enter)", self.on_key)
        self.restore_highlight()
        self.reset()
        if query is None:
            self.editor.view.restore(saved)
        return query
