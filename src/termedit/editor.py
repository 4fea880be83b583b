from __future__ import annotations

import errno
import logging
import os
import signal
import sys
from collections.abc import Callable

from .constants import (
    ANSI_CLEAR_SCREEN,
    ANSI_CURSOR_HOME,
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_C,
    CTRL_F,
    CTRL_H,
    CTRL_L,
    CTRL_Q,
    CTRL_S,
    DEL_KEY,
    END_KEY,
    ENTER,
    ESC,
    HOME_KEY,
    KEY_NULL,
    PAGE_DOWN,
    PAGE_UP,
    QUIT_TIMES,
)
from .document import Document
from .errors import FatalIoError, SaveError
from .io_ops import load_file, save_file, to_bytes
from .log import configure_logging
from .models import StatusMessage, ViewState
from .render import Renderer
from .search import SearchController, prompt
from .syntax import select_syntax
from .terminal import FdByteSource, KeyDecoder, RawMode, get_window_size

logger = logging.getLogger(__name__)

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"


class Editor:
    def __init__(
        self,
        decoder: KeyDecoder,
        renderer: Renderer,
        window_size: Callable[[], tuple[int, int]] | None = None,
    ) -> None:
        self.document = Document()
        self.view = ViewState()
        self.message = StatusMessage()
        self.decoder = decoder
        self.renderer = renderer
        self.window_size = window_size
        self.quit_times = QUIT_TIMES
        self.search = SearchController(self)
        if window_size is not None:
            self.update_window_size()

    def set_screen_size(self, rows: int, cols: int) -> None:
        # The bottom two rows hold the status and message bars.
        self.view.screenrows = max(1, rows - 2)
        self.view.screencols = max(1, cols)

    def update_window_size(self) -> None:
        if self.window_size is None:
            return
        try:
            rows, cols = self.window_size()
        except OSError as exc:
            raise FatalIoError(exc.errno or errno.EIO, "Unable to query screen size") from exc
        self.set_screen_size(rows, cols)

    def handle_sigwinch(self, _signum: int, _frame) -> None:
        self.update_window_size()
        logger.debug("resized to %dx%d", self.view.screenrows, self.view.screencols)
        self.refresh_screen()

    def set_status_message(self, fmt: str, *args: object) -> None:
        self.message.set(fmt, *args)

    def refresh_screen(self) -> None:
        self.renderer.refresh(self.document, self.view, self.message)

    def select_syntax_highlight(self, filename: str | None) -> None:
        self.document.set_syntax(select_syntax(filename))

    def open_file(self, filename: str) -> None:
        self.document.path = filename
        self.select_syntax_highlight(filename)
        try:
            lines = load_file(filename)
        except FileNotFoundError:
            logger.info("%s does not exist yet, starting empty", filename)
            return
        except OSError as exc:
            raise FatalIoError(exc.errno or errno.EIO, f"Opening file failed: {filename}") from exc
        self.document.load(lines)

    def save(self) -> bool:
        if not self.document.path:
            filename = prompt(self, "Save as: %s (ESC to cancel)")
            if filename is None:
                self.set_status_message("Save aborted")
                return False
            self.document.path = filename
            self.select_syntax_highlight(filename)

        data = to_bytes(self.document.serialize())
        try:
            written = save_file(self.document.path, data)
        except SaveError as exc:
            self.set_status_message("Can't save! I/O error: %s", exc.strerror)
            return False
        self.document.dirty = 0
        self.set_status_message("%d bytes written to disk", written)
        return True

    def find(self) -> None:
        self.search.run()

    def insert_char(self, c: int) -> None:
        view = self.view
        self.document.insert_char(view.cy, view.cx, chr(c))
        view.cx += 1

    def insert_newline(self) -> None:
        view = self.view
        self.document.split_row(view.cy, view.cx)
        view.cy += 1
        view.cx = 0

    def del_char(self) -> None:
        view = self.view
        moved = self.document.delete_char_before(view.cy, view.cx)
        if moved is not None:
            view.cx, view.cy = moved

    def move_cursor(self, key: int) -> None:
        view = self.view
        rows = self.document.rows
        row = rows[view.cy] if view.cy < len(rows) else None

        if key == ARROW_LEFT:
            if view.cx != 0:
                view.cx -= 1
            elif view.cy > 0:
                view.cy -= 1
                view.cx = rows[view.cy].size
        elif key == ARROW_RIGHT:
            if row is not None:
                if view.cx < row.size:
                    view.cx += 1
                elif view.cx == row.size:
                    view.cy += 1
                    view.cx = 0
        elif key == ARROW_UP:
            if view.cy != 0:
                view.cy -= 1
        elif key == ARROW_DOWN:
            if view.cy < len(rows):
                view.cy += 1

        row = rows[view.cy] if view.cy < len(rows) else None
        rowlen = row.size if row is not None else 0
        if view.cx > rowlen:
            view.cx = rowlen

    def page(self, key: int) -> None:
        view = self.view
        if key == PAGE_UP:
            view.cy = view.rowoff
        else:
            view.cy = min(view.rowoff + view.screenrows - 1, self.document.numrows)
        for _ in range(view.screenrows):
            self.move_cursor(ARROW_UP if key == PAGE_UP else ARROW_DOWN)

    def confirm_quit(self) -> bool:
        if self.document.dirty and self.quit_times > 1:
            self.quit_times -= 1
            self.set_status_message(
                "WARNING!!! File has unsaved changes. Press Ctrl-Q %d more times to quit.",
                self.quit_times,
            )
            return False
        return True

    def process_key(self, c: int) -> None:
        if c == KEY_NULL:
            return
        if c == CTRL_Q:
            if self.confirm_quit():
                raise SystemExit(0)
            return

        if c == ENTER:
            self.insert_newline()
        elif c == CTRL_S:
            self.save()
        elif c == CTRL_F:
            self.find()
        elif c == HOME_KEY:
            self.view.cx = 0
        elif c == END_KEY:
            if self.view.cy < self.document.numrows:
                self.view.cx = self.document.rows[self.view.cy].size
        elif c in (BACKSPACE, CTRL_H, DEL_KEY):
            if c == DEL_KEY:
                self.move_cursor(ARROW_RIGHT)
            self.del_char()
        elif c in (PAGE_UP, PAGE_DOWN):
            self.page(c)
        elif c in (ARROW_UP, ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT):
            self.move_cursor(c)
        elif c in (CTRL_L, CTRL_C, ESC):
            pass
        elif c < 256:
            self.insert_char(c)

        self.quit_times = QUIT_TIMES

    def process_keypress(self) -> None:
        self.process_key(self.decoder.read_key())

    def run(self) -> None:
        self.refresh_screen()
        for key in self.decoder:
            self.process_key(key)
            self.refresh_screen()


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) > 1:
        print("Usage: termedit [filename]", file=sys.stderr)
        return 1

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        print("termedit: stdin/stdout must be a tty", file=sys.stderr)
        return 1

    try:
        configure_logging()
    except OSError as exc:
        print(f"termedit: cannot open log file: {exc.strerror or exc}", file=sys.stderr)
        return 1
    source = FdByteSource(stdin_fd)
    renderer = Renderer.for_fd(stdout_fd)
    try:
        with RawMode(stdin_fd):
            try:
                editor = Editor(
                    KeyDecoder(source),
                    renderer,
                    window_size=lambda: get_window_size(source, stdout_fd),
                )
                if args:
                    editor.open_file(args[0])
                signal.signal(signal.SIGWINCH, editor.handle_sigwinch)
                editor.set_status_message(HELP_MESSAGE)
                editor.run()
            finally:
                os.write(stdout_fd, (ANSI_CLEAR_SCREEN + ANSI_CURSOR_HOME).encode())
    except FatalIoError as exc:
        logger.error("fatal: %s", exc)
        print(f"termedit: {exc.strerror}: {os.strerror(exc.errno or errno.EIO)}", file=sys.stderr)
        return 1
    except SystemExit as exc:
        if isinstance(exc.code, int):
            return exc.code
        return 0
    return 0
