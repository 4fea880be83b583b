from __future__ import annotations

import pytest

from termedit.editor import Editor
from termedit.render import Renderer
from termedit.terminal import KeyDecoder


class ScriptedSource:
    """In-memory byte source; an empty buffer reads as a timeout."""

    def __init__(self, data: bytes = b"", idle_limit: int = 200) -> None:
        self.data = bytearray(data)
        self.idle = 0
        self.idle_limit = idle_limit

    def feed(self, data: bytes) -> None:
        self.data.extend(data)

    def read_byte(self) -> int | None:
        if self.data:
            self.idle = 0
            return self.data.pop(0)
        self.idle += 1
        if self.idle > self.idle_limit:
            raise AssertionError("key script exhausted")
        return None


class FrameSink:
    def __init__(self) -> None:
        self.frames: list[bytes] = []

    def __call__(self, data: bytes) -> None:
        self.frames.append(data)

    @property
    def last(self) -> bytes:
        return self.frames[-1] if self.frames else b""


@pytest.fixture
def make_editor():
    def factory(
        lines: list[str] | None = None,
        path: str | None = None,
        rows: int = 24,
        cols: int = 80,
        keys: bytes = b"",
    ) -> Editor:
        source = ScriptedSource(keys)
        sink = FrameSink()
        editor = Editor(KeyDecoder(source), Renderer(sink), window_size=lambda: (rows, cols))
        if path is not None:
            editor.document.path = path
            editor.select_syntax_highlight(path)
        if lines is not None:
            editor.document.load(lines)
        editor.source = source
        editor.sink = sink
        return editor

    return factory
