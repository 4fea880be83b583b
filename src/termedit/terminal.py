from __future__ import annotations

import errno
import fcntl
import logging
import os
import re
import struct
import termios
from collections.abc import Iterator
from contextlib import AbstractContextManager
from typing import Protocol

from .constants import (
    CSI_LETTER_MAP,
    CSI_TILDE_MAP,
    ESC,
    KEY_NULL,
    SS3_LETTER_MAP,
)
from .errors import FatalIoError

logger = logging.getLogger(__name__)


class ByteSource(Protocol):
    def read_byte(self) -> int | None: ...


class FdByteSource:
    def __init__(self, fd: int) -> None:
        self.fd = fd

    def read_byte(self) -> int | None:
        try:
            data = os.read(self.fd, 1)
        except (BlockingIOError, InterruptedError):
            return None
        except FatalIoError:
            raise
        except OSError as exc:
            raise FatalIoError(exc.errno or errno.EIO, "read") from exc
        if not data:
            return None
        return data[0]


class KeyDecoder:
    def __init__(self, source: ByteSource) -> None:
        self.source = source

    def read_key(self) -> int:
        c = self.source.read_byte()
        if c is None:
            return KEY_NULL
        if c != ESC:
            return c

        seq0 = self.source.read_byte()
        if seq0 is None:
            return ESC
        seq1 = self.source.read_byte()
        if seq1 is None:
            return ESC

        if seq0 == ord("["):
            if ord("0") <= seq1 <= ord("9"):
                seq2 = self.source.read_byte()
                if seq2 is None or seq2 != ord("~"):
                    return ESC
                return CSI_TILDE_MAP.get(seq1, ESC)
            return CSI_LETTER_MAP.get(seq1, ESC)
        if seq0 == ord("O"):
            return SS3_LETTER_MAP.get(seq1, ESC)
        return ESC

    def keys(self) -> Iterator[int]:
        while True:
            yield self.read_key()

    def __iter__(self) -> Iterator[int]:
        return self.keys()


def get_cursor_position(source: ByteSource, ofd: int) -> tuple[int, int]:
    if os.write(ofd, b"\x1b[6n") != 4:
        raise FatalIoError(errno.EIO, "cursor query write failed")

    buf = bytearray()
    while len(buf) < 31:
        c = source.read_byte()
        if c is None:
            break
        buf.append(c)
        if c == ord("R"):
            break

    match = re.match(rb"\x1b\[(\d+);(\d+)R", bytes(buf))
    if not match:
        raise FatalIoError(errno.EIO, "invalid cursor position response")
    return int(match.group(1)), int(match.group(2))


def get_window_size(source: ByteSource, ofd: int) -> tuple[int, int]:
    try:
        packed = fcntl.ioctl(ofd, termios.TIOCGWINSZ, struct.pack("HHHH", 0, 0, 0, 0))
        rows, cols, _, _ = struct.unpack("HHHH", packed)
        if cols:
            return rows, cols
    except OSError:
        logger.debug("TIOCGWINSZ failed, probing with cursor report")

    if os.write(ofd, b"\x1b[999C\x1b[999B") != 12:
        raise FatalIoError(errno.EIO, "window query write failed")
    return get_cursor_position(source, ofd)


class RawMode(AbstractContextManager["RawMode"]):
    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._orig: list | None = None

    def __enter__(self) -> "RawMode":
        if not os.isatty(self.fd):
            raise FatalIoError(errno.ENOTTY, "stdin is not a tty")

        try:
            self._orig = termios.tcgetattr(self.fd)
            raw = termios.tcgetattr(self.fd)
            raw[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
            raw[1] &= ~termios.OPOST
            raw[2] |= termios.CS8
            raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
            raw[6][termios.VMIN] = 0
            raw[6][termios.VTIME] = 1
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        except termios.error as exc:
            raise FatalIoError(errno.EIO, f"tcsetattr: {exc}") from exc
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._orig is not None:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._orig)
            self._orig = None
