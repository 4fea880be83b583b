from __future__ import annotations

import errno
import logging
import os

from .errors import SaveError

logger = logging.getLogger(__name__)


def to_bytes(text: str) -> bytes:
    # Rows hold latin-1 decoded text, one character per file byte.
    return text.encode("latin-1", errors="replace")


def load_file(path: str) -> list[str]:
    lines: list[str] = []
    with open(path, "rb") as f:
        for line in f:
            while line and line[-1] in (0x0A, 0x0D):
                line = line[:-1]
            lines.append(line.decode("latin-1"))
    logger.info("loaded %d lines from %s", len(lines), path)
    return lines


def save_file(path: str, data: bytes) -> int:
    fd = -1
    try:
        fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
        os.ftruncate(fd, len(data))
        written = 0
        while written < len(data):
            n = os.write(fd, data[written:])
            if n <= 0:
                raise OSError(errno.EIO, "short write")
            written += n
    except OSError as exc:
        code = exc.errno or errno.EIO
        logger.warning("saving %s failed: %s", path, os.strerror(code))
        raise SaveError(code, os.strerror(code), path) from exc
    finally:
        if fd != -1:
            os.close(fd)
    logger.info("wrote %d bytes to %s", len(data), path)
    return len(data)
