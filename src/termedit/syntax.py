from __future__ import annotations

import logging
from collections.abc import Sequence

from .constants import (
    C_HL_EXTENSIONS,
    C_HL_KEYWORDS,
    HL_COMMENT,
    HL_HIGHLIGHT_NUMBERS,
    HL_HIGHLIGHT_STRINGS,
    HL_KEYWORD1,
    HL_KEYWORD2,
    HL_MATCH,
    HL_MLCOMMENT,
    HL_NORMAL,
    HL_NUMBER,
    HL_STRING,
    SEPARATORS,
)
from .models import Row, Syntax

logger = logging.getLogger(__name__)


HLDB: tuple[Syntax, ...] = (
    Syntax(
        filetype="c",
        filematch=C_HL_EXTENSIONS,
        keywords=C_HL_KEYWORDS,
        singleline_comment_start="//",
        multiline_comment_start="/*",
        multiline_comment_end="*/",
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
)


def is_separator(c: str) -> bool:
    return not c or c in " \t\n\v\f\r\0" or c in SEPARATORS


def is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def syntax_to_color(hl: int) -> int:
    if hl in (HL_COMMENT, HL_MLCOMMENT):
        return 36
    if hl == HL_KEYWORD1:
        return 33
    if hl == HL_KEYWORD2:
        return 32
    if hl == HL_STRING:
        return 35
    if hl == HL_NUMBER:
        return 31
    if hl == HL_MATCH:
        return 34
    return 37


def select_syntax(filename: str | None, database: Sequence[Syntax] = HLDB) -> Syntax | None:
    if not filename:
        return None
    dot = filename.rfind(".")
    extension = filename[dot:] if dot != -1 else None
    for syntax in database:
        for pattern in syntax.filematch:
            is_extension = pattern.startswith(".")
            if (is_extension and extension == pattern) or (not is_extension and pattern in filename):
                logger.debug("selected %s highlighting for %s", syntax.filetype, filename)
                return syntax
    return None


class Highlighter:
    """Classifies rows against one rule table.

    A row's leading block-comment state is the previous row's trailing
    ``comment_open``. ``update`` walks forward from an edited row and stops at
    the first row whose recorded carry-in already matches what its predecessor
    now produces, so each row is visited at most once per edit.
    """

    def __init__(self, syntax: Syntax | None = None) -> None:
        self.syntax = syntax
        self._keywords: list[tuple[str, int]] = []
        if syntax is not None:
            for kw in syntax.keywords:
                if kw.endswith("|"):
                    self._keywords.append((kw[:-1], HL_KEYWORD2))
                else:
                    self._keywords.append((kw, HL_KEYWORD1))
            self._keywords.sort(key=lambda item: len(item[0]), reverse=True)

    @property
    def filetype(self) -> str | None:
        return self.syntax.filetype if self.syntax is not None else None

    def _match_keyword(self, text: str, at: int) -> tuple[int, int] | None:
        for token, mark in self._keywords:
            end = at + len(token)
            if text.startswith(token, at) and is_separator(text[end : end + 1]):
                return len(token), mark
        return None

    def classify(self, row: Row, in_comment: bool) -> None:
        row.carry_in = in_comment
        text = row.rendered
        hl = [HL_NORMAL] * len(text)
        syntax = self.syntax
        if syntax is None:
            row.highlight = hl
            row.comment_open = False
            return

        scs = syntax.singleline_comment_start
        mcs = syntax.multiline_comment_start
        mce = syntax.multiline_comment_end
        strings = bool(syntax.flags & HL_HIGHLIGHT_STRINGS)
        numbers = bool(syntax.flags & HL_HIGHLIGHT_NUMBERS)

        i = 0
        prev_sep = True
        quote = ""
        while i < len(text):
            ch = text[i]
            prev_hl = hl[i - 1] if i > 0 else HL_NORMAL

            if scs and not quote and not in_comment and text.startswith(scs, i):
                hl[i:] = [HL_COMMENT] * (len(text) - i)
                break

            if mcs and mce and not quote:
                if in_comment:
                    if text.startswith(mce, i):
                        hl[i : i + len(mce)] = [HL_MLCOMMENT] * len(mce)
                        i += len(mce)
                        in_comment = False
                        prev_sep = True
                        continue
                    hl[i] = HL_MLCOMMENT
                    i += 1
                    continue
                if text.startswith(mcs, i):
                    hl[i : i + len(mcs)] = [HL_MLCOMMENT] * len(mcs)
                    i += len(mcs)
                    in_comment = True
                    continue

            if strings:
                if quote:
                    hl[i] = HL_STRING
                    if ch == "\\" and i + 1 < len(text):
                        hl[i + 1] = HL_STRING
                        i += 2
                        continue
                    if ch == quote:
                        quote = ""
                    i += 1
                    prev_sep = True
                    continue
                if ch in ('"', "'"):
                    quote = ch
                    hl[i] = HL_STRING
                    i += 1
                    continue

            if numbers:
                if (is_digit(ch) and (prev_sep or prev_hl == HL_NUMBER)) or (
                    ch == "." and prev_hl == HL_NUMBER
                ):
                    hl[i] = HL_NUMBER
                    i += 1
                    prev_sep = False
                    continue

            if prev_sep:
                match = self._match_keyword(text, i)
                if match is not None:
                    klen, mark = match
                    hl[i : i + klen] = [mark] * klen
                    i += klen
                    prev_sep = False
                    continue

            prev_sep = is_separator(ch)
            i += 1

        row.highlight = hl
        row.comment_open = in_comment

    def update(self, rows: Sequence[Row], idx: int) -> int:
        visited = 0
        i = idx
        while i < len(rows):
            carry = i > 0 and rows[i - 1].comment_open
            self.classify(rows[i], carry)
            visited += 1
            i += 1
            if i >= len(rows) or rows[i].carry_in == rows[i - 1].comment_open:
                break
        return visited

    def refresh_from(self, rows: Sequence[Row], idx: int) -> int:
        if idx >= len(rows):
            return 0
        carry = idx > 0 and rows[idx - 1].comment_open
        if rows[idx].carry_in == carry:
            return 0
        return self.update(rows, idx)

    def update_all(self, rows: Sequence[Row]) -> None:
        carry = False
        for row in rows:
            self.classify(row, carry)
            carry = row.comment_open
