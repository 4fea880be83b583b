"""Row column mapping, scrolling and status message tests."""

from __future__ import annotations

import pytest

from termedit.document import Document
from termedit.models import Row, StatusMessage, ViewState, expand_tabs


class TestTabExpansion:
    def test_expand_to_next_stop(self):
        assert expand_tabs("\tx") == " " * 8 + "x"
        assert expand_tabs("ab\tc") == "ab" + " " * 6 + "c"
        assert expand_tabs("12345678\t") == "12345678" + " " * 8

    def test_custom_tab_stop(self):
        assert expand_tabs("a\tb", tab_stop=4) == "a   b"

    def test_update_render(self):
        row = Row(idx=0, raw="\tint")
        row.update_render()
        assert row.rendered == "        int"


class TestColumnMapping:
    def test_cx_to_rx(self):
        row = Row(idx=0, raw="a\tb")
        assert row.cx_to_rx(0) == 0
        assert row.cx_to_rx(1) == 1
        assert row.cx_to_rx(2) == 8
        assert row.cx_to_rx(3) == 9

    def test_rx_to_cx_inside_tab(self):
        row = Row(idx=0, raw="a\tb")
        assert row.rx_to_cx(4) == 1
        assert row.rx_to_cx(8) == 2

    def test_rx_past_end(self):
        row = Row(idx=0, raw="ab")
        assert row.rx_to_cx(10) == 2

    @pytest.mark.parametrize(
        "raw",
        ["", "abc", "\t", "\t\t", "a\tb\tc", "abcdefgh\ti", "\tabc\t\tdef", "xyzxyzx\t\tq"],
    )
    def test_round_trip(self, raw):
        row = Row(idx=0, raw=raw)
        for c in range(len(raw) + 1):
            rx = row.cx_to_rx(c)
            assert row.cx_to_rx(row.rx_to_cx(rx)) == rx


class TestScroll:
    def make(self, lines):
        doc = Document()
        doc.load(lines)
        return doc

    def test_snaps_down_to_last_visible_row(self):
        doc = self.make([str(i) for i in range(50)])
        view = ViewState(cy=30, screenrows=10, screencols=80)
        view.scroll(doc)
        assert view.rowoff == 21

    def test_snaps_up(self):
        doc = self.make([str(i) for i in range(50)])
        view = ViewState(cy=5, rowoff=20, screenrows=10, screencols=80)
        view.scroll(doc)
        assert view.rowoff == 5

    def test_horizontal_uses_render_column(self):
        doc = self.make(["\t\t\tabc"])
        view = ViewState(cx=3, cy=0, screenrows=10, screencols=10)
        view.scroll(doc)
        assert view.rx == 24
        assert view.coloff == 15

    def test_horizontal_snap_left(self):
        doc = self.make(["abcdef"])
        view = ViewState(cx=1, coloff=4, screenrows=10, screencols=10)
        view.scroll(doc)
        assert view.coloff == 1

    def test_cursor_past_last_row(self):
        doc = self.make(["abc"])
        view = ViewState(cx=0, cy=1, screenrows=10, screencols=10)
        view.scroll(doc)
        assert view.rx == 0
        assert view.rowoff == 0


class TestStatusMessage:
    def test_visible_until_expiry(self):
        msg = StatusMessage()
        msg.set("saved %d", 3, now=100.0)
        assert msg.visible(now=104.9) == "saved 3"
        assert msg.visible(now=105.0) == ""

    def test_plain_format_string_kept(self):
        msg = StatusMessage()
        msg.set("100%", now=0.0)
        assert msg.text == "100%"
