"""Prompt and incremental search tests."""

from __future__ import annotations

from termedit.constants import ARROW_DOWN, ESC, HL_MATCH, HL_NORMAL
from termedit.search import SearchController, prompt

LINES = ["alpha", "needle here", "gamma", "delta"]


class TestPrompt:
    def test_accumulates_and_confirms(self, make_editor):
        editor = make_editor(keys=b"ab\x7fc\r")
        assert prompt(editor, "Q: %s") == "ac"
        assert editor.message.text == ""

    def test_backspace_on_empty_input(self, make_editor):
        editor = make_editor(keys=b"\x7fx\r")
        assert prompt(editor, "Q: %s") == "x"

    def test_enter_ignored_while_empty(self, make_editor):
        editor = make_editor(keys=b"\rz\r")
        assert prompt(editor, "Q: %s") == "z"

    def test_escape_aborts(self, make_editor):
        editor = make_editor(keys=b"ab\x1b")
        assert prompt(editor, "Q: %s") is None
        assert editor.message.text == ""

    def test_only_printable_ascii_appended(self, make_editor):
        editor = make_editor(keys=b"a\x01\t\xe9b\x1b[A\r")
        assert prompt(editor, "Q: %s") == "ab"

    def test_callback_after_every_key(self, make_editor):
        calls: list[tuple[str, int]] = []
        editor = make_editor(keys=b"ab\r")
        prompt(editor, "Q: %s", lambda query, key: calls.append((query, key)))
        assert calls == [("a", ord("a")), ("ab", ord("b")), ("ab", 13)]

    def test_long_input_is_kept_whole(self, make_editor):
        name = "d/" * 140 + "f.c"
        editor = make_editor(keys=name.encode() + b"\r")
        assert prompt(editor, "Save as: %s (ESC to cancel)") == name

    def test_prompt_is_painted(self, make_editor):
        editor = make_editor(keys=b"ab\r")
        prompt(editor, "Find: %s")
        assert any(b"Find: ab" in frame for frame in editor.sink.frames)


class TestSearchController:
    def test_forward_scan_wraps_past_end(self, make_editor):
        editor = make_editor(LINES)
        editor.view.cy = 2
        controller = SearchController(editor)
        controller.on_key("needle", ord("e"))
        assert (editor.view.cy, editor.view.cx) == (1, 0)

    def test_match_maps_render_column_to_cursor(self, make_editor):
        editor = make_editor(["\tkey = 1"])
        SearchController(editor).on_key("key", ord("y"))
        assert editor.view.cx == 1

    def test_overlay_applied_and_restored(self, make_editor):
        editor = make_editor(["x foo", "foo y"], path="a.c")
        before = list(editor.document.rows[0].highlight)
        controller = SearchController(editor)

        controller.on_key("foo", ord("o"))
        assert editor.document.rows[0].highlight[2:5] == [HL_MATCH] * 3

        controller.on_key("foo", ARROW_DOWN)
        assert editor.document.rows[0].highlight == before
        assert editor.document.rows[1].highlight[:3] == [HL_MATCH] * 3

        controller.on_key("foo", ESC)
        assert all(HL_MATCH not in row.highlight for row in editor.document.rows)
        assert controller.last_match == -1

    def test_no_match_leaves_cursor(self, make_editor):
        editor = make_editor(LINES)
        editor.view.cy = 3
        assert SearchController(editor).find_next("zzz") is False
        assert editor.view.cy == 3

    def test_empty_query_does_not_move(self, make_editor):
        editor = make_editor(LINES)
        editor.view.cy = 2
        SearchController(editor).on_key("", 127)
        assert editor.view.cy == 2


class TestFind:
    def test_arrows_cycle_matches(self, make_editor):
        editor = make_editor(["x foo", "foo y", "z"], keys=b"\x06foo\x1b[B\x1b[B\r")
        editor.process_keypress()
        assert (editor.view.cy, editor.view.cx) == (0, 2)

    def test_up_searches_backwards(self, make_editor):
        editor = make_editor(["x foo", "foo y", "z"], keys=b"\x06foo\x1b[A\r")
        editor.process_keypress()
        assert (editor.view.cy, editor.view.cx) == (1, 0)

    def test_confirm_keeps_cursor_at_match(self, make_editor):
        editor = make_editor(LINES, keys=b"\x06gam\r")
        editor.process_keypress()
        assert editor.view.cy == 2
        assert all(HL_MATCH not in row.highlight for row in editor.document.rows)

    def test_cancel_restores_cursor_and_scroll(self, make_editor):
        editor = make_editor(LINES, keys=b"\x06needle\x1b")
        editor.view.cy = 3
        editor.view.cx = 2
        editor.view.rowoff = 1
        editor.process_keypress()
        assert (editor.view.cx, editor.view.cy, editor.view.rowoff) == (2, 3, 1)
        assert all(HL_MATCH not in row.highlight for row in editor.document.rows)
        assert editor.document.rows[1].highlight == [HL_NORMAL] * len("needle here")

    def test_next_search_starts_clean(self, make_editor):
        editor = make_editor(LINES, keys=b"\x06delta\r\x06alpha\r")
        editor.process_keypress()
        assert editor.view.cy == 3
        editor.process_keypress()
        assert editor.view.cy == 0
