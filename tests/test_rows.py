"""Tests for termedit.rows -- tab expansion, insertion and coordinate mapping."""

from __future__ import annotations

import pytest

from termedit.rows import Row, RowStore, cx_to_rx, expand_tabs


# ---------------------------------------------------------------------------
# expand_tabs
# ---------------------------------------------------------------------------


class TestExpandTabs:
    def test_no_tabs_is_identity(self) -> None:
        assert expand_tabs(b"hello world") == b"hello world"

    def test_tab_at_column_zero_fills_to_eight(self) -> None:
        assert expand_tabs(b"\tx") == b" " * 8 + b"x"

    def test_tab_mid_stop_fills_to_next_stop(self) -> None:
        assert expand_tabs(b"ab\tc") == b"ab      c"

    def test_tab_on_stop_advances_full_width(self) -> None:
        assert expand_tabs(b"12345678\tx") == b"12345678" + b" " * 8 + b"x"

    def test_consecutive_tabs(self) -> None:
        assert expand_tabs(b"\t\t") == b" " * 16

    def test_custom_tab_stop(self) -> None:
        assert expand_tabs(b"a\tb", tab_stop=4) == b"a   b"

    def test_empty(self) -> None:
        assert expand_tabs(b"") == b""


# ---------------------------------------------------------------------------
# cx_to_rx
# ---------------------------------------------------------------------------


class TestCxToRx:
    def test_without_tabs_rx_equals_cx(self) -> None:
        chars = b"plain text"
        for cx in range(len(chars) + 1):
            assert cx_to_rx(chars, cx) == cx

    @pytest.mark.parametrize(
        ("chars", "expected"),
        [
            (b"\t", 8),
            (b"12345\t", 8),
            (b"12345678\t", 16),
        ],
    )
    def test_tab_advances_to_multiple_of_eight(self, chars: bytes, expected: int) -> None:
        assert cx_to_rx(chars, len(chars)) == expected

    def test_is_non_decreasing(self) -> None:
        chars = b"a\tbc\t\td\te"
        values = [cx_to_rx(chars, cx) for cx in range(len(chars) + 1)]
        assert values == sorted(values)

    def test_matches_render_length(self) -> None:
        chars = b"x\ty\t\tz"
        assert cx_to_rx(chars, len(chars)) == len(expand_tabs(chars))

    def test_cx_zero_is_zero(self) -> None:
        assert cx_to_rx(b"\tabc", 0) == 0


# ---------------------------------------------------------------------------
# Row
# ---------------------------------------------------------------------------


class TestRow:
    def test_defaults_are_empty(self) -> None:
        row = Row()
        assert row.size == 0
        assert row.rsize == 0

    def test_sizes_track_contents(self) -> None:
        row = Row(chars=bytearray(b"a\tb"), render=b"a       b")
        assert row.size == 3
        assert row.rsize == 9


# ---------------------------------------------------------------------------
# RowStore
# ---------------------------------------------------------------------------


class TestRowStoreAppend:
    def test_starts_empty(self) -> None:
        store = RowStore()
        assert store.numrows == 0
        assert len(store) == 0

    def test_append_returns_index_and_renders(self) -> None:
        store = RowStore()
        assert store.append_row(b"ab\tc") == 0
        assert store.append_row(b"") == 1
        assert store.numrows == 2
        assert store[0].size == 4
        assert store[0].rsize == 9
        assert store[0].render == b"ab      c"
        assert store[1].render == b""

    def test_append_copies_input(self) -> None:
        store = RowStore()
        text = bytearray(b"abc")
        store.append_row(text)
        text[0] = ord("z")
        assert bytes(store[0].chars) == b"abc"

    def test_iterates_in_document_order(self) -> None:
        store = RowStore()
        for line in (b"one", b"two", b"three"):
            store.append_row(line)
        assert [bytes(r.chars) for r in store] == [b"one", b"two", b"three"]

    def test_uses_store_tab_stop(self) -> None:
        store = RowStore(tab_stop=4)
        store.append_row(b"\tx")
        assert store[0].render == b"    x"
        assert store.cx_to_rx(0, 1) == 4


class TestRowInsertChar:
    def test_insert_preserves_neighbors(self) -> None:
        original = b"abcdef"
        for k in range(len(original) + 1):
            store = RowStore()
            store.append_row(original)
            store.row_insert_char(0, k, ord("X"))
            chars = bytes(store[0].chars)
            assert len(chars) == len(original) + 1
            assert chars[:k] == original[:k]
            assert chars[k] == ord("X")
            assert chars[k + 1 :] == original[k:]

    def test_insert_recomputes_render(self) -> None:
        store = RowStore()
        store.append_row(b"ab")
        store.row_insert_char(0, 1, ord("\t"))
        assert store[0].render == b"a       b"
        assert store[0].rsize == 9

    def test_offset_past_end_clamps_to_end(self) -> None:
        store = RowStore()
        store.append_row(b"ab")
        store.row_insert_char(0, 99, ord("c"))
        assert bytes(store[0].chars) == b"abc"

    def test_negative_offset_clamps_to_start(self) -> None:
        store = RowStore()
        store.append_row(b"ab")
        store.row_insert_char(0, -3, ord("c"))
        assert bytes(store[0].chars) == b"cab"


class TestRowStoreQueries:
    def test_row_size_of_virtual_row_is_zero(self) -> None:
        store = RowStore()
        store.append_row(b"abc")
        assert store.row_size(0) == 3
        assert store.row_size(1) == 0

    def test_update_render_after_direct_change(self) -> None:
        store = RowStore()
        store.append_row(b"abc")
        store[0].chars[1:2] = b"\t"
        store.update_render(0)
        assert store[0].render == b"a       c"
