"""
Unit tests for run_py_cli/tui/cursor.py

Coverage plan
─────────────
advance / retreat     → 6 tests (step, wrap both ways, inverse, empty, unset)
clamp_after_removal   → 4 tests
clamp                 → 3 tests
"""

import pytest


def _cursor(index=0):
    from run_py_cli.tui.cursor import SelectionCursor
    return SelectionCursor(index)


class TestNavigation:

    def test_advance_moves_down_one(self):
        c = _cursor(0)
        c.advance(3)
        assert c.selected == 1

    def test_advance_from_last_wraps_to_zero(self):
        c = _cursor(2)
        c.advance(3)
        assert c.selected == 0

    def test_retreat_from_zero_wraps_to_last(self):
        c = _cursor(0)
        c.retreat(4)
        assert c.selected == 3

    @pytest.mark.parametrize("length", [1, 2, 5])
    def test_advance_then_retreat_is_identity(self, length):
        for start in range(length):
            c = _cursor(start)
            c.advance(length)
            c.retreat(length)
            assert c.selected == start
            c.retreat(length)
            c.advance(length)
            assert c.selected == start

    def test_zero_length_means_nothing_selected(self):
        c = _cursor(1)
        c.advance(0)
        assert c.selected is None
        c = _cursor(1)
        c.retreat(0)
        assert c.selected is None

    def test_unset_cursor_stays_unset(self):
        c = _cursor(None)
        c.advance(3)
        c.retreat(3)
        assert c.selected is None


class TestClampAfterRemoval:

    def test_removing_middle_selects_previous(self):
        c = _cursor(1)
        c.clamp_after_removal(1, 2)
        assert c.selected == 0

    def test_removing_first_stays_at_zero(self):
        c = _cursor(0)
        c.clamp_after_removal(0, 4)
        assert c.selected == 0

    def test_removing_last_selects_new_last(self):
        c = _cursor(4)
        c.clamp_after_removal(4, 4)
        assert c.selected == 3

    def test_empty_after_removal_unsets(self):
        c = _cursor(0)
        c.clamp_after_removal(0, 0)
        assert c.selected is None


class TestClamp:

    def test_stale_index_pulled_to_last(self):
        c = _cursor(7)
        c.clamp(3)
        assert c.selected == 2

    def test_unset_with_records_selects_first(self):
        c = _cursor(None)
        c.clamp(2)
        assert c.selected == 0

    def test_reset_selects_first(self):
        c = _cursor(5)
        c.reset()
        assert c.selected == 0
