from __future__ import annotations

import pytest

from glyphwrap.components import (
    CellMeasure,
    FixedWidthMeasure,
    Measure,
    TableMeasure,
    checked_width,
)


class TestTableMeasure:
    def test_lookup_single_chars(self):
        m = TableMeasure({"a": 500, "b": 600})
        assert m.measure("a") == 500
        assert m.measure("b") == 600

    def test_missing_base_is_unknown(self):
        m = TableMeasure({"a": 500})
        assert m.measure("z") is None

    def test_default_width_for_missing(self):
        m = TableMeasure({"a": 500}, default=100)
        assert m.measure("z") == 100

    def test_whole_grapheme_entry_wins(self):
        m = TableMeasure({"y̆": 700, "y": 500, "\u0306": 0})
        assert m.measure("y̆") == 700

    def test_grapheme_sums_code_points_and_ignores_missing_marks(self):
        # y=500，组合符缺失按 0 计
        m = TableMeasure({"y": 500})
        assert m.measure("y̆") == 500
        m2 = TableMeasure({"y": 500, "\u0306": 20})
        assert m2.measure("y̆") == 520

    def test_measure_text_treats_unknown_as_zero(self):
        m = TableMeasure({"a": 500, " ": 250})
        # "a a?" -> 500 + 250 + 500 + 0
        assert m.measure_text("a a?") == 1250


class TestFixedWidthMeasure:
    def test_every_grapheme_same_width(self):
        m = FixedWidthMeasure(3)
        assert m.measure("a") == 3
        assert m.measure("y̆") == 3
        assert m.measure_text("y̆y̆") == 6

    def test_missing(self):
        m = FixedWidthMeasure(3, missing={"☃"})
        assert m.measure("☃") is None
        assert m.measure("a") == 3


class TestCellMeasure:
    def test_narrow_and_wide(self):
        m = CellMeasure()
        assert m.measure("a") == 1
        assert m.measure("测") == 2

    def test_combining_sequence_is_one_cell(self):
        assert CellMeasure().measure("e\u0301") == 1

    def test_control_char_is_unknown(self):
        assert CellMeasure().measure("\x1b") is None


class TestCheckedWidth:
    def test_passes_valid_values(self):
        assert checked_width(None, "a") is None
        assert checked_width(0, "a") == 0
        assert checked_width(12.5, "a") == 12.5

    @pytest.mark.parametrize("bad", [-1, float("nan"), "12", True])
    def test_rejects_invalid(self, bad):
        with pytest.raises(ValueError, match=r"^\[3002\]"):
            checked_width(bad, "a")


def test_measure_is_abstract():
    with pytest.raises(TypeError):
        Measure()
