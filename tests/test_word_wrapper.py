from __future__ import annotations

import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from itertools import groupby

import pytest

from glyphwrap import (
    FixedWidthMeasure,
    Position,
    ReportLabMeasure,
    TableMeasure,
    UnknownPosition,
    WrapPolicy,
    configure_logging,
    wrap,
    wrap_lines,
    wrap_positions,
    wrap_with_position,
)
from glyphwrap.components import segment_graphemes
from glyphwrap.processors import compute_line_breaks

MARY = "Mary had a little lamb whose fleece was white as snow"

SAMPLES = [
    "",
    "   ",
    "\n",
    MARY,
    "The nethermost caverns are not for the fathoming of eyes that see;\r\n"
    "for their marvels are strange and terrific.",
    "supercalifragilisticexpialidocious is long",
    "y̆y̆y̆ ééé 👩\u200d👩\u200d👧 测试文本",
    "  leading\n\n  trailing  \n",
    "a\tb\u3000c\xa0d",
]


@pytest.fixture
def proportional():
    # 窄字母、宽字母与中文宽度不同，模拟比例字体
    widths = {c: 300 for c in "iljt.,;:'"}
    widths.update({c: 900 for c in "mwMW"})
    widths.update({" ": 250, "\t": 250})
    return TableMeasure(widths, default=550)


class TestScenarios:
    def test_mary_first_line(self):
        # 每个字符 900：前 22 个字符为 19800<=20000，再加 " whose" 超出
        policy = WrapPolicy(20000, FixedWidthMeasure(900))
        assert wrap_lines(MARY, policy) == [
            "Mary had a little lamb",
            "whose fleece was white",
            "as snow",
        ]

    def test_mary_first_line_with_helvetica(self):
        # Helvetica："Mary had a little lamb"=9503，再加空格与 "whose" 超过 10000
        policy = WrapPolicy(10000, ReportLabMeasure("Helvetica"))
        assert next(wrap(MARY, policy)) == "Mary had a little lamb"

    def test_y_breve_is_one_position(self):
        policy = WrapPolicy(1000, TableMeasure({"y": 500}))
        assert wrap_positions("y̆", policy) == [Position("y̆", 0, 0, 500)]

    def test_over_wide_word_is_split(self, unit_measure):
        policy = WrapPolicy(4, unit_measure)
        assert wrap_lines("1234567890", policy) == ["1234", "5678", "90"]

    def test_empty_input(self, unit_measure):
        policy = WrapPolicy(10, unit_measure)
        assert wrap_lines("", policy) == []
        assert wrap_positions("", policy) == []

    def test_missing_glyph(self):
        policy = WrapPolicy(3, FixedWidthMeasure(1, missing={"☃"}))
        assert wrap_lines("a☃b cd", policy) == ["a☃b", "cd"]
        assert wrap_positions("a☃b", policy) == [
            Position("a", 0, 0, 1),
            UnknownPosition("☃"),
            Position("b", 0, 1, 1),
        ]

    def test_missing_glyph_with_real_font(self):
        policy = WrapPolicy(10000, ReportLabMeasure("Helvetica"))
        positions = wrap_positions("a测b", policy)
        assert positions[1] == UnknownPosition("测")
        assert positions[2].offset == 556


class TestPositions:
    def test_offsets_and_lines(self, unit_measure):
        policy = WrapPolicy(3, unit_measure)
        assert wrap_positions("ab cd", policy) == [
            Position("a", 0, 0, 1),
            Position("b", 0, 1, 1),
            Position(" ", 0, 2, 1),
            Position("c", 1, 0, 1),
            Position("d", 1, 1, 1),
        ]

    def test_whitespace_straddling_break_stays_on_previous_line(self, unit_measure):
        positions = wrap_positions("hello world", WrapPolicy(5, unit_measure))
        assert positions[5] == Position(" ", 0, 5, 1)
        assert positions[6] == Position("w", 1, 0, 1)

    def test_newline_sits_at_end_of_its_line(self, unit_measure):
        assert wrap_positions("a\nb", WrapPolicy(5, unit_measure)) == [
            Position("a", 0, 0, 1),
            Position("\n", 0, 1, 1),
            Position("b", 1, 0, 1),
        ]

    def test_crlf_is_one_record(self):
        policy = WrapPolicy(5, FixedWidthMeasure(1, missing={"\r\n"}))
        assert wrap_positions("a\r\nb", policy) == [
            Position("a", 0, 0, 1),
            UnknownPosition("\r\n"),
            Position("b", 1, 0, 1),
        ]

    def test_leading_whitespace_does_not_advance(self, unit_measure):
        assert wrap_positions("  a", WrapPolicy(5, unit_measure)) == [
            Position(" ", 0, 0, 1),
            Position(" ", 0, 0, 1),
            Position("a", 0, 0, 1),
        ]

    def test_is_known_flag(self):
        policy = WrapPolicy(3, FixedWidthMeasure(1, missing={"☃"}))
        assert [p.is_known for p in wrap_positions("a☃", policy)] == [True, False]

    def test_split_word_offsets_restart_on_each_line(self, unit_measure):
        # "abcdefg" 宽 7 > 3：拆成 "abc" / "def" / "g"，每行偏移从 0 开始
        positions = wrap_positions("abcdefg", WrapPolicy(3, unit_measure))
        assert [(p.ch, p.line, p.offset) for p in positions] == [
            ("a", 0, 0),
            ("b", 0, 1),
            ("c", 0, 2),
            ("d", 1, 0),
            ("e", 1, 1),
            ("f", 1, 2),
            ("g", 2, 0),
        ]

    def test_split_word_after_content_starts_fresh_line(self, unit_measure):
        positions = wrap_positions("x abcd", WrapPolicy(3, unit_measure))
        assert [(p.ch, p.line, p.offset) for p in positions] == [
            ("x", 0, 0),
            (" ", 0, 1),
            ("a", 1, 0),
            ("b", 1, 1),
            ("c", 1, 2),
            ("d", 2, 0),
        ]


class TestProperties:
    @pytest.mark.parametrize("text", SAMPLES)
    @pytest.mark.parametrize("max_width", [0, 1000, 5000, 20000])
    def test_coverage(self, text, max_width, proportional):
        policy = WrapPolicy(max_width, proportional)
        assert "".join(p.ch for p in wrap_with_position(text, policy)) == text

    @pytest.mark.parametrize("text", SAMPLES)
    @pytest.mark.parametrize("max_width", [0, 1000, 5000, 20000])
    def test_no_line_exceeds_width(self, text, max_width, proportional):
        for line in wrap(text, WrapPolicy(max_width, proportional)):
            if proportional.measure_text(line) > max_width:
                # 只有单个超宽字位簇可以越界
                assert len(list(segment_graphemes(line))) == 1

    @pytest.mark.parametrize("text", SAMPLES)
    @pytest.mark.parametrize("max_width", [0, 1000, 5000])
    def test_breaks_fall_on_grapheme_boundaries(self, text, max_width, proportional):
        boundaries = {0, len(text)} | {g.end for g in segment_graphemes(text)}
        for span in compute_line_breaks(text, max_width, proportional):
            assert span.start in boundaries
            assert span.end in boundaries

    @pytest.mark.parametrize("text", SAMPLES)
    @pytest.mark.parametrize("max_width", [0, 1000, 5000, 20000])
    def test_offsets_non_decreasing_within_line(self, text, max_width, proportional):
        known = [p for p in wrap_with_position(text, WrapPolicy(max_width, proportional)) if p.is_known]
        for _, group in groupby(known, key=lambda p: p.line):
            offsets = [p.offset for p in group]
            assert offsets == sorted(offsets)

    @pytest.mark.parametrize("max_width", [1000, 5000, 8000, 20000])
    def test_idempotent(self, max_width, proportional):
        policy = WrapPolicy(max_width, proportional)
        lines = wrap_lines(MARY, policy)
        assert wrap_lines(" ".join(lines), policy) == lines

    def test_one_record_per_grapheme(self, proportional):
        text = SAMPLES[6]
        records = wrap_positions(text, WrapPolicy(1000, proportional))
        assert len(records) == len(list(segment_graphemes(text)))


class TestPolicy:
    def test_restartable(self, proportional):
        policy = WrapPolicy(5000, proportional)
        assert list(wrap(MARY, policy)) == list(wrap(MARY, policy))
        assert list(policy.wrap(MARY)) == wrap_lines(MARY, policy)
        assert list(policy.positions(MARY)) == wrap_positions(MARY, policy)

    def test_iterator_protocol(self, unit_measure):
        lines = wrap("ab cd", WrapPolicy(2, unit_measure))
        assert iter(lines) is lines
        assert next(lines) == "ab"
        assert next(lines) == "cd"
        with pytest.raises(StopIteration):
            next(lines)

    def test_frozen(self, unit_measure):
        policy = WrapPolicy(10, unit_measure)
        with pytest.raises(dataclasses.FrozenInstanceError):
            policy.max_width = 20

    def test_invalid_policy(self, unit_measure):
        with pytest.raises(ValueError, match=r"^\[2001\]"):
            WrapPolicy(-5, unit_measure)
        with pytest.raises(TypeError, match=r"^\[2002\]"):
            WrapPolicy(10, "not a measure")

    def test_invalid_text(self, unit_measure):
        with pytest.raises(TypeError, match=r"^\[3001\]"):
            wrap(None, WrapPolicy(10, unit_measure))

    def test_shared_between_threads(self, proportional):
        policy = WrapPolicy(5000, proportional)
        expected = wrap_lines(MARY, policy)
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: wrap_lines(MARY, policy), range(16)))
        assert all(r == expected for r in results)


class TestLogging:
    def test_split_is_logged_at_debug(self, unit_measure, caplog):
        caplog.set_level(logging.DEBUG, logger="glyphwrap")
        wrap_lines("abcdefgh", WrapPolicy(3, unit_measure))
        assert any("按字位簇拆分" in r.getMessage() for r in caplog.records)

    def test_library_is_silent_by_default(self):
        handlers = logging.getLogger("glyphwrap").handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)

    def test_configure_logging_sets_package_level(self):
        package_logger = logging.getLogger("glyphwrap")
        previous = package_logger.level
        try:
            configure_logging(level=logging.DEBUG)
            assert package_logger.isEnabledFor(logging.DEBUG)
        finally:
            package_logger.setLevel(previous)
