"""
文件路径：glyphwrap/processors/layout.py

说明：贪心换行引擎。

按 Token 顺序单遍扫描（迭代实现，不递归），逐行产出 `LineSpan`：
- 换行 Token：结束当前行（去除行尾空白），换行符自身宽度不计入；
- 行首空白：丢弃，不可见、不占宽，但仍记录在该行的字位簇落点中；
- 单词或行内空白：放得下则追加；放不下且当前行已有内容则换行后重试；
  当前行为空仍放不下（超宽单词）则按字位簇边界拆分，尽量装满每一行；
  单个字位簇本身超宽时独占一行；
- 跨越软换行的空白归属于它结束的那一行：不可见、不计入该行可见宽度，
  也不会开启下一行。

每个字位簇都会落到恰好一行上（`Placement`），位置迭代器据此输出逐字符记录。
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from numbers import Real
from typing import Deque, Iterator, List, Optional, Sequence, Tuple

from ..components import ErrorHandler, get_logger
from ..components.measure import Measure, Width, checked_width
from ..components.text import Grapheme, Token, tokenize
from ..variables import ERR_INVALID_MAX_WIDTH, ERR_INVALID_MEASURE, ERR_INVALID_TEXT


logger = get_logger(__name__)


@dataclass(frozen=True)
class Placement:
    """一个字位簇的落点：所在行、行内偏移与自身宽度（None 表示无字形）。"""

    start: int
    end: int
    line: int
    offset: Width
    width: Optional[Width]


@dataclass(frozen=True)
class LineSpan:
    """一行的可见区间 [start, end)、可见宽度，以及归属该行的全部字位簇落点。

    `forced` 为 True 表示该行由显式换行结束。
    """

    index: int
    start: int
    end: int
    width: Width
    forced: bool
    placements: Tuple[Placement, ...]


def validate_max_width(max_width: Width) -> Width:
    """校验最大行宽：必须是非负、有限的数值。"""
    if (
        isinstance(max_width, bool)
        or not isinstance(max_width, Real)
        or math.isnan(max_width)
        or math.isinf(max_width)
        or max_width < 0
    ):
        raise ValueError(
            ErrorHandler.format_error(ERR_INVALID_MAX_WIDTH, f"最大行宽非法: {max_width!r}")
        )
    return max_width


def validate_measure(measure: Measure) -> Measure:
    if not isinstance(measure, Measure):
        raise TypeError(
            ErrorHandler.format_error(
                ERR_INVALID_MEASURE, f"度量对象必须实现 Measure 接口: {type(measure).__name__}"
            )
        )
    return measure


def validate_text(text: str) -> str:
    if not isinstance(text, str):
        raise TypeError(
            ErrorHandler.format_error(ERR_INVALID_TEXT, f"输入文本必须是 str: {type(text).__name__}")
        )
    return text


class _PendingLine:
    """正在填充的行。`cursor` 为已放置字位簇的累计宽度（含行内空白）。"""

    def __init__(self, index: int, start: int):
        self.index = index
        self.start = start
        self.placements: List[Placement] = []
        self.cursor: Width = 0
        self.visible_start: Optional[int] = None
        self.visible_end: Optional[int] = None
        self.visible_width: Width = 0
        # 已有空白越过行宽：下一个单词必须换行
        self.full = False

    @property
    def has_content(self) -> bool:
        return self.visible_end is not None

    def place(self, g: Grapheme, width: Optional[Width], *, visible: bool, advance: bool = True) -> None:
        self.placements.append(Placement(g.start, g.end, self.index, self.cursor, width))
        if advance and width is not None:
            self.cursor += width
        if visible:
            if self.visible_start is None:
                self.visible_start = g.start
            self.visible_end = g.end
            self.visible_width = self.cursor


class LineBreaker:
    """换行迭代器：每次 `next()` 产出一行 `LineSpan`。

    只在调用方请求下一行时才继续消费 Token；一个 Token 可能一次结束多行
    （超宽单词拆分），多出的行暂存在队列中依次返回。
    """

    def __init__(self, text: str, max_width: Width, measure: Measure):
        self._text = validate_text(text)
        self._max_width = validate_max_width(max_width)
        self._measure = validate_measure(measure)
        self._tokens: Iterator[Token] = tokenize(text)
        self._ready: Deque[LineSpan] = deque()
        self._line = _PendingLine(0, 0)
        self._done = False

    def __iter__(self) -> "LineBreaker":
        return self

    def __next__(self) -> LineSpan:
        while not self._ready:
            if self._done:
                raise StopIteration
            token = next(self._tokens, None)
            if token is None:
                self._done = True
                if self._line.placements:
                    self._flush(forced=False)
                continue
            self._place_token(token)
        return self._ready.popleft()

    # -----------------------------
    # Token 放置
    # -----------------------------
    def _widths(self, token: Token) -> List[Optional[Width]]:
        return [checked_width(self._measure.measure(g.text), g.text) for g in token.graphemes]

    def _place_token(self, token: Token) -> None:
        widths = self._widths(token)
        line = self._line

        if token.is_newline:
            line.place(token.graphemes[0], widths[0], visible=False, advance=False)
            self._flush(forced=True)
            return

        total = sum(w for w in widths if w is not None)

        if token.is_whitespace:
            if not line.has_content:
                for g, w in zip(token.graphemes, widths):
                    line.place(g, w, visible=False, advance=False)
                return
            if line.full or line.cursor + total > self._max_width:
                line.full = True
            for g, w in zip(token.graphemes, widths):
                line.place(g, w, visible=False)
            return

        if not line.full and line.cursor + total <= self._max_width:
            self._place_word(token.graphemes, widths)
            return

        if line.has_content:
            self._flush(forced=False)
            if total <= self._max_width:
                self._place_word(token.graphemes, widths)
                return

        self._split_word(token, widths)

    def _place_word(self, graphemes: Sequence[Grapheme], widths: Sequence[Optional[Width]]) -> None:
        line = self._line
        for g, w in zip(graphemes, widths):
            line.place(g, w, visible=True)

    def _split_word(self, token: Token, widths: Sequence[Optional[Width]]) -> None:
        """超宽单词：按字位簇边界贪心装行，单个超宽字位簇独占一行。"""
        logger.debug(
            "单词超出最大行宽，按字位簇拆分：[%s, %s) max_width=%s",
            token.start,
            token.end,
            self._max_width,
        )
        for g, w in zip(token.graphemes, widths):
            width = w if w is not None else 0
            if self._line.has_content and self._line.cursor + width > self._max_width:
                self._flush(forced=False)
            if width > self._max_width:
                logger.debug("字位簇 %r 宽度 %s 超过最大行宽 %s，独占一行", g.text, width, self._max_width)
            self._line.place(g, w, visible=True)

    def _flush(self, *, forced: bool) -> None:
        line = self._line
        if line.has_content:
            start, end = line.visible_start, line.visible_end
        else:
            start = end = line.placements[0].start if line.placements else line.start
        self._ready.append(
            LineSpan(
                index=line.index,
                start=start,
                end=end,
                width=line.visible_width,
                forced=forced,
                placements=tuple(line.placements),
            )
        )
        next_start = line.placements[-1].end if line.placements else line.start
        self._line = _PendingLine(line.index + 1, next_start)


def compute_line_breaks(text: str, max_width: Width, measure: Measure) -> LineBreaker:
    """计算换行位置，返回惰性的 `LineSpan` 迭代器。"""
    return LineBreaker(text, max_width, measure)


__all__ = [
    "Placement",
    "LineSpan",
    "LineBreaker",
    "compute_line_breaks",
    "validate_max_width",
    "validate_measure",
    "validate_text",
]
