"""
文件路径：glyphwrap/processors/iterators.py

说明：把换行引擎的结果投影回原文的两种惰性迭代器。

- LineIterator：逐行产出可见文本切片（已去除行首/行尾空白）；
- PositionIterator：按原文顺序为每个字位簇产出一条落点记录，
  无字形的字位簇产出 UnknownPosition。

两者都只持有自身游标；对同一文本与策略重新构造即可得到相同序列。
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Deque, Union

from ..components.measure import Width
from .layout import LineBreaker, Placement

if TYPE_CHECKING:
    from ..word_wrapper import WrapPolicy


@dataclass(frozen=True)
class Position:
    """字位簇 `ch` 位于第 `line` 行，行内偏移 `offset`，自身宽度 `width`。"""

    ch: str
    line: int
    offset: Width
    width: Width

    is_known = True


@dataclass(frozen=True)
class UnknownPosition:
    """字体中没有 `ch` 的字形，仅携带字符本身。"""

    ch: str

    is_known = False


CharPosition = Union[Position, UnknownPosition]


class LineIterator:
    """逐行产出文本切片。"""

    def __init__(self, text: str, policy: "WrapPolicy"):
        self._text = text
        self._breaks = LineBreaker(text, policy.max_width, policy.measure)

    def __iter__(self) -> "LineIterator":
        return self

    def __next__(self) -> str:
        span = next(self._breaks)
        return self._text[span.start : span.end]

    def __repr__(self) -> str:
        return f"LineIterator(len(text)={len(self._text)})"


class PositionIterator:
    """逐字位簇产出 Position / UnknownPosition。"""

    def __init__(self, text: str, policy: "WrapPolicy"):
        self._text = text
        self._breaks = LineBreaker(text, policy.max_width, policy.measure)
        self._pending: Deque[Placement] = deque()

    def __iter__(self) -> "PositionIterator":
        return self

    def __next__(self) -> CharPosition:
        while not self._pending:
            span = next(self._breaks)
            self._pending.extend(span.placements)
        placement = self._pending.popleft()
        ch = self._text[placement.start : placement.end]
        if placement.width is None:
            return UnknownPosition(ch)
        return Position(ch, placement.line, placement.offset, placement.width)

    def __repr__(self) -> str:
        return f"PositionIterator(len(text)={len(self._text)})"


__all__ = [
    "Position",
    "UnknownPosition",
    "CharPosition",
    "LineIterator",
    "PositionIterator",
]
