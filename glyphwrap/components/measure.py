"""
文件路径：glyphwrap/components/measure.py

说明：宽度度量接口 `Measure` 与不依赖字体文件的通用实现。

- `measure(grapheme)` 返回单个字位簇的显示宽度；字体中没有对应字形时返回 None，
  由换行引擎按 0 宽参与排版，并在位置输出中标记为“未知”。
- 实现必须表现为纯函数：同一输入永远得到同一结果，内部缓存对调用方不可见。
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from numbers import Real
from typing import Iterable, Mapping, Optional, Union

from wcwidth import wcswidth

from . import ErrorHandler
from ..variables import ERR_INVALID_WIDTH
from .text import segment_graphemes


Width = Union[int, float]


def checked_width(width: Optional[Width], grapheme: str) -> Optional[Width]:
    """校验度量结果：None 原样返回，负数/NaN/非数值抛出 ValueError。"""
    if width is None:
        return None
    if isinstance(width, bool) or not isinstance(width, Real) or math.isnan(width) or width < 0:
        raise ValueError(
            ErrorHandler.format_error(
                ERR_INVALID_WIDTH, f"字位簇 {grapheme!r} 的宽度非法: {width!r}"
            )
        )
    return width


class Measure(ABC):
    """单个字位簇的宽度度量能力。"""

    @abstractmethod
    def measure(self, grapheme: str) -> Optional[Width]:
        """返回 `grapheme` 的显示宽度；无对应字形时返回 None。"""

    def measure_text(self, text: str) -> Width:
        """按字位簇累加整段文本宽度，未知字形按 0 计。"""
        total: Width = 0
        for g in segment_graphemes(text):
            width = checked_width(self.measure(g.text), g.text)
            if width is not None:
                total += width
        return total


class TableMeasure(Measure):
    """基于映射表的度量，多用于测试或预先提取好的宽度表。

    先按整个字位簇查表；查不到时逐码点累加。首码点（基字符）缺失且未提供
    `default` 时视为未知字形，其后的组合码点缺失则按 0 计。
    """

    def __init__(self, widths: Mapping[str, Width], default: Optional[Width] = None):
        self._widths = dict(widths)
        self._default = default

    def measure(self, grapheme: str) -> Optional[Width]:
        if grapheme in self._widths:
            return self._widths[grapheme]
        total: Width = 0
        for index, cp in enumerate(grapheme):
            width = self._widths.get(cp, self._default)
            if width is None:
                if index == 0:
                    return None
                continue
            total += width
        return total

    def __repr__(self) -> str:
        return f"TableMeasure({len(self._widths)} entries, default={self._default!r})"


class FixedWidthMeasure(Measure):
    """等宽度量：每个字位簇宽度相同，`missing` 中列出的字符视为无字形。"""

    def __init__(self, advance: Width, missing: Iterable[str] = ()):
        self.advance = advance
        self._missing = frozenset(missing)

    def measure(self, grapheme: str) -> Optional[Width]:
        if grapheme in self._missing or grapheme[:1] in self._missing:
            return None
        return self.advance

    def __repr__(self) -> str:
        return f"FixedWidthMeasure(advance={self.advance!r})"


class CellMeasure(Measure):
    """终端单元格宽度（wcwidth）：东亚宽字符为 2，组合符为 0，控制字符视为未知。"""

    def measure(self, grapheme: str) -> Optional[Width]:
        cells = wcswidth(grapheme)
        if cells < 0:
            return None
        return cells

    def __repr__(self) -> str:
        return "CellMeasure()"


__all__ = [
    "Width",
    "Measure",
    "TableMeasure",
    "FixedWidthMeasure",
    "CellMeasure",
    "checked_width",
]
