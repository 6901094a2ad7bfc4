"""
文件路径：glyphwrap/processors/__init__.py

说明：
- layout.py：贪心换行引擎（LineBreaker / LineSpan / Placement）；
- iterators.py：行迭代器与位置迭代器。
"""

from .layout import LineBreaker, LineSpan, Placement, compute_line_breaks
from .iterators import (
    CharPosition,
    LineIterator,
    Position,
    PositionIterator,
    UnknownPosition,
)

__all__ = [
    "LineBreaker",
    "LineSpan",
    "Placement",
    "compute_line_breaks",
    "CharPosition",
    "LineIterator",
    "Position",
    "PositionIterator",
    "UnknownPosition",
]
