"""
文件路径：glyphwrap/word_wrapper.py

模块职责：
- 换行策略 `WrapPolicy`（最大行宽 + 度量对象，不可变、可跨线程共享）；
- 对外入口：`wrap` / `wrap_with_position`（惰性迭代器）与
  `wrap_lines` / `wrap_positions`（一次性取回列表）。

注意：
- 最大行宽与度量宽度使用同一单位（如 ReportLabMeasure 默认的千分之一 em）。
- 无字形的字符不会中断换行：按 0 宽参与排版，位置输出为 UnknownPosition。

组件调用说明（来自 glyphwrap/components 与 glyphwrap/processors）：
- Measure（宽度度量）、get_logger（日志输出）
- LineIterator / PositionIterator（换行结果投影）
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .components import Measure, get_logger
from .components.measure import Width
from .processors.iterators import CharPosition, LineIterator, PositionIterator
from .processors.layout import validate_max_width, validate_measure, validate_text


logger = get_logger(__name__)


@dataclass(frozen=True)
class WrapPolicy:
    """换行策略。

    属性：
        max_width: 最大行宽（非负，单位与 measure 一致）。
        measure: 宽度度量对象。
    """

    max_width: Width
    measure: Measure

    def __post_init__(self) -> None:
        validate_max_width(self.max_width)
        validate_measure(self.measure)
        logger.debug("创建换行策略：max_width=%s measure=%r", self.max_width, self.measure)

    def wrap(self, text: str) -> LineIterator:
        return wrap(text, self)

    def positions(self, text: str) -> PositionIterator:
        return wrap_with_position(text, self)


def wrap(text: str, policy: WrapPolicy) -> LineIterator:
    """按策略换行，返回惰性的行文本迭代器。"""
    return LineIterator(validate_text(text), policy)


def wrap_with_position(text: str, policy: WrapPolicy) -> PositionIterator:
    """按策略换行，返回惰性的逐字符落点迭代器。"""
    return PositionIterator(validate_text(text), policy)


def wrap_lines(text: str, policy: WrapPolicy) -> List[str]:
    """`wrap` 的列表版本。"""
    return list(wrap(text, policy))


def wrap_positions(text: str, policy: WrapPolicy) -> List[CharPosition]:
    """`wrap_with_position` 的列表版本。"""
    return list(wrap_with_position(text, policy))


__all__ = [
    "WrapPolicy",
    "wrap",
    "wrap_with_position",
    "wrap_lines",
    "wrap_positions",
]
