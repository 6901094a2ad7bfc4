"""
文件路径：glyphwrap/__init__.py

说明：按字体度量宽度（而非字符数）换行的库。

快速使用示例：
    from glyphwrap import ReportLabMeasure, WrapPolicy, wrap

    policy = WrapPolicy(max_width=20000, measure=ReportLabMeasure("Helvetica"))
    for line in wrap("Mary had a little lamb whose fleece was white as snow", policy):
        print(line)
"""

from .components import (
    CellMeasure,
    FixedWidthMeasure,
    Measure,
    PyMuPDFMeasure,
    ReportLabMeasure,
    TableMeasure,
    configure_logging,
    register_truetype_font,
)
from .processors import LineIterator, Position, PositionIterator, UnknownPosition
from .word_wrapper import WrapPolicy, wrap, wrap_lines, wrap_positions, wrap_with_position

__version__ = "0.1.0"

__all__ = [
    "CellMeasure",
    "FixedWidthMeasure",
    "Measure",
    "PyMuPDFMeasure",
    "ReportLabMeasure",
    "TableMeasure",
    "configure_logging",
    "register_truetype_font",
    "LineIterator",
    "Position",
    "PositionIterator",
    "UnknownPosition",
    "WrapPolicy",
    "wrap",
    "wrap_lines",
    "wrap_positions",
    "wrap_with_position",
]
