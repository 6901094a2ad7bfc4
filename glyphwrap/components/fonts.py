"""
文件路径：glyphwrap/components/fonts.py

说明：基于真实字体度量的 Measure 实现与字体注册工具。

- ReportLabMeasure：读取已注册 ReportLab 字体的宽度表（TTF 用 charWidths，
  Type1 字体按其自身编码查宽度向量，CID 字体用其宽度表）；
- PyMuPDFMeasure：使用 fitz.Font 的 has_glyph / glyph_advance；
- 字位簇宽度 = 各码点步进宽度之和；基字符无字形时整个字位簇视为未知，
  组合码点无字形时按 0 计。
"""

from __future__ import annotations

from abc import abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

import fitz  # PyMuPDF
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import CIDFont
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from . import ErrorHandler, get_logger
from .measure import Measure, Width
from ..variables import (
    CONST_FONT_SIZE_UNITS,
    CONST_MEASURE_CACHE_SIZE,
    CONST_PYMUPDF_DEFAULT_FONT,
    ERR_FONT_NOT_FOUND,
    ERR_INVALID_FONT_SIZE,
)


logger = get_logger(__name__)


def _validate_font_size(font_size: float) -> float:
    try:
        size = float(font_size)
    except (TypeError, ValueError) as exc:
        raise ValueError(
            ErrorHandler.format_error(ERR_INVALID_FONT_SIZE, f"字号非法: {font_size!r}")
        ) from exc
    if not size > 0:
        raise ValueError(ErrorHandler.format_error(ERR_INVALID_FONT_SIZE, f"字号必须大于 0: {font_size!r}"))
    return size


def register_truetype_font(face_name: str, path: Union[str, Path]) -> str:
    """向 ReportLab 注册 TTF 字体，返回可用于 ReportLabMeasure 的字体名。

    `path` 可以是绝对路径，也可以是 ReportLab 字体搜索路径下的文件名（如 "Vera.ttf"）。

    异常：
        FileNotFoundError: 字体文件不存在或无法读取。
    """
    try:
        font = TTFont(face_name, str(path))
    except (OSError, TTFError) as exc:
        raise FileNotFoundError(
            ErrorHandler.format_error(ERR_FONT_NOT_FOUND, f"字体文件不存在或不可读: {path}")
        ) from exc
    pdfmetrics.registerFont(font)
    logger.info("已注册字体：%s -> %s", face_name, path)
    return face_name


class _GlyphMeasure(Measure):
    """按码点查字形步进宽度的公共实现，子类提供 `_advance`。"""

    def __init__(self, font_size: float):
        self.font_size = _validate_font_size(font_size)
        self._cached = lru_cache(maxsize=CONST_MEASURE_CACHE_SIZE)(self._measure_grapheme)

    def measure(self, grapheme: str) -> Optional[Width]:
        return self._cached(grapheme)

    def _measure_grapheme(self, grapheme: str) -> Optional[Width]:
        total = 0.0
        for index, cp in enumerate(grapheme):
            advance = self._advance(cp)
            if advance is None:
                if index == 0:
                    return None
                continue
            total += advance
        return total

    @abstractmethod
    def _advance(self, cp: str) -> Optional[float]:
        """单个码点的步进宽度（已按字号缩放）；无字形时返回 None。"""


class ReportLabMeasure(_GlyphMeasure):
    """使用 ReportLab 字体度量；默认字号 1000，即宽度以千分之一 em 计。

    - TrueType：以 charToGlyph 判断字形是否存在，宽度取自 charWidths；
    - Type1（含 Symbol / ZapfDingbats）：用 ReportLab 为字体编码注册的编解码器
      （与其 unicode2T1 相同）把字符换算为编码位置，编码向量中无字形名即视为未知；
    - CID 字体（如 UnicodeCIDFont）：ReportLab 不提供逐字符的字形存在信息，
      一律按其宽度表度量（缺省 1000），因此永远不会产出 UnknownPosition。
    """

    def __init__(self, font_name: str, font_size: float = CONST_FONT_SIZE_UNITS):
        try:
            self._font = pdfmetrics.getFont(font_name)
        except KeyError as exc:
            raise KeyError(
                ErrorHandler.format_error(ERR_FONT_NOT_FOUND, f"字体未注册: {font_name}")
            ) from exc
        super().__init__(font_size)
        self.font_name = font_name
        self._scale = self.font_size / 1000.0

    def _advance(self, cp: str) -> Optional[float]:
        font = self._font
        if isinstance(font, TTFont):
            code = ord(cp)
            if code not in font.face.charToGlyph:
                return None
            return font.face.charWidths.get(code, font.face.defaultWidth) * self._scale

        if isinstance(font, CIDFont):
            return font.stringWidth(cp, self.font_size)

        try:
            encoded = cp.encode(font.encName)
        except UnicodeEncodeError:
            return None
        code = encoded[0]
        if font.encoding.vector[code] is None:
            return None
        return font.widths[code] * self._scale

    def __repr__(self) -> str:
        return f"ReportLabMeasure({self.font_name!r}, font_size={self.font_size!r})"


class PyMuPDFMeasure(_GlyphMeasure):
    """使用 PyMuPDF 字体度量；未提供字体文件时使用内置 Helvetica（"helv"）。"""

    def __init__(
        self,
        fontname: str = CONST_PYMUPDF_DEFAULT_FONT,
        fontfile: Optional[Union[str, Path]] = None,
        font_size: float = CONST_FONT_SIZE_UNITS,
    ):
        super().__init__(font_size)
        if fontfile is not None:
            path = Path(fontfile)
            if not path.exists() or not path.is_file():
                raise FileNotFoundError(
                    ErrorHandler.format_error(ERR_FONT_NOT_FOUND, f"字体文件不存在或不可读: {path}")
                )
            self._font = fitz.Font(fontfile=str(path))
            logger.debug("PyMuPDF 已加载字体文件：%s", path)
        else:
            self._font = fitz.Font(fontname=fontname)
        self.fontname = fontname if fontfile is None else str(fontfile)

    def _advance(self, cp: str) -> Optional[float]:
        code = ord(cp)
        if not self._font.has_glyph(code):
            return None
        return self._font.glyph_advance(code) * self.font_size

    def __repr__(self) -> str:
        return f"PyMuPDFMeasure({self.fontname!r}, font_size={self.font_size!r})"


__all__ = ["ReportLabMeasure", "PyMuPDFMeasure", "register_truetype_font"]
