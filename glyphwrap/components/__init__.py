"""
文件路径：glyphwrap/components/__init__.py

说明：
- 组件包入口：日志工具、错误信息格式化，以及对子模块的聚合导出；
- 子模块按职责拆分：`text.py`（字位簇切分与分词）、`measure.py`（度量接口与通用实现）、
  `fonts.py`（基于字体文件的度量实现）；
- 业务模块与测试可统一使用 `from glyphwrap.components import ...` 导入。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from ..variables import (
    CONST_LOG_FORMAT,
    CONST_LOG_DATEFMT,
    CONST_LOGGER_ROOT_NAME,
)


# =============================
# 日志工具
# =============================
_LOGGER_CONFIGURED: bool = False


def get_logger(name: str) -> logging.Logger:
    """获取 logger，首次调用时为包根 logger 挂载 NullHandler。

    作为库使用时不主动配置输出，由调用方决定；需要输出时调用 `configure_logging`。

    参数：
        name: 日志记录器名称（一般使用 __name__）。

    返回：
        logging.Logger 对象。
    """
    global _LOGGER_CONFIGURED
    if not _LOGGER_CONFIGURED:
        logging.getLogger(CONST_LOGGER_ROOT_NAME).addHandler(logging.NullHandler())
        _LOGGER_CONFIGURED = True
    return logging.getLogger(name)


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """为应用程序配置控制台（及可选文件）双输出。

    参数：
        level: 日志级别。
        log_file: 日志文件路径；None 表示仅输出到控制台。
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format=CONST_LOG_FORMAT,
        datefmt=CONST_LOG_DATEFMT,
        handlers=handlers,
    )
    logging.getLogger(CONST_LOGGER_ROOT_NAME).setLevel(level)


# =============================
# 错误处理
# =============================
class ErrorHandler:
    """错误处理相关工具。"""

    @staticmethod
    def format_error(err_code: int, message: str) -> str:
        """生成统一错误信息字符串。"""
        return f"[{err_code}] {message}"


# 聚合导出：拆分后的子模块（放在日志工具之后，子模块在导入时即调用 get_logger）
from .measure import (  # noqa: E402
    Measure,
    TableMeasure,
    FixedWidthMeasure,
    CellMeasure,
    checked_width,
)
from .fonts import ReportLabMeasure, PyMuPDFMeasure, register_truetype_font  # noqa: E402
from .text import (  # noqa: E402
    Grapheme,
    Token,
    TokenKind,
    classify_grapheme,
    segment_graphemes,
    tokenize,
)


# =============================
# 导出声明
# =============================
__all__ = [
    # 日志工具
    "get_logger",
    "configure_logging",
    # 错误处理
    "ErrorHandler",
    # 度量
    "Measure",
    "TableMeasure",
    "FixedWidthMeasure",
    "CellMeasure",
    "checked_width",
    "ReportLabMeasure",
    "PyMuPDFMeasure",
    "register_truetype_font",
    # 字位簇与分词
    "Grapheme",
    "Token",
    "TokenKind",
    "classify_grapheme",
    "segment_graphemes",
    "tokenize",
]
