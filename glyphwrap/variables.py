"""
文件路径：glyphwrap/variables.py

模块职责：
- 统一管理全局跨模块常量，确保模块化、无冲突、可追溯。
- 变量命名规范：{分类前缀}_{描述性名称}（全大写+下划线）。
  - CONST_：通用常量
  - ERR_：错误码

使用说明：
- 业务模块严禁定义新的全局变量，必须从本模块导入所需常量。
- 本模块只保存不可变值；换行策略的运行时配置由 `WrapPolicy` 承载。
"""

from typing import FrozenSet


# =============================
# 常量（CONST_）
# =============================
# 字体度量单位：字号取 1000 时，宽度以“千分之一 em”计（与 AFM / ReportLab 宽度表一致）
CONST_FONT_SIZE_UNITS: float = 1000.0

# PyMuPDF 内置字体名（Helvetica），未提供字体文件时使用
CONST_PYMUPDF_DEFAULT_FONT: str = "helv"

# 视为“显式换行”的字位簇（"\r\n" 是一个字位簇，代表一次换行）
CONST_NEWLINE_GRAPHEMES: FrozenSet[str] = frozenset(
    {
        "\n",
        "\r\n",
        "\r",
        "\x0b",
        "\x0c",
        "\x85",
        "\u2028",
        "\u2029",
    }
)

# 单个字位簇的度量缓存上限（每个 Measure 实例独立）
CONST_MEASURE_CACHE_SIZE: int = 4096

# 日志格式（供 logging.basicConfig 使用）
CONST_LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONST_LOG_DATEFMT: str = "%Y-%m-%d %H:%M:%S"
CONST_LOGGER_ROOT_NAME: str = "glyphwrap"


# =============================
# 错误码（ERR_）
# =============================
# 1xxx：字体相关
ERR_FONT_NOT_FOUND: int = 1001  # 字体未注册或字体文件不存在
ERR_INVALID_FONT_SIZE: int = 1002  # 字号非法（<=0 或非数值）

# 2xxx：换行配置相关
ERR_INVALID_MAX_WIDTH: int = 2001  # 最大行宽非法（负数、NaN、非数值）
ERR_INVALID_MEASURE: int = 2002  # 度量对象未实现 Measure 接口

# 3xxx：输入数据相关
ERR_INVALID_TEXT: int = 3001  # 输入文本不是 str
ERR_INVALID_WIDTH: int = 3002  # 度量返回了负数或非数值宽度


# =============================
# 导出声明
# =============================
__all__ = [
    # CONST_
    "CONST_FONT_SIZE_UNITS",
    "CONST_PYMUPDF_DEFAULT_FONT",
    "CONST_NEWLINE_GRAPHEMES",
    "CONST_MEASURE_CACHE_SIZE",
    "CONST_LOG_FORMAT",
    "CONST_LOG_DATEFMT",
    "CONST_LOGGER_ROOT_NAME",
    # ERR_
    "ERR_FONT_NOT_FOUND",
    "ERR_INVALID_FONT_SIZE",
    "ERR_INVALID_MAX_WIDTH",
    "ERR_INVALID_MEASURE",
    "ERR_INVALID_TEXT",
    "ERR_INVALID_WIDTH",
]
