from __future__ import annotations

"""
pytest 全局配置：将项目根目录加入 sys.path，确保 `from glyphwrap...` 可被导入；
并提供测试共用的度量对象。
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from glyphwrap.components import FixedWidthMeasure  # noqa: E402


@pytest.fixture
def unit_measure() -> FixedWidthMeasure:
    """每个字位簇宽度为 1，便于按“字位簇个数”推算期望值。"""
    return FixedWidthMeasure(1)
