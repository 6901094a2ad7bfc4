"""
文件路径：glyphwrap/components/text.py

说明：字位簇切分与分词。

- 字位簇切分委托给 wcwidth.iter_graphemes（Unicode 扩展字位簇规则），
  本模块只负责换算出每个字位簇在原字符串中的下标区间；
- 分词以字位簇为单位分类（换行 / 空白 / 其他），因此组合附加符号不会被
  空白与单词的分类拆开；
- 下标均为 Python str 的码点下标，区间为左闭右开 [start, end)。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from wcwidth import iter_graphemes

from ..variables import CONST_NEWLINE_GRAPHEMES


@dataclass(frozen=True)
class Grapheme:
    """一个用户感知字符在原文中的位置与内容。"""

    start: int
    end: int
    text: str


class TokenKind(Enum):
    WORD = "word"
    WHITESPACE = "whitespace"
    NEWLINE = "newline"


@dataclass(frozen=True)
class Token:
    """原文中的一段连续区间；`graphemes` 为该区间内的全部字位簇。"""

    kind: TokenKind
    start: int
    end: int
    graphemes: Tuple[Grapheme, ...]

    def text(self, source: str) -> str:
        return source[self.start : self.end]

    @property
    def is_word(self) -> bool:
        return self.kind is TokenKind.WORD

    @property
    def is_whitespace(self) -> bool:
        return self.kind is TokenKind.WHITESPACE

    @property
    def is_newline(self) -> bool:
        return self.kind is TokenKind.NEWLINE


def segment_graphemes(text: str) -> Iterator[Grapheme]:
    """按扩展字位簇切分文本，区间首尾相接、覆盖全文。"""
    index = 0
    for cluster in iter_graphemes(text):
        end = index + len(cluster)
        yield Grapheme(index, end, cluster)
        index = end


def classify_grapheme(cluster: str) -> TokenKind:
    """字位簇分类：换行、空白（按基字符判断）或单词字符。"""
    if cluster in CONST_NEWLINE_GRAPHEMES:
        return TokenKind.NEWLINE
    if cluster[:1].isspace():
        return TokenKind.WHITESPACE
    return TokenKind.WORD


def tokenize(text: str) -> Iterator[Token]:
    """将文本切分为单词、空白与换行 Token。

    - 相邻同类字位簇合并为一个 Token；
    - 换行字位簇总是单独成为一个 Token（"\\r\\n" 为一次换行，不与空白合并）。
    """
    kind: Optional[TokenKind] = None
    run: List[Grapheme] = []

    for g in segment_graphemes(text):
        g_kind = classify_grapheme(g.text)
        if run and (g_kind is not kind or kind is TokenKind.NEWLINE):
            yield Token(kind, run[0].start, run[-1].end, tuple(run))
            run = []
        kind = g_kind
        run.append(g)

    if run:
        yield Token(kind, run[0].start, run[-1].end, tuple(run))


__all__ = [
    "Grapheme",
    "Token",
    "TokenKind",
    "segment_graphemes",
    "classify_grapheme",
    "tokenize",
]
