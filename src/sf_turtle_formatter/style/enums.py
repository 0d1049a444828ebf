"""样式配置中使用的枚举。"""
from __future__ import annotations

from enum import Enum


class Alignment(str, Enum):
    """前缀声明的对齐方式。"""

    LEFT = "LEFT"
    OFF = "OFF"
    RIGHT = "RIGHT"


class Charset(str, Enum):
    """输出字符集；UTF_8_BOM 会在输出前写入 EF BB BF。"""

    LATIN1 = "LATIN1"
    UTF_16_BE = "UTF_16_BE"
    UTF_16_LE = "UTF_16_LE"
    UTF_8 = "UTF_8"
    UTF_8_BOM = "UTF_8_BOM"

    @property
    def codec(self) -> str:
        """对应的 Python 编码名称。"""

        return _CODECS[self]


_CODECS = {
    Charset.LATIN1: "latin-1",
    Charset.UTF_16_BE: "utf-16-be",
    Charset.UTF_16_LE: "utf-16-le",
    Charset.UTF_8: "utf-8",
    Charset.UTF_8_BOM: "utf-8",
}


class EndOfLineStyle(str, Enum):
    """换行符风格。"""

    CR = "CR"
    CRLF = "CRLF"
    LF = "LF"

    @property
    def sequence(self) -> str:
        return {"CR": "\r", "CRLF": "\r\n", "LF": "\n"}[self.value]


class GapStyle(str, Enum):
    """分隔符前后的空白风格。"""

    NEWLINE = "NEWLINE"
    NOTHING = "NOTHING"
    SPACE = "SPACE"


class IndentStyle(str, Enum):
    SPACE = "SPACE"
    TAB = "TAB"


class QuoteStyle(str, Enum):
    """字面量引号策略。"""

    ALWAYS_SINGLE_QUOTES = "ALWAYS_SINGLE_QUOTES"
    ALWAYS_TRIPLE_QUOTES = "ALWAYS_TRIPLE_QUOTES"
    TRIPLE_QUOTES_FOR_MULTILINE = "TRIPLE_QUOTES_FOR_MULTILINE"


class WrappingStyle(str, Enum):
    """RDF 列表元素的换行策略。"""

    ALWAYS = "ALWAYS"
    FOR_LONG_LINES = "FOR_LONG_LINES"
    NEVER = "NEVER"
