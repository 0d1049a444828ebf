"""字面量的书写形式：引号策略、转义与数值简写。"""
from __future__ import annotations

import math
import re
from collections.abc import Callable

from rdflib import Literal
from rdflib.namespace import XSD

from sf_turtle_formatter.common.logging import LoggerFactory
from sf_turtle_formatter.style.enums import QuoteStyle
from sf_turtle_formatter.style.formatting_style import FormattingStyle

XSD_INTEGER_UNQUOTED = re.compile(r"[+-]?[0-9]+")
XSD_DECIMAL_UNQUOTED = re.compile(r"[+-]?[0-9]*\.[0-9]+")
XSD_DOUBLE_UNQUOTED = re.compile(r"(([+-]?[0-9]+\.[0-9]+)|([+-]?\.[0-9]+)|([+-]?[0-9]+))[eE][+-]?[0-9]+")
_NUMERIC_LEXICAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

_ESCAPE_NEEDED = re.compile(r'[\x00-\x1f\x7f"\\]')
_ALWAYS_ESCAPED = {
    "\t": "\\t",
    "\b": "\\b",
    "\r": "\\r",
    "\f": "\\f",
    "\\": "\\\\",
}


class LiteralWriter:
    """把 rdflib ``Literal`` 转换为 Turtle 文本。

    参数:
        style (FormattingStyle): 提供引号策略与 double 格式化配置。
        uri_form (Callable[[str], str]): 数据类型 IRI 的书写形式（通常是 ``PrefixTable.written_form``）。
    """

    def __init__(self, style: FormattingStyle, uri_form: Callable[[str], str]) -> None:
        self._style = style
        self._uri_form = uri_form
        self._logger = LoggerFactory.create_default_logger(__name__)

    def render(self, literal: Literal) -> str:
        """返回字面量的书写形式。

        规则：
            - 语言标签字面量：``"..."@lang``；
            - 无数据类型或 xsd:string：``"..."``；
            - xsd:boolean / xsd:integer / xsd:decimal / xsd:double：词法形式可以无歧义地
              作为 Turtle 数值或布尔值时不加引号；
            - 其他：``"..."^^datatype``。
        """

        lexical = str(literal)
        if literal.language:
            return f"{self.quote(lexical)}@{literal.language}"
        datatype = literal.datatype
        if datatype is None or datatype == XSD.string:
            return self.quote(lexical)
        if datatype == XSD.boolean and lexical in ("true", "false"):
            return lexical
        if datatype == XSD.integer and XSD_INTEGER_UNQUOTED.fullmatch(lexical):
            return lexical
        if datatype == XSD.decimal and XSD_DECIMAL_UNQUOTED.fullmatch(lexical):
            return lexical
        if datatype == XSD.double:
            unquoted = self._double(lexical)
            if unquoted is not None:
                return unquoted
        return f"{self.quote(lexical)}^^{self._uri_form(str(datatype))}"

    def _double(self, lexical: str) -> str | None:
        if self._style.enable_double_formatting and _NUMERIC_LEXICAL.fullmatch(lexical):
            value = float(lexical)
            if math.isfinite(value):
                formatted = self._style.double_formatter(value)
                if XSD_DOUBLE_UNQUOTED.fullmatch(formatted):
                    return formatted
                self._logger.debug("double 格式化结果不是合法的 Turtle DOUBLE，保留原词法形式: %r", formatted)
        if XSD_DOUBLE_UNQUOTED.fullmatch(lexical):
            return lexical
        return None

    def quote(self, value: str) -> str:
        """按引号策略给字符串加引号并转义。

        单引号形式中换行与双引号需要转义；三引号形式中二者保留原样，但连续三个双引号
        的第三个以及紧贴结束定界符的末尾双引号会被转义。
        """

        style = self._style.quote_style
        triple = style is QuoteStyle.ALWAYS_TRIPLE_QUOTES or (
            style is QuoteStyle.TRIPLE_QUOTES_FOR_MULTILINE and "\n" in value
        )
        if not triple:
            return f'"{_ESCAPE_NEEDED.sub(_escape_single, value)}"'

        body, trailing = (value[:-1], '\\"') if value.endswith('"') else (value, "")
        escaped = _ESCAPE_NEEDED.sub(_escape_triple, body).replace('"""', '""\\"')
        return f'"""{escaped}{trailing}"""'


def _escape_common(char: str) -> str:
    replacement = _ALWAYS_ESCAPED.get(char)
    if replacement is not None:
        return replacement
    return f"\\u{ord(char):04X}"


def _escape_single(match: re.Match[str]) -> str:
    char = match.group()
    if char == "\n":
        return "\\n"
    if char == '"':
        return '\\"'
    return _escape_common(char)


def _escape_triple(match: re.Match[str]) -> str:
    char = match.group()
    if char in ('\n', '"'):
        return char
    return _escape_common(char)
