"""字面量书写形式测试：引号策略、转义与数值简写。"""
from __future__ import annotations

import pytest
from rdflib import Literal, URIRef
from rdflib.namespace import XSD

from sf_turtle_formatter.model.prefixes import PrefixTable
from sf_turtle_formatter.style import FormattingStyle, QuoteStyle
from sf_turtle_formatter.writer import LiteralWriter


def _writer(**changes) -> LiteralWriter:
    style = FormattingStyle(**changes)
    return LiteralWriter(style, PrefixTable({"xsd": str(XSD)}).written_form)


def _typed(lexical: str, datatype: URIRef) -> Literal:
    return Literal(lexical, datatype=datatype, normalize=False)


class TestRender:
    def setup_method(self) -> None:
        self.writer = _writer()

    def test_plain_and_language(self) -> None:
        assert self.writer.render(Literal("hello")) == '"hello"'
        assert self.writer.render(Literal("hello", lang="en")) == '"hello"@en'
        assert self.writer.render(_typed("hello", XSD.string)) == '"hello"'

    @pytest.mark.parametrize(
        ("lexical", "datatype", "expected"),
        [
            ("true", XSD.boolean, "true"),
            ("42", XSD.integer, "42"),
            ("-007", XSD.integer, "-007"),
            ("1.50", XSD.decimal, "1.50"),
            (".5", XSD.decimal, ".5"),
            ("4.2E9", XSD.double, "4.2E9"),
            ("1.0e3", XSD.double, "1.0e3"),
        ],
    )
    def test_shorthand(self, lexical: str, datatype: URIRef, expected: str) -> None:
        """词法形式可直接作为 Turtle 数值或布尔值时不加引号，且不做规范化。"""

        assert self.writer.render(_typed(lexical, datatype)) == expected

    @pytest.mark.parametrize(
        ("lexical", "datatype", "expected"),
        [
            ("1", XSD.boolean, '"1"^^xsd:boolean'),
            ("5.", XSD.decimal, '"5."^^xsd:decimal'),
            ("1.5", XSD.double, '"1.5"^^xsd:double'),
            ("2024-01-01", XSD.date, '"2024-01-01"^^xsd:date'),
        ],
    )
    def test_typed_fallback(self, lexical: str, datatype: URIRef, expected: str) -> None:
        assert self.writer.render(_typed(lexical, datatype)) == expected

    def test_unknown_datatype_is_bracketed(self) -> None:
        literal = _typed("x", URIRef("http://example.com/dt"))
        assert self.writer.render(literal) == '"x"^^<http://example.com/dt>'


class TestDoubleFormatting:
    def test_enabled(self) -> None:
        writer = _writer(enable_double_formatting=True)
        assert writer.render(_typed("6.241509074460762E-10", XSD.double)) == "6.2415E-10"
        assert writer.render(_typed("1.5", XSD.double)) == "1.5E0"

    def test_disabled_keeps_lexical(self) -> None:
        assert _writer().render(_typed("6.241509074460762E-10", XSD.double)) == "6.241509074460762E-10"

    def test_invalid_formatter_output_falls_back(self) -> None:
        """自定义格式化函数的结果不是合法 DOUBLE 时保留原词法形式。"""

        writer = _writer(enable_double_formatting=True, double_formatter=lambda value: f"{value:.2f}")
        assert writer.render(_typed("1.0e3", XSD.double)) == "1.0e3"
        assert writer.render(_typed("1.5", XSD.double)) == '"1.5"^^xsd:double'

    def test_non_numeric_lexical_is_quoted(self) -> None:
        writer = _writer(enable_double_formatting=True)
        assert writer.render(_typed("INF", XSD.double)) == '"INF"^^xsd:double'


class TestQuote:
    def test_single_quotes_escape(self) -> None:
        writer = _writer(quote_style=QuoteStyle.ALWAYS_SINGLE_QUOTES)
        assert writer.quote('say "hi"\nnow') == '"say \\"hi\\"\\nnow"'
        assert writer.quote("a\tb\\c") == '"a\\tb\\\\c"'

    def test_control_characters_use_uchar(self) -> None:
        writer = _writer()
        assert writer.quote("\x01\x7f") == '"\\u0001\\u007F"'

    def test_multiline_uses_triple_quotes(self) -> None:
        writer = _writer()
        assert writer.quote('line1\n"q"') == '"""' + 'line1\n"q' + '\\"' + '"""'

    def test_triple_quotes_escape_quote_runs(self) -> None:
        writer = _writer()
        assert writer.quote('a"""b\n') == '"""' + 'a""\\"b\n' + '"""'

    def test_always_triple(self) -> None:
        writer = _writer(quote_style=QuoteStyle.ALWAYS_TRIPLE_QUOTES)
        assert writer.quote("x") == '"""x"""'
        assert writer.quote("tab\there") == '"""tab\\there"""'

    def test_single_line_keeps_single_quotes(self) -> None:
        assert _writer().quote("plain") == '"plain"'
