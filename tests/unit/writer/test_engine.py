"""输出引擎的缩进与分隔符测试。"""
from __future__ import annotations

import pytest
from rdflib import Graph, Literal, URIRef
from rdflib.namespace import RDF

from sf_turtle_formatter.model.prefixes import PrefixTable
from sf_turtle_formatter.ordering import NodeOrdering
from sf_turtle_formatter.style import FormattingStyle, GapStyle, IndentStyle
from sf_turtle_formatter.writer import EmissionState, TextSink, TurtleWriter

EX = "http://example.com/"


def _writer(graph: Graph | None = None, **changes) -> TurtleWriter:
    style = FormattingStyle(known_prefixes=(), **changes)
    prefixes = PrefixTable({"": EX, "rdf": str(RDF)})
    return TurtleWriter(graph or Graph(), style, prefixes, NodeOrdering(style, prefixes), {})


def _state() -> tuple[TextSink, EmissionState]:
    sink = TextSink()
    return sink, EmissionState(sink)


class TestIndentation:
    def test_spaces(self) -> None:
        writer = _writer(indent_size=3, continuation_indent_size=5)
        assert writer.indent(0) == ""
        assert writer.indent(2) == " " * 6
        assert writer.continuation_indent(1) == " " * 5
        assert writer.continuation_indent(2) == " " * 8

    def test_tabs(self) -> None:
        writer = _writer(indent_style=IndentStyle.TAB)
        assert writer.indent(1) == "\t"
        assert writer.continuation_indent(2) == "\t\t\t"


class TestDelimiters:
    @pytest.mark.parametrize(
        ("before", "after", "expected"),
        [
            (GapStyle.SPACE, GapStyle.SPACE, "x ; "),
            (GapStyle.NOTHING, GapStyle.NOTHING, "x;"),
            (GapStyle.NEWLINE, GapStyle.NOTHING, "x\n  ;"),
            (GapStyle.NOTHING, GapStyle.NEWLINE, "x;\n  "),
        ],
    )
    def test_gap_styles(self, before: GapStyle, after: GapStyle, expected: str) -> None:
        sink, state = _state()
        _writer().write_delimiter(";", before, after, "  ", state.write("x"))
        assert sink.getvalue() == expected

    def test_space_before_is_not_doubled(self) -> None:
        sink, state = _state()
        _writer().write_delimiter(",", GapStyle.SPACE, GapStyle.NOTHING, "", state.write("x "))
        assert sink.getvalue() == "x ,"

    def test_dot(self) -> None:
        writer = _writer()
        sink, state = _state()
        writer.write_dot(state.write("x"), omit_space=False)
        assert sink.getvalue() == "x .\n"
        sink, state = _state()
        writer.write_dot(state.write("]"), omit_space=True)
        assert sink.getvalue() == "].\n"

    def test_semicolon_overrides(self) -> None:
        sink, state = _state()
        _writer().write_semicolon(state.write("x"), omit_line_break=True, omit_space=True, next_line_indentation="")
        assert sink.getvalue() == "x;"


class TestNodes:
    def test_predicate_form(self) -> None:
        assert _writer().predicate_form(RDF.type) == "a"
        assert _writer(use_a_for_rdf_type=False).predicate_form(RDF.type) == "rdf:type"
        assert _writer().uri(URIRef("http://other.org/x")) == "<http://other.org/x>"

    def test_named_subject(self) -> None:
        graph = Graph()
        graph.add((URIRef(EX + "s"), URIRef(EX + "p"), Literal("o")))
        sink, state = _state()
        result = _writer(graph).write_named_subject(URIRef(EX + "s"), state)
        assert sink.getvalue() == ':s :p "o" .\n'
        assert URIRef(EX + "s") in result.visited
