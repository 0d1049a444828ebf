"""排序规则测试。"""
from __future__ import annotations

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import OWL, RDF, RDFS

from sf_turtle_formatter.blanknode import BlankNodeMetadata
from sf_turtle_formatter.model.prefixes import PrefixTable
from sf_turtle_formatter.ordering import NodeOrdering
from sf_turtle_formatter.style import FormattingStyle

EX = "http://example.com/"


class TestNodeOrdering:
    def setup_method(self) -> None:
        self.style = FormattingStyle()
        self.prefixes = PrefixTable({"": EX, "rdf": str(RDF), "rdfs": str(RDFS), "owl": str(OWL)})
        self.ordering = NodeOrdering(self.style, self.prefixes)

    def test_kind_order(self) -> None:
        """URI < 空白节点 < 字面量。"""

        nodes = [Literal("a"), BNode(), URIRef(EX + "z")]
        ordered = sorted(nodes, key=self.ordering.node_key)
        assert [type(node) for node in ordered] == [URIRef, BNode, Literal]

    def test_uris_compare_by_written_form(self) -> None:
        """``:b`` 排在 ``<http://a.org/x>`` 之前，因为比较的是书写形式。"""

        nodes = [URIRef("http://a.org/x"), URIRef(EX + "b")]
        assert sorted(nodes, key=self.ordering.node_key) == [URIRef(EX + "b"), URIRef("http://a.org/x")]

    def test_blank_nodes_follow_parse_order_then_generated(self) -> None:
        first, second, third = BNode("zzz"), BNode("aaa"), BNode("mmm")
        metadata = BlankNodeMetadata(order={first: 0, second: 1})
        ordering = NodeOrdering(self.style, self.prefixes, metadata).with_generated({third: 0})
        assert sorted([third, second, first], key=ordering.node_key) == [first, second, third]

    def test_blank_nodes_without_metadata_use_identifier(self) -> None:
        nodes = [BNode("b"), BNode("a")]
        assert sorted(nodes, key=self.ordering.node_key) == [BNode("a"), BNode("b")]

    def test_literals_compare_lexical_then_language_then_datatype(self) -> None:
        nodes = [Literal("b"), Literal("a", lang="en"), Literal("a"), Literal("a", lang="de")]
        ordered = sorted(nodes, key=self.ordering.node_key)
        assert ordered == [Literal("a"), Literal("a", lang="de"), Literal("a", lang="en"), Literal("b")]

    def test_prefix_key(self) -> None:
        names = ["ex", "owl", "", "rdf", "rdfs", "abc"]
        assert sorted(names, key=self.ordering.prefix_key) == ["rdf", "rdfs", "owl", "", "abc", "ex"]

    def test_predicate_key(self) -> None:
        predicates = [URIRef(EX + "a"), RDFS.comment, RDF.type, RDFS.label]
        ordered = sorted(predicates, key=self.ordering.predicate_key)
        assert ordered == [RDF.type, RDFS.label, RDFS.comment, URIRef(EX + "a")]

    def test_object_key_uses_object_order_first(self) -> None:
        objects = [URIRef(EX + "A"), OWL.ObjectProperty, OWL.NamedIndividual]
        ordered = sorted(objects, key=self.ordering.object_key)
        assert ordered == [OWL.NamedIndividual, OWL.ObjectProperty, URIRef(EX + "A")]

    def test_ordered_subjects(self) -> None:
        """按 subject_order 的类别分组在前，其余主语按规范次序在后，每个主语只出现一次。"""

        graph = Graph()
        individual = URIRef(EX + "alice")
        cls = URIRef(EX + "Person")
        prop = URIRef(EX + "name")
        graph.add((individual, RDF.type, cls))
        graph.add((prop, RDF.type, RDF.Property))
        graph.add((prop, RDF.type, OWL.DatatypeProperty))
        graph.add((cls, RDF.type, OWL.Class))
        graph.add((URIRef(EX + "aaa"), prop, Literal("x")))
        assert self.ordering.ordered_subjects(graph) == [cls, prop, URIRef(EX + "aaa"), individual]
