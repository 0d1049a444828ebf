"""空白节点命名决策测试。

覆盖内容：
- 只被引用一次且无环的空白节点不命名
- 多次引用的节点命名，优先复用源标签
- 纯空白节点环中只命名一个节点（已命名节点是截断点）
- 经过 URI 的环不需要命名
- 生成标签避开源标签；生成器返回非法标签时报错
"""
from __future__ import annotations

import pytest
from rdflib import BNode, Graph, Literal, URIRef

from sf_turtle_formatter.blanknode import BlankNodeMetadata, BlankNodeResolver, parse_turtle
from sf_turtle_formatter.blanknode.resolver import MAX_INLINE_DEPTH
from sf_turtle_formatter.common.exceptions import ErrorCode, FormatterError
from sf_turtle_formatter.model.prefixes import PrefixTable
from sf_turtle_formatter.ordering import NodeOrdering
from sf_turtle_formatter.style import FormattingStyle

EX = "http://example.com/"


def _resolve(content: str, **kwargs):
    parsed = parse_turtle(content)
    style = FormattingStyle()
    ordering = NodeOrdering(style, PrefixTable(parsed.prefixes), parsed.metadata)
    resolver = BlankNodeResolver(parsed.graph, ordering, parsed.metadata, **kwargs)
    return parsed, resolver.resolve()


def _by_label(parsed) -> dict[str, BNode]:
    return {label: node for node, label in parsed.metadata.labels.items()}


class TestBlankNodeResolver:
    def test_single_reference_is_inlined(self) -> None:
        _, resolution = _resolve("@prefix : <http://example.com/> .\n:a :p [ :q 1 ] .\n")
        assert resolution.labels == {}

    def test_multiple_references_reuse_source_label(self) -> None:
        parsed, resolution = _resolve(
            "@prefix : <http://example.com/> .\n:a :p _:shared .\n:b :p _:shared .\n"
        )
        assert resolution.labels == {_by_label(parsed)["shared"]: "shared"}

    def test_two_node_cycle_names_first_only(self) -> None:
        parsed, resolution = _resolve(
            "@prefix : <http://example.com/> .\n_:blank1 :has _:blank2 .\n_:blank2 :has _:blank1 .\n"
        )
        nodes = _by_label(parsed)
        assert resolution.labels == {nodes["blank1"]: "blank1"}
        assert resolution.sequence == {nodes["blank1"]: 0}

    def test_three_node_cycle(self) -> None:
        parsed, resolution = _resolve(
            "@prefix : <http://example.com/> .\n"
            "_:x :has _:y .\n_:y :has _:z .\n_:z :has _:x .\n"
        )
        assert list(resolution.labels.values()) == ["x"]

    def test_cycle_through_uri_is_not_named(self) -> None:
        _, resolution = _resolve(
            "@prefix : <http://example.com/> .\n"
            "_:one :has :A .\n:A :has _:two .\n_:two :has _:one .\n"
        )
        assert resolution.labels == {}

    def test_triangle(self) -> None:
        parsed, resolution = _resolve(
            "@prefix : <http://example.com/> .\n_:b1 :foo _:b2, _:b3 .\n_:b2 :foo _:b3 .\n"
        )
        assert resolution.labels == {_by_label(parsed)["b3"]: "b3"}

    def test_generated_labels_skip_source_labels(self) -> None:
        """源文本中已有 ``gen0`` 时生成的标签顺延为 ``gen1``。"""

        graph = Graph()
        source = BNode()
        fresh = BNode()
        for subject in ("a", "b"):
            graph.add((URIRef(EX + subject), URIRef(EX + "p"), source))
            graph.add((URIRef(EX + subject), URIRef(EX + "q"), fresh))
        metadata = BlankNodeMetadata(labels={source: "gen0"}, order={source: 0, fresh: 1})
        ordering = NodeOrdering(FormattingStyle(), PrefixTable({}), metadata)
        resolution = BlankNodeResolver(graph, ordering, metadata).resolve()
        assert resolution.labels == {source: "gen0", fresh: "gen1"}
        assert resolution.sequence == {source: 0, fresh: 1}

    def test_custom_generator(self) -> None:
        graph = Graph()
        node = BNode()
        graph.add((URIRef(EX + "a"), URIRef(EX + "p"), node))
        graph.add((URIRef(EX + "b"), URIRef(EX + "p"), node))
        ordering = NodeOrdering(FormattingStyle(), PrefixTable({}))
        resolver = BlankNodeResolver(graph, ordering, id_generator=lambda _node, index: f"node{index + 1}")
        assert resolver.resolve().labels == {node: "node1"}

    def test_invalid_generated_label(self) -> None:
        graph = Graph()
        node = BNode()
        graph.add((URIRef(EX + "a"), URIRef(EX + "p"), node))
        graph.add((URIRef(EX + "b"), URIRef(EX + "p"), node))
        ordering = NodeOrdering(FormattingStyle(), PrefixTable({}))
        resolver = BlankNodeResolver(graph, ordering, id_generator=lambda _node, _index: "not:valid")
        with pytest.raises(FormatterError) as info:
            resolver.resolve()
        assert info.value.code is ErrorCode.INVALID_STYLE

    def test_exhausted_generator(self) -> None:
        """始终返回已占用标签的生成器不会无限重试。"""

        graph = Graph()
        taken = BNode()
        node = BNode()
        for subject in ("a", "b"):
            graph.add((URIRef(EX + subject), URIRef(EX + "p"), taken))
            graph.add((URIRef(EX + subject), URIRef(EX + "q"), node))
        metadata = BlankNodeMetadata(labels={taken: "same"}, order={taken: 0, node: 1})
        ordering = NodeOrdering(FormattingStyle(), PrefixTable({}), metadata)
        resolver = BlankNodeResolver(graph, ordering, metadata, id_generator=lambda _node, _index: "same")
        with pytest.raises(FormatterError):
            resolver.resolve()

    def test_literal_objects_are_ignored(self) -> None:
        graph = Graph()
        graph.add((URIRef(EX + "a"), URIRef(EX + "p"), Literal("x")))
        graph.add((URIRef(EX + "b"), URIRef(EX + "p"), Literal("x")))
        ordering = NodeOrdering(FormattingStyle(), PrefixTable({}))
        assert BlankNodeResolver(graph, ordering).resolve().labels == {}

    def test_deep_nesting_is_cut(self) -> None:
        """内联嵌套超过上限的节点被命名，其下的节点重新从顶层计数。"""

        graph = Graph()
        chain = [BNode() for _ in range(100)]
        graph.add((URIRef(EX + "root"), URIRef(EX + "p"), chain[0]))
        for parent, child in zip(chain, chain[1:]):
            graph.add((parent, URIRef(EX + "p"), child))
        graph.add((chain[-1], URIRef(EX + "p"), Literal("end")))
        ordering = NodeOrdering(FormattingStyle(), PrefixTable({}))
        resolution = BlankNodeResolver(graph, ordering).resolve()
        step = MAX_INLINE_DEPTH + 1
        assert set(resolution.labels) == {chain[index - 1] for index in range(step, len(chain) + 1, step)}

    def test_long_list_is_not_cut(self) -> None:
        """列表链节点不增加嵌套层数。"""

        items = " ".join(str(index) for index in range(MAX_INLINE_DEPTH * 3))
        _, resolution = _resolve(f"@prefix : <http://example.com/> .\n:a :p ( {items} ) .\n")
        assert resolution.labels == {}
