"""RDF 节点分类与列表结构识别。

渲染决策只区分三类节点（URI / 空白节点 / 字面量）；RDF 列表是在空白节点之上按结构
识别出来的形态，由 :func:`list_items` 判定。
"""
from __future__ import annotations

from collections.abc import Collection
from enum import Enum

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import RDF
from rdflib.term import Node

_LIST_PREDICATES = frozenset({RDF.first, RDF.rest})


class NodeKind(str, Enum):
    """节点类别，同时决定规范排序中的类别次序（URI < 空白节点 < 字面量）。"""

    URI = "URI"
    BLANK = "BLANK"
    LITERAL = "LITERAL"

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS = {NodeKind.URI: 0, NodeKind.BLANK: 1, NodeKind.LITERAL: 2}


def node_kind(node: Node) -> NodeKind:
    """返回节点类别。

    异常:
        TypeError: 节点既不是 URIRef、BNode 也不是 Literal（如 N3 变量或公式）。
    """

    if isinstance(node, URIRef):
        return NodeKind.URI
    if isinstance(node, BNode):
        return NodeKind.BLANK
    if isinstance(node, Literal):
        return NodeKind.LITERAL
    raise TypeError(f"不支持的 RDF 节点类型: {type(node).__name__}")


def has_outgoing(graph: Graph, node: Node) -> bool:
    """节点是否作为主语出现在至少一条三元组中。"""

    return (node, None, None) in graph


def object_reference_count(graph: Graph, node: Node) -> int:
    """节点作为宾语被引用的次数。"""

    return sum(1 for _ in graph.subject_predicates(node))


def list_items(graph: Graph, head: Node, labels: Collection[Node] = ()) -> list[Node] | None:
    """若 ``head`` 可以按 ``( ... )`` 语法内联书写，返回其元素列表，否则返回 ``None``。

    判定规则：链上每个节点都是未命名的空白节点，只带一条 ``rdf:first`` 与一条
    ``rdf:rest``，没有其他谓词；除表头外，每个链节点只被前一个节点的 ``rdf:rest``
    引用一次；链以 ``rdf:nil`` 结束。任何额外三元组都会使该结构退化为普通空白节点。

    参数:
        graph (Graph): 数据图。
        head (Node): 候选表头。
        labels (Collection[Node]): 已分配标签的空白节点，它们必须按标签书写。

    返回:
        list[Node] | None: 列表元素（按链顺序），或 ``None``。
    """

    if not isinstance(head, BNode) or (head, RDF.rest, None) not in graph:
        return None
    items: list[Node] = []
    seen: set[Node] = set()
    node: Node = head
    while node != RDF.nil:
        if not isinstance(node, BNode) or node in labels or node in seen:
            return None
        seen.add(node)
        if any(predicate not in _LIST_PREDICATES for predicate in graph.predicates(node)):
            return None
        firsts = list(graph.objects(node, RDF.first))
        rests = list(graph.objects(node, RDF.rest))
        if len(firsts) != 1 or len(rests) != 1:
            return None
        if node != head and object_reference_count(graph, node) != 1:
            return None
        items.append(firsts[0])
        node = rests[0]
    return items
