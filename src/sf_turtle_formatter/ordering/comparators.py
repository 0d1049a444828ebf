"""排序键：前缀、主语、谓词、宾语与规范节点次序。

所有排序都以“优先级列表下标，否则排在最后”加规范节点次序作为键。键是元组，
因此得到的天然是全序，可直接交给 ``sorted``。

规范节点次序：
    - URI 节点 < 空白节点 < 字面量；
    - URI 之间比较书写形式（前缀名或 ``<iri>``）；
    - 空白节点依次比较：解析顺序 → 生成标签序号 → ``str(BNode)``；
    - 字面量比较（词法形式, 语言标签, 数据类型）。
"""
from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from rdflib import BNode, Graph, Literal
from rdflib.namespace import RDF
from rdflib.term import Node

from sf_turtle_formatter.blanknode.metadata import EMPTY_METADATA, BlankNodeMetadata
from sf_turtle_formatter.model.nodes import NodeKind, node_kind
from sf_turtle_formatter.model.prefixes import PrefixTable
from sf_turtle_formatter.style.formatting_style import FormattingStyle


def _priority(items: Sequence[Any]) -> dict[Any, int]:
    priority: dict[Any, int] = {}
    for index, item in enumerate(items):
        priority.setdefault(item, index)
    return priority


class NodeOrdering:
    """一次渲染使用的全部排序规则。

    参数:
        style (FormattingStyle): 提供前缀/主语/谓词/宾语优先级列表。
        prefixes (PrefixTable): 用于计算 URI 的书写形式。
        metadata (BlankNodeMetadata | None): 解析器给出的空白节点顺序。
        generated (Mapping[BNode, int] | None): 空白节点解析器分配标签时的序号。
    """

    def __init__(
        self,
        style: FormattingStyle,
        prefixes: PrefixTable,
        metadata: BlankNodeMetadata | None = None,
        generated: Mapping[BNode, int] | None = None,
    ) -> None:
        self._style = style
        self._prefixes = prefixes
        self._metadata = metadata or EMPTY_METADATA
        self._generated: Mapping[BNode, int] = dict(generated or {})
        self._prefix_priority = _priority(style.prefix_order)
        self._predicate_priority = _priority(style.predicate_order)
        self._object_priority = _priority(style.object_order)

    def with_generated(self, generated: Mapping[BNode, int]) -> NodeOrdering:
        """返回带有生成序号的新排序规则。"""

        return NodeOrdering(self._style, self._prefixes, self._metadata, generated)

    # ---- 规范节点次序 -------------------------------------------------

    def node_key(self, node: Node) -> tuple:
        kind = node_kind(node)
        if kind is NodeKind.URI:
            return (kind.rank, self._prefixes.written_form(str(node)))
        if kind is NodeKind.BLANK:
            order = self._metadata.order_of(node)
            generated = self._generated.get(node)
            return (
                kind.rank,
                math.inf if order is None else order,
                math.inf if generated is None else generated,
                str(node),
            )
        literal: Literal = node
        return (kind.rank, str(literal), literal.language or "", str(literal.datatype or ""))

    # ---- 各位置的排序键 -----------------------------------------------

    def prefix_key(self, prefix: str) -> tuple[int, str]:
        return (self._prefix_priority.get(prefix, len(self._prefix_priority)), prefix)

    def predicate_key(self, predicate: Node) -> tuple[int, str]:
        rank = self._predicate_priority.get(predicate, len(self._predicate_priority))
        return (rank, self._prefixes.written_form(str(predicate)))

    def object_key(self, obj: Node) -> tuple:
        return (self._object_priority.get(obj, len(self._object_priority)), self.node_key(obj))

    def ordered_subjects(self, graph: Graph) -> list[Node]:
        """按样式的类别优先级分组后返回全部主语，每个主语只出现一次。

        先依次输出 ``rdf:type`` 属于 ``subject_order`` 中各类别的主语（组内按规范次序），
        再按规范次序输出其余主语。同时属于多个优先类别的主语保留首次出现的位置。
        """

        ordered: list[Node] = []
        for rdf_class in self._style.subject_order:
            ordered.extend(sorted(set(graph.subjects(RDF.type, rdf_class)), key=self.node_key))
        ordered.extend(sorted(set(graph.subjects()), key=self.node_key))
        return list(dict.fromkeys(ordered))
