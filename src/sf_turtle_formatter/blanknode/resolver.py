"""空白节点命名决策。

决定哪些空白节点必须以 ``_:label`` 书写、哪些可以用 ``[ ... ]`` 内联：

1. 作为宾语被引用超过一次的空白节点必须命名；
2. 能沿宾语边（只经过尚未命名的空白节点）回到自身的空白节点必须命名，
   已命名节点是截断点，搜索不穿过它们；
3. 源文本中带标签的节点优先处理，命名时复用原标签；
4. 其余节点通过样式的标签生成器取得新标签，遇到与已分配标签或源文本标签冲突时
   继续递增序号重试；
5. 内联嵌套深度超过 :data:`MAX_INLINE_DEPTH` 的空白节点也会被命名，作为独立语句块
   输出，输出引擎的递归深度因此有上限。

候选节点按规范节点次序处理，因此生成的序号只取决于图与排序规则。
"""
from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rdflib import BNode, Graph
from rdflib.term import Node

from sf_turtle_formatter.blanknode.metadata import EMPTY_METADATA, BlankNodeMetadata
from sf_turtle_formatter.common.exceptions import ErrorCode, FormatterError
from sf_turtle_formatter.common.logging import LoggerFactory
from sf_turtle_formatter.model.nodes import has_outgoing, list_items, object_reference_count
from sf_turtle_formatter.model.prefixes import PN_LOCAL
from sf_turtle_formatter.style.formatting_style import default_blank_node_id

if TYPE_CHECKING:  # pragma: no cover - 仅用于类型提示
    from sf_turtle_formatter.ordering.comparators import NodeOrdering

# BLANK_NODE_LABEL 去掉 "_:" 之后的部分；与 PN_LOCAL 相比不允许 ':' 和 '%'
_BLANK_NODE_LABEL = re.compile(r"(?!.*[:%])" + PN_LOCAL.pattern)

# 顶层主语之下允许内联书写的最大 `[ ... ]` 嵌套层数
MAX_INLINE_DEPTH = 32


@dataclass(frozen=True, slots=True)
class Resolution:
    """命名结果。

    属性说明：
        - labels: 必须命名的空白节点 → 标签（不含 ``_:``）；
        - sequence: 空白节点 → 命名先后序号，供规范排序在缺少解析顺序时使用。
    """

    labels: dict[BNode, str] = field(default_factory=dict)
    sequence: dict[BNode, int] = field(default_factory=dict)


class BlankNodeResolver:
    """计算一次渲染的空白节点标签表。

    参数:
        graph (Graph): 数据图。
        ordering (NodeOrdering): 候选节点的处理顺序。
        metadata (BlankNodeMetadata | None): 解析器提供的原始标签与顺序。
        id_generator (Callable[[BNode, int], str]): 新标签生成器，输入节点与序号。
    """

    def __init__(
        self,
        graph: Graph,
        ordering: NodeOrdering,
        metadata: BlankNodeMetadata | None = None,
        id_generator: Callable[[BNode, int], str] = default_blank_node_id,
    ) -> None:
        self._graph = graph
        self._ordering = ordering
        self._metadata = metadata or EMPTY_METADATA
        self._id_generator = id_generator
        self._logger = LoggerFactory.create_default_logger(__name__)

    def resolve(self) -> Resolution:
        """返回必须命名的空白节点及其标签。"""

        candidates = {node for node in self._graph.objects() if isinstance(node, BNode)}
        with_label = sorted(
            (node for node in candidates if self._metadata.label_of(node) is not None),
            key=self._ordering.node_key,
        )
        without_label = sorted(
            (node for node in candidates if self._metadata.label_of(node) is None),
            key=self._ordering.node_key,
        )

        labels: dict[BNode, str] = {}
        sequence: dict[BNode, int] = {}
        reserved = set(self._metadata.source_labels())
        counter = 0
        for node in [*with_label, *without_label]:
            if object_reference_count(self._graph, node) <= 1 and not self._has_cycle(node, labels):
                continue
            counter = self._assign(node, counter, labels, sequence, reserved)
        for node in sorted(self._too_deep(labels), key=self._ordering.node_key):
            counter = self._assign(node, counter, labels, sequence, reserved)

        self._logger.debug("空白节点命名完成：%d 个候选，%d 个需要命名", len(candidates), len(labels))
        return Resolution(labels=labels, sequence=sequence)

    def _assign(
        self,
        node: BNode,
        counter: int,
        labels: dict[BNode, str],
        sequence: dict[BNode, int],
        reserved: set[str],
    ) -> int:
        label = self._metadata.label_of(node)
        if label is None:
            label, counter = self._generate(node, counter, reserved)
        labels[node] = label
        sequence[node] = len(sequence)
        reserved.add(label)
        return counter

    def _has_cycle(self, start: BNode, labels: dict[BNode, str]) -> bool:
        """``start`` 能否只经过未命名空白节点回到自身（显式栈 DFS）。"""

        stack = [start]
        seen = {start}
        while stack:
            current = stack.pop()
            for obj in self._graph.objects(current):
                if not isinstance(obj, BNode) or obj in labels:
                    continue
                if obj == start:
                    return True
                if obj not in seen:
                    seen.add(obj)
                    stack.append(obj)
        return False

    def _too_deep(self, labels: dict[BNode, str]) -> list[BNode]:
        """内联书写时嵌套层数超过上限、需要截断为独立语句块的空白节点。

        从顶层主语（URI、已命名空白节点、从未作为宾语出现的空白节点）出发做显式栈遍历。
        其余未命名空白节点至多被引用一次，因此各自的层数唯一；被截断的节点按顶层主语
        重新计数。合法列表按元素展开，链节点本身不增加层数。
        """

        graph = self._graph
        stack: list[tuple[Node, int]] = [
            (subject, 0)
            for subject in set(graph.subjects())
            if not isinstance(subject, BNode) or subject in labels or object_reference_count(graph, subject) == 0
        ]
        seen = {node for node, _ in stack}
        cut: list[BNode] = []
        while stack:
            node, depth = stack.pop()
            items = list_items(graph, node, labels) if depth > 0 else None
            children = items if items is not None else list(graph.objects(node))
            for child in children:
                if not isinstance(child, BNode) or child in labels or child in seen or not has_outgoing(graph, child):
                    continue
                seen.add(child)
                if depth >= MAX_INLINE_DEPTH:
                    cut.append(child)
                    stack.append((child, 0))
                else:
                    stack.append((child, depth + 1))
        return cut

    def _generate(self, node: BNode, counter: int, reserved: set[str]) -> tuple[str, int]:
        # 单射的生成器最多在 len(reserved) 次冲突后得到可用标签
        for _ in range(len(reserved) + 1):
            label = self._id_generator(node, counter)
            counter += 1
            if label in reserved:
                continue
            if _BLANK_NODE_LABEL.fullmatch(label) is None:
                raise FormatterError(
                    ErrorCode.INVALID_STYLE,
                    "空白节点标签生成器返回了非法标签",
                    details={"label": label},
                )
            return label, counter
        raise FormatterError(
            ErrorCode.INVALID_STYLE,
            "空白节点标签生成器无法产生不冲突的标签",
            details={"attempts": len(reserved) + 1},
        )
