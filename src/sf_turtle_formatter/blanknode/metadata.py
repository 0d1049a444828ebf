"""解析器提供的空白节点元数据。"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from rdflib import BNode


@dataclass(frozen=True, slots=True)
class BlankNodeMetadata:
    """每个空白节点的原始标签与首次出现顺序。

    属性说明：
        - labels: 源文本中显式书写的标签（``_:x`` → ``"x"``），匿名 ``[]`` 与列表节点没有标签；
        - order: 从 0 开始的首次出现序号，覆盖源文本中的全部空白节点。
    """

    labels: Mapping[BNode, str] = field(default_factory=dict)
    order: Mapping[BNode, int] = field(default_factory=dict)

    def label_of(self, node: BNode) -> str | None:
        return self.labels.get(node)

    def order_of(self, node: BNode) -> int | None:
        return self.order.get(node)

    def source_labels(self) -> frozenset[str]:
        """源文本中出现过的全部标签，生成新标签时需要避开。"""

        return frozenset(self.labels.values())


EMPTY_METADATA = BlankNodeMetadata()
