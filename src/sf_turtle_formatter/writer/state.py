"""渲染过程中的不可变输出状态。"""
from __future__ import annotations

from dataclasses import dataclass, field, replace

from rdflib.term import Node

from sf_turtle_formatter.writer.sinks import OutputSink


@dataclass(frozen=True, slots=True)
class EmissionState:
    """一次渲染中传递的输出状态。

    每次写入都返回新的状态对象；``sink`` 是唯一的可变部分。列表换行的预渲染通过
    :meth:`with_sink` 换上 ``NullSink`` 得到一份私有副本，对真实输出没有任何影响。

    属性说明：
        - sink: 输出目标；
        - end_of_line: 换行序列；
        - visited: 已作为主语写出的节点；
        - level: 当前缩进层级；
        - alignment: 当前行已写入的字符数（列号）；
        - last_char: 最近写入的字符。
    """

    sink: OutputSink
    end_of_line: str = "\n"
    visited: frozenset[Node] = field(default_factory=frozenset)
    level: int = 0
    alignment: int = 0
    last_char: str = ""

    def write(self, text: str) -> EmissionState:
        if not text:
            return self
        self.sink.write(text)
        line_break = max(text.rfind("\n"), text.rfind("\r"))
        if line_break >= 0:
            alignment = len(text) - line_break - 1
        else:
            alignment = self.alignment + len(text)
        return replace(self, alignment=alignment, last_char=text[-1])

    def new_line(self) -> EmissionState:
        return self.write(self.end_of_line)

    def with_visited(self, node: Node) -> EmissionState:
        return replace(self, visited=self.visited | {node})

    def with_level(self, level: int) -> EmissionState:
        return replace(self, level=level)

    def add_level(self) -> EmissionState:
        return replace(self, level=self.level + 1)

    def remove_level(self) -> EmissionState:
        return replace(self, level=self.level - 1)

    def with_sink(self, sink: OutputSink) -> EmissionState:
        return replace(self, sink=sink)

    @property
    def at_line_start(self) -> bool:
        """是否处于行首（尚未写入任何内容或刚写完换行）。"""

        return self.last_char == "" or self.last_char == self.end_of_line[-1]
