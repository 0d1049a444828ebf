"""RDF 图 → 规范 Turtle 文本。

本模块串联前缀表、空白节点命名、排序规则与输出引擎，提供三种入口：

- ``apply``：渲染为字符串；
- ``write``：按样式字符集编码后写入二进制流（UTF_8_BOM 先写 EF BB BF）；
- ``apply_to_content``：先用记录空白节点元数据的解析器解析 Turtle 文本，再渲染。

输出分为四段：前缀声明 → 命名主语（URI 主语与从未作为宾语出现的匿名主语）→
其余带标签的空白节点主语 → 可选的结尾换行。语句块之间恰好空一行。
"""
from __future__ import annotations

import codecs
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import BinaryIO

from rdflib import Graph, Literal, URIRef
from rdflib.namespace import RDF, XSD

from sf_turtle_formatter.blanknode.metadata import EMPTY_METADATA, BlankNodeMetadata
from sf_turtle_formatter.blanknode.parser import parse_turtle
from sf_turtle_formatter.blanknode.resolver import BlankNodeResolver
from sf_turtle_formatter.common.config import ConfigManager
from sf_turtle_formatter.common.logging import LoggerFactory
from sf_turtle_formatter.common.observability import observe_render
from sf_turtle_formatter.model.nodes import has_outgoing
from sf_turtle_formatter.model.prefixes import PrefixTable, bracketed
from sf_turtle_formatter.ordering.comparators import NodeOrdering
from sf_turtle_formatter.style.enums import Alignment, Charset, GapStyle
from sf_turtle_formatter.style.formatting_style import FormattingStyle
from sf_turtle_formatter.writer.engine import TurtleWriter
from sf_turtle_formatter.writer.sinks import OutputSink, StreamSink, TextSink
from sf_turtle_formatter.writer.state import EmissionState


@dataclass(frozen=True, slots=True)
class RenderReport:
    """一次渲染的统计结果。

    属性说明：
        - subjects: 写出的顶层语句块数量；
        - labeled_blank_nodes: 以 ``_:label`` 书写的空白节点数量；
        - failures: 输出流写入失败的错误信息（为空表示全部写入成功）。
    """

    subjects: int = 0
    labeled_blank_nodes: int = 0
    failures: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures


class TurtleFormatter:
    """按 :class:`FormattingStyle` 把 RDF 图渲染为 Turtle。

    参数:
        style (FormattingStyle | None): 输出样式；为空时使用 ``ConfigManager`` 中配置的样式。
        prefixes (Mapping[str, str] | None): 默认前缀声明；为空时使用图中绑定的命名空间。

    线程安全：
        - 实例只持有只读配置，每次渲染构建独立的状态、标签表与输出目标，可并发复用。
    """

    def __init__(self, style: FormattingStyle | None = None, *, prefixes: Mapping[str, str] | None = None) -> None:
        self._style = style if style is not None else ConfigManager.current().settings.style
        self._prefixes = dict(prefixes) if prefixes is not None else None
        self._logger = LoggerFactory.create_default_logger(__name__)

    @property
    def style(self) -> FormattingStyle:
        return self._style

    def apply(
        self,
        graph: Graph,
        *,
        metadata: BlankNodeMetadata | None = None,
        prefixes: Mapping[str, str] | None = None,
    ) -> str:
        """把图渲染为 Turtle 字符串。

        参数:
            graph (Graph): 待渲染的图。
            metadata (BlankNodeMetadata | None): 解析器提供的空白节点标签与顺序；缺省时
                空白节点之间的相对顺序仅对同一个图对象稳定。
            prefixes (Mapping[str, str] | None): 本次渲染使用的前缀声明，优先于构造参数。

        返回:
            str: Turtle 文本。
        """

        sink = TextSink()
        self._render(graph, sink, metadata, prefixes)
        return sink.getvalue()

    def write(
        self,
        graph: Graph,
        stream: BinaryIO,
        *,
        metadata: BlankNodeMetadata | None = None,
        prefixes: Mapping[str, str] | None = None,
    ) -> RenderReport:
        """把图渲染后按样式字符集写入二进制流。

        写入失败只记录日志与指标，不会抛出；调用方通过 ``RenderReport.failures`` 判断结果。

        参数:
            graph (Graph): 待渲染的图。
            stream (BinaryIO): 目标流。
            metadata (BlankNodeMetadata | None): 空白节点元数据。
            prefixes (Mapping[str, str] | None): 本次渲染使用的前缀声明。

        返回:
            RenderReport: 渲染统计与写入失败信息。
        """

        charset = self._style.charset
        sink = StreamSink(stream, charset.codec, name=type(stream).__name__)
        if charset is Charset.UTF_8_BOM:
            sink.write_bytes(codecs.BOM_UTF8)
        subjects, labeled = self._render(graph, sink, metadata, prefixes)
        return RenderReport(subjects=subjects, labeled_blank_nodes=labeled, failures=tuple(sink.failures))

    def apply_to_content(self, content: str | bytes) -> str:
        """解析 Turtle 文本并以当前样式重新输出。

        解析阶段记录的空白节点顺序与原始标签会参与排序与命名，因此结果对同一输入完全确定，
        再次格式化输出结果得到相同文本。

        参数:
            content (str | bytes): Turtle 源文本。

        返回:
            str: 格式化后的 Turtle 文本。

        异常:
            TurtleParseError: 源文本无法解析。
        """

        result = parse_turtle(content, base=self._style.empty_rdf_base)
        return self.apply(result.graph, metadata=result.metadata, prefixes=result.prefixes)

    # ----------------------------
    # 内部实现
    # ----------------------------
    def _render(
        self,
        graph: Graph,
        sink: OutputSink,
        metadata: BlankNodeMetadata | None,
        prefixes: Mapping[str, str] | None,
    ) -> tuple[int, int]:
        started = time.perf_counter()
        style = self._style
        metadata = metadata or EMPTY_METADATA

        table = self._prefix_table(graph, prefixes)
        ordering = NodeOrdering(style, table, metadata)
        resolution = BlankNodeResolver(graph, ordering, metadata, style.blank_node_id_generator).resolve()
        ordering = ordering.with_generated(resolution.sequence)
        writer = TurtleWriter(graph, style, table, ordering, resolution.labels)

        state = EmissionState(sink, end_of_line=style.end_of_line_sequence)
        state = self._write_prefixes(table, ordering, state)
        if table:
            state = state.new_line()
        separate = False
        subjects = 0

        for subject in ordering.ordered_subjects(graph):
            if subject in state.visited or not has_outgoing(graph, subject):
                continue
            if isinstance(subject, URIRef):
                state = state.new_line() if separate else state
                state = writer.write_named_subject(subject, state)
            elif subject not in resolution.labels and (None, None, subject) not in graph:
                state = state.new_line() if separate else state
                state = writer.write_anonymous_subject(subject, state)
            else:
                continue
            separate = True
            subjects += 1

        for subject in sorted(resolution.labels, key=ordering.node_key):
            if subject in state.visited or not has_outgoing(graph, subject):
                continue
            state = state.new_line() if separate else state
            state = writer.write_named_subject(subject, state)
            separate = True
            subjects += 1

        if style.insert_final_newline and not state.at_line_start:
            state = state.new_line()

        self._logger.debug(
            "渲染完成：%d 个语句块，%d 个资源，%d 个命名空白节点",
            subjects,
            len(state.visited),
            len(resolution.labels),
        )
        observe_render(time.perf_counter() - started, subjects, len(resolution.labels))
        return subjects, len(resolution.labels)

    def _prefix_table(self, graph: Graph, prefixes: Mapping[str, str] | None) -> PrefixTable:
        style = self._style
        declared = prefixes if prefixes is not None else self._prefixes
        if declared is None:
            declared = {str(prefix): str(namespace) for prefix, namespace in graph.namespaces()}
        merged = dict(declared)
        for known in style.known_prefixes:
            merged.setdefault(known.prefix, known.iri)
        table = PrefixTable(merged, style.empty_rdf_base)
        if style.keep_unused_prefixes:
            return table

        used = _used_uris(graph)
        kept = {prefix for prefix, namespace in table.items() if any(uri.startswith(namespace) for uri in used)}
        return table.restricted_to(kept)

    def _write_prefixes(self, table: PrefixTable, ordering: NodeOrdering, state: EmissionState) -> EmissionState:
        style = self._style
        names = sorted(table, key=ordering.prefix_key)
        width = max((len(name) for name in names), default=0)
        before_dot = " " if style.before_dot is GapStyle.SPACE else ""
        for name in names:
            if style.align_prefixes is Alignment.LEFT:
                label = name.ljust(width)
            elif style.align_prefixes is Alignment.RIGHT:
                label = name.rjust(width)
            else:
                label = name
            iri = bracketed(table.relative(table[name]))
            state = state.write(f"@prefix {label}: {iri}{before_dot}.").new_line()
        return state


def _used_uris(graph: Graph) -> set[str]:
    """图中出现的全部 URI 以及字面量的数据类型 URI。"""

    used: set[str] = set()
    for triple in graph:
        for node in triple:
            if isinstance(node, URIRef):
                used.add(str(node))
            elif isinstance(node, Literal):
                if node.language:
                    used.add(str(RDF.langString))
                else:
                    used.add(str(node.datatype or XSD.string))
    return used
