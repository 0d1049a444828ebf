"""记录空白节点元数据的 Turtle 解析器。

在 rdflib notation3 解析器的基础上扩展：

- 记录每个空白节点首次出现的顺序（含 ``[]`` 与列表节点）；
- 记录源文本中显式书写的 ``_:label``；
- 关闭字面量规范化，数值与字符串保持源文本中的词法形式（``-5.0`` 不会变成 ``-5``，
  ``0.00000000062`` 不会变成科学计数法）。
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from rdflib import BNode, Graph, Literal
from rdflib.namespace import XSD
from rdflib.plugins.parsers.notation3 import BadSyntax, RDFSink, SinkParser, sfloat

from sf_turtle_formatter.blanknode.metadata import BlankNodeMetadata
from sf_turtle_formatter.common.exceptions import TurtleParseError
from sf_turtle_formatter.common.logging import LoggerFactory
from sf_turtle_formatter.style.formatting_style import DEFAULT_EMPTY_BASE

_NUMERIC_DATATYPES = {
    sfloat: XSD.double,
    Decimal: XSD.decimal,
    int: XSD.integer,
}


@dataclass(frozen=True, slots=True)
class ParseResult:
    """解析结果。

    属性说明：
        - graph: 解析得到的图（不绑定 rdflib 默认命名空间）；
        - prefixes: 源文本中的 ``@prefix`` 声明，保留同一 IRI 的多个前缀；
        - metadata: 空白节点标签与顺序。
    """

    graph: Graph
    prefixes: dict[str, str]
    metadata: BlankNodeMetadata


class _RecordingSink(RDFSink):
    def __init__(self, graph: Graph) -> None:
        super().__init__(graph)
        self.order: dict[BNode, int] = {}

    def newBlankNode(self, arg: Any = None, uri: str | None = None, why: Any = None) -> BNode:  # noqa: N802
        node = super().newBlankNode(arg, uri, why)
        self.order.setdefault(node, len(self.order))
        return node

    def newLiteral(self, s: str, dt: Any, lang: str | None) -> Literal:  # noqa: N802
        if dt:
            return Literal(s, datatype=dt, normalize=False)
        return Literal(s, lang=lang, normalize=False)


class _RecordingParser(SinkParser):
    def __init__(self, sink: _RecordingSink, base: str) -> None:
        super().__init__(sink, baseURI=base, turtle=True)
        self.labels: dict[BNode, str] = {}

    def anonymousNode(self, ln: str) -> BNode:  # noqa: N802
        node = super().anonymousNode(ln)
        self.labels.setdefault(node, ln)
        return node

    def nodeOrLiteral(self, argstr: str, i: int, res: list[Any]) -> int:  # noqa: N802
        start = len(res)
        j = super().nodeOrLiteral(argstr, i, res)
        if j < 0 or len(res) != start + 1:
            return j
        datatype = _NUMERIC_DATATYPES.get(type(res[-1]))
        if datatype is not None:
            token = argstr[self.skipSpace(argstr, i):j]
            res[-1] = Literal(token, datatype=datatype, normalize=False)
        return j


class TurtleParser:
    """把 Turtle 文本解析为图与空白节点元数据。

    参数:
        base (str): 相对 IRI 的解析基准；默认的内部占位 IRI 会在输出时被剥离，
            从而保证 ``<>``、``<#x>`` 原样往返。
    """

    def __init__(self, *, base: str = DEFAULT_EMPTY_BASE) -> None:
        self._base = base
        self._logger = LoggerFactory.create_default_logger(__name__)

    def parse(self, text: str | bytes) -> ParseResult:
        """解析 Turtle 文本。

        参数:
            text (str | bytes): Turtle 源文本；bytes 按 UTF-8 解码（允许 BOM）。

        返回:
            ParseResult: 图、前缀声明与空白节点元数据。

        异常:
            TurtleParseError: 语法错误，或相对 IRI 无法基于 ``base`` 解析。
        """

        graph = Graph(bind_namespaces="none")
        sink = _RecordingSink(graph)
        parser = _RecordingParser(sink, self._base)
        try:
            parser.loadBuf(text)
        except BadSyntax as exc:
            raise TurtleParseError("Turtle 语法错误", details={"line": exc.lines + 1, "error": str(exc)}) from exc
        except ValueError as exc:
            raise TurtleParseError("无法解析 Turtle 内容", details={"error": str(exc)}) from exc

        prefixes = {str(prefix): str(namespace) for prefix, namespace in parser._bindings.items()}
        for prefix, namespace in prefixes.items():
            graph.bind(prefix, namespace)
        metadata = BlankNodeMetadata(labels=dict(parser.labels), order=dict(sink.order))
        self._logger.debug(
            "解析完成：%d 条三元组，%d 个前缀，%d 个空白节点（%d 个带标签）",
            len(graph),
            len(prefixes),
            len(metadata.order),
            len(metadata.labels),
        )
        return ParseResult(graph=graph, prefixes=prefixes, metadata=metadata)


def parse_turtle(text: str | bytes, *, base: str = DEFAULT_EMPTY_BASE) -> ParseResult:
    """便捷函数：``TurtleParser(base=base).parse(text)``。"""

    return TurtleParser(base=base).parse(text)
