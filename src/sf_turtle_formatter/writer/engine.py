"""样式驱动的递归输出引擎。

按 主语 → 谓词 → 宾语 的顺序递归输出语句块，在宾语位置内联展开匿名空白节点
（``[ ... ]``）与 RDF 列表（``( ... )``）。全部输出都经过不可变的
:class:`~sf_turtle_formatter.writer.state.EmissionState`，每次写入返回新状态。

标点前后的空白由样式中的 ``before_*`` / ``after_*`` 表驱动：

=========  =====================================  =======================
分隔符      前后空白                                换行后的缩进
=========  =====================================  =======================
``,``      before_comma / after_comma              续行缩进
``;``      before_semicolon / after_semicolon      调用方给出
``.``      before_dot / after_dot                  无
``[``      before/after_opening_square_bracket     当前层级缩进
``]``      before/after_closing_square_bracket     当前层级缩进
``(``      before/after_opening_parenthesis        续行缩进
``)``      before/after_closing_parenthesis        续行缩进
=========  =====================================  =======================

列表元素在 ``FOR_LONG_LINES`` 策略下先写入 ``NullSink`` 测量结束列，再决定是否换行。
"""
from __future__ import annotations

from collections.abc import Mapping

from rdflib import BNode, Graph, URIRef
from rdflib.namespace import RDF
from rdflib.term import Node

from sf_turtle_formatter.model.nodes import NodeKind, has_outgoing, list_items, node_kind
from sf_turtle_formatter.model.prefixes import PrefixTable
from sf_turtle_formatter.ordering.comparators import NodeOrdering
from sf_turtle_formatter.style.enums import GapStyle, IndentStyle, WrappingStyle
from sf_turtle_formatter.style.formatting_style import FormattingStyle
from sf_turtle_formatter.writer.literals import LiteralWriter
from sf_turtle_formatter.writer.sinks import NullSink
from sf_turtle_formatter.writer.state import EmissionState


class TurtleWriter:
    """对单个图输出语句块的引擎。

    参数:
        graph (Graph): 数据图（只读）。
        style (FormattingStyle): 输出样式（只读）。
        prefixes (PrefixTable): 已筛选的前缀表，决定 URI 书写形式。
        ordering (NodeOrdering): 谓词、宾语的排序规则。
        labels (Mapping[BNode, str]): 必须命名的空白节点 → 标签。
    """

    def __init__(
        self,
        graph: Graph,
        style: FormattingStyle,
        prefixes: PrefixTable,
        ordering: NodeOrdering,
        labels: Mapping[BNode, str],
    ) -> None:
        self._graph = graph
        self._style = style
        self._prefixes = prefixes
        self._ordering = ordering
        self._labels = labels
        self._literals = LiteralWriter(style, prefixes.written_form)
        if style.indent_style is IndentStyle.TAB:
            self._indent_unit = "\t"
            self._continuation_unit = "\t\t"
        else:
            self._indent_unit = " " * style.indent_size
            self._continuation_unit = " " * style.continuation_indent_size

    # ---- 顶层语句 -------------------------------------------------------

    def write_named_subject(self, subject: Node, state: EmissionState) -> EmissionState:
        """输出 URI 主语或已命名空白节点主语的语句块（以 ``.`` 结束）。"""

        return self.write_subject(subject, state.with_level(0))

    def write_anonymous_subject(self, subject: BNode, state: EmissionState) -> EmissionState:
        """输出从未作为宾语出现的匿名主语：``[ ... ] .``。"""

        written = self.write_anonymous(subject, state.with_level(0))
        return self.write_dot(written, omit_space=True)

    # ---- 缩进 ---------------------------------------------------------

    def indent(self, level: int) -> str:
        return self._indent_unit * max(level, 0)

    def continuation_indent(self, level: int) -> str:
        return self.indent(level - 1) + self._continuation_unit

    # ---- 分隔符 -------------------------------------------------------

    def write_delimiter(
        self,
        delimiter: str,
        before: GapStyle,
        after: GapStyle,
        indentation: str,
        state: EmissionState,
    ) -> EmissionState:
        if before is GapStyle.SPACE:
            before_written = state if state.last_char == " " else state.write(" ")
        elif before is GapStyle.NEWLINE:
            before_written = state.new_line().write(indentation)
        else:
            before_written = state

        if after is GapStyle.SPACE:
            return before_written.write(delimiter + " ")
        if after is GapStyle.NEWLINE:
            return before_written.write(delimiter).new_line().write(indentation)
        return before_written.write(delimiter)

    def write_comma(self, state: EmissionState) -> EmissionState:
        style = self._style
        return self.write_delimiter(
            ",", style.before_comma, style.after_comma, self.continuation_indent(state.level), state
        )

    def write_semicolon(
        self,
        state: EmissionState,
        *,
        omit_line_break: bool,
        omit_space: bool,
        next_line_indentation: str,
    ) -> EmissionState:
        after = GapStyle.NOTHING if omit_line_break else self._style.after_semicolon
        before = GapStyle.NOTHING if omit_space else self._style.before_semicolon
        return self.write_delimiter(";", before, after, next_line_indentation, state)

    def write_dot(self, state: EmissionState, *, omit_space: bool) -> EmissionState:
        before = GapStyle.NOTHING if omit_space else self._style.before_dot
        return self.write_delimiter(".", before, self._style.after_dot, "", state)

    def _opening_bracket_gap(self, state: EmissionState) -> GapStyle:
        return self._style.before_opening_square_bracket if state.level > 0 else GapStyle.NOTHING

    def write_opening_square_bracket(self, state: EmissionState) -> EmissionState:
        return self.write_delimiter(
            "[",
            self._opening_bracket_gap(state),
            self._style.after_opening_square_bracket,
            self.indent(state.level),
            state,
        )

    def write_closing_square_bracket(self, state: EmissionState) -> EmissionState:
        style = self._style
        return self.write_delimiter(
            "]",
            style.before_closing_square_bracket,
            style.after_closing_square_bracket,
            self.indent(state.level),
            state,
        )

    def write_empty_brackets(self, state: EmissionState) -> EmissionState:
        return self.write_delimiter(
            "[]", self._opening_bracket_gap(state), GapStyle.NOTHING, self.indent(state.level), state
        )

    # ---- 节点 ---------------------------------------------------------

    def write_node(self, node: Node, state: EmissionState) -> EmissionState:
        kind = node_kind(node)
        if kind is NodeKind.LITERAL:
            return state.write(self._literals.render(node))
        return self.write_resource(node, state)

    def write_resource(self, node: Node, state: EmissionState) -> EmissionState:
        items = self._list_items(node)
        if items is not None:
            return self.write_list(items, state)
        if node_kind(node) is NodeKind.URI:
            return state.write(self.uri(node))
        return self.write_anonymous(node, state)

    def uri(self, node: URIRef) -> str:
        return self._prefixes.written_form(str(node))

    def predicate_form(self, predicate: URIRef) -> str:
        if predicate == RDF.type and self._style.use_a_for_rdf_type:
            return "a"
        return self.uri(predicate)

    def _list_items(self, node: Node) -> list[Node] | None:
        return list_items(self._graph, node, self._labels)

    def write_list(self, items: list[Node], state: EmissionState) -> EmissionState:
        style = self._style
        level = state.level
        wrap = style.wrap_list_items
        after_opening = GapStyle.NOTHING if wrap is WrappingStyle.ALWAYS else style.after_opening_parenthesis
        current = self.write_delimiter(
            "(", style.before_opening_parenthesis, after_opening, self.continuation_indent(level), state
        )
        for index, element in enumerate(items):
            current = self.write_list_element(element, index == 0, current)
        if wrap is WrappingStyle.ALWAYS:
            current = current.new_line().write(self.indent(current.level))
        return self.write_delimiter(
            ")",
            style.before_closing_parenthesis,
            style.after_closing_parenthesis,
            self.continuation_indent(level),
            current,
        )

    def write_list_element(self, element: Node, first: bool, state: EmissionState) -> EmissionState:
        wrap = self._style.wrap_list_items
        if wrap is WrappingStyle.NEVER:
            return self.write_node(element, state if first else state.write(" "))
        if wrap is WrappingStyle.ALWAYS:
            return self.write_node(element, state.new_line().write(self.continuation_indent(state.level)))

        # 先在丢弃输出的副本上渲染，测量元素结束时的列号
        measured = self.write_node(element, state.with_sink(NullSink()))
        if measured.alignment + 1 > self._style.max_line_length:
            return self.write_node(element, state.new_line().write(self.continuation_indent(state.level)))
        if first or state.last_char == " ":
            return self.write_node(element, state)
        return self.write_node(element, state.write(" "))

    def write_anonymous(self, node: BNode, state: EmissionState) -> EmissionState:
        label = self._labels.get(node)
        if label is not None:
            return state.write(f"_:{label}")
        if not has_outgoing(self._graph, node):
            return self.write_empty_brackets(state)
        if node in state.visited:
            return state
        opened = self.write_opening_square_bracket(state)
        content = self.write_subject(node, opened)
        return self.write_closing_square_bracket(content).with_visited(node)

    # ---- 主语与谓词 ---------------------------------------------------

    def write_subject(self, subject: Node, state: EmissionState) -> EmissionState:
        """输出主语（命名时）以及它的全部谓词与宾语。"""

        if subject in state.visited:
            return state
        style = self._style
        blank = node_kind(subject) is NodeKind.BLANK
        labeled = subject in self._labels

        if not blank or labeled:
            current = self.write_resource(subject, state.write(self.indent(state.level))).with_visited(subject)
        else:
            current = state.with_visited(subject)
        if not (style.first_predicate_in_new_line or (blank and not labeled)):
            current = current.write(" ")

        predicate_alignment = style.indent_size if style.first_predicate_in_new_line else current.alignment
        predicates = sorted(set(self._graph.predicates(subject)), key=self._ordering.predicate_key)
        widths = {predicate: len(self.predicate_form(predicate)) for predicate in predicates}
        max_width = max(widths.values(), default=0)

        current = current.add_level()
        for index, predicate in enumerate(predicates):
            if style.align_objects:
                gap = " " * (max_width - widths[predicate] + 1)
            else:
                gap = " "
            current = self._write_predicate(
                subject,
                predicate,
                first=index == 0,
                last=index == len(predicates) - 1,
                alignment=predicate_alignment,
                gap=gap,
                state=current,
            )
        return current

    def _uses_comma(self, predicate: URIRef) -> bool:
        style = self._style
        if style.use_comma_by_default:
            return predicate not in style.no_comma_for_predicate
        return predicate in style.comma_for_predicate

    def _write_predicate(
        self,
        subject: Node,
        predicate: URIRef,
        *,
        first: bool,
        last: bool,
        alignment: int,
        gap: str,
        state: EmissionState,
    ) -> EmissionState:
        style = self._style
        objects = sorted(set(self._graph.objects(subject, predicate)), key=self._ordering.object_key)
        use_comma = self._uses_comma(predicate)
        blank_subject = node_kind(subject) is NodeKind.BLANK
        named_blank = subject in self._labels
        in_brackets = blank_subject and not named_blank

        current = state
        if first and style.first_predicate_in_new_line and not blank_subject:
            current = current.new_line()

        indent_first_by_level = first and (
            (style.first_predicate_in_new_line and not in_brackets) or (in_brackets and state.level <= 1)
        )
        indent_other_by_level = not first and (in_brackets or named_blank)
        if indent_first_by_level or indent_other_by_level:
            current = current.write(self.indent(state.level))
        if first and in_brackets and state.level > 1:
            current = current.write(self.indent(1))
        pad_to_alignment = style.align_predicates and not blank_subject
        if not first and pad_to_alignment:
            current = current.write(" " * alignment)
        if use_comma:
            current = current.write(self.predicate_form(predicate)).write(gap)

        for index, obj in enumerate(objects):
            last_object = index == len(objects) - 1
            if not use_comma:
                current = current.write(self.predicate_form(predicate))
            labeled_object = obj in self._labels
            anonymous_with_brackets = node_kind(obj) is NodeKind.BLANK and not labeled_object
            is_list = self._list_items(obj) is not None
            if not (anonymous_with_brackets or is_list or use_comma):
                current = current.write(gap)

            current = self.write_node(obj, current)
            if use_comma and not last_object:
                current = self.write_comma(current)
                continue

            list_written = is_list and style.after_closing_parenthesis is GapStyle.NOTHING
            omit_space = node_kind(obj) is NodeKind.BLANK and not list_written and not labeled_object
            if last and last_object and current.level == 1 and not in_brackets:
                current = self.write_dot(current, omit_space=omit_space)
                continue

            do_align = style.align_predicates or blank_subject
            more_identical = len(objects) > 1 and not last_object
            anonymous_or_last = (blank_subject or last_object) and not more_identical
            if do_align and anonymous_or_last:
                next_indentation = ""
            elif more_identical and pad_to_alignment:
                next_indentation = " " * alignment
            else:
                next_indentation = self.indent(current.level)
            current = self.write_semicolon(
                current,
                omit_line_break=last and last_object,
                omit_space=omit_space,
                next_line_indentation=next_indentation,
            )
            if blank_subject and last and not more_identical:
                current = current.remove_level()
        return current
