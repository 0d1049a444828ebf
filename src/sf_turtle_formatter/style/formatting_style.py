"""格式化样式配置模型。

``FormattingStyle`` 是一次渲染所需全部布局参数的不可变记录（Pydantic v2，frozen）。
字段使用 snake_case，同时接受 camelCase 别名，便于从 YAML 配置文件加载：

.. code-block:: yaml

    style:
      alignPredicates: true
      wrapListItems: NEVER
      subjectOrder:
        - http://www.w3.org/2002/07/owl#Class

不可在配置层表达的可调用参数（空白节点标签生成器、double 格式化函数）只能通过
Python 代码传入。
"""
from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal
from typing import Annotated, Any, Callable

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from rdflib import BNode, URIRef
from rdflib.namespace import DCTERMS, OWL, RDF, RDFS, XSD

from sf_turtle_formatter.style.enums import (
    Alignment,
    Charset,
    EndOfLineStyle,
    GapStyle,
    IndentStyle,
    QuoteStyle,
    WrappingStyle,
)

DEFAULT_EMPTY_BASE = "urn:turtleformatter:internal"

_MANTISSA_QUANTUM = Decimal("0.0001")


def _as_uriref(value: Any) -> Any:
    if isinstance(value, str) and not isinstance(value, URIRef):
        return URIRef(value)
    return value


IRI = Annotated[URIRef, BeforeValidator(_as_uriref)]


class KnownPrefix(BaseModel):
    """样式内置的前缀声明。"""

    model_config = ConfigDict(frozen=True)

    prefix: str
    iri: str


RDF_PREFIX = KnownPrefix(prefix="rdf", iri=str(RDF))
RDFS_PREFIX = KnownPrefix(prefix="rdfs", iri=str(RDFS))
XSD_PREFIX = KnownPrefix(prefix="xsd", iri=str(XSD))
OWL_PREFIX = KnownPrefix(prefix="owl", iri=str(OWL))
DCTERMS_PREFIX = KnownPrefix(prefix="dcterms", iri=str(DCTERMS))


def default_blank_node_id(node: BNode, index: int) -> str:  # noqa: ARG001 - 生成器签名约定
    """默认空白节点标签：``gen0``、``gen1`` ……（不含 ``_:``）。"""

    return f"gen{index}"


def format_double(value: float) -> str:
    """按 ``0.####E0`` 模式格式化 double。

    尾数保留至多 4 位小数（银行家舍入），指数不带正号，例如 ``4.2E9``、``1E0``、
    ``6.2415E-10``。

    参数:
        value (float): 有限的浮点数。

    返回:
        str: 可直接作为 Turtle DOUBLE 书写的文本。
    """

    if value == 0:
        return "-0E0" if str(value).startswith("-") else "0E0"
    number = Decimal(repr(value))
    exponent = number.adjusted()
    mantissa = number.scaleb(-exponent).quantize(_MANTISSA_QUANTUM, rounding=ROUND_HALF_EVEN)
    if abs(mantissa) >= 10:
        exponent += 1
        mantissa = (mantissa / 10).quantize(_MANTISSA_QUANTUM, rounding=ROUND_HALF_EVEN)
    text = format(mantissa, "f").rstrip("0").rstrip(".")
    return f"{text}E{exponent}"


class FormattingStyle(BaseModel):
    """Turtle 输出样式。

    主要参数分组：
        - 前缀：``known_prefixes``、``prefix_order``、``align_prefixes``、``keep_unused_prefixes``；
        - 分隔符间距：``before_*`` / ``after_*``，取值为 :class:`GapStyle`；
        - 缩进与对齐：``indent_style``、``indent_size``、``continuation_indent_size``、
          ``align_predicates``、``align_objects``、``first_predicate_in_new_line``；
        - 排序：``subject_order``、``predicate_order``、``object_order``；
        - 字面量：``quote_style``、``enable_double_formatting``、``double_formatter``；
        - 列表：``wrap_list_items``、``max_line_length``；
        - 边界：``charset``、``end_of_line``、``insert_final_newline``。

    异常:
        pydantic.ValidationError: 数值越界，或在 TAB 缩进下开启谓词/宾语对齐。
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    known_prefixes: tuple[KnownPrefix, ...] = (
        RDF_PREFIX,
        RDFS_PREFIX,
        XSD_PREFIX,
        OWL_PREFIX,
        DCTERMS_PREFIX,
    )
    empty_rdf_base: str = DEFAULT_EMPTY_BASE
    align_prefixes: Alignment = Alignment.OFF
    keep_unused_prefixes: bool = False

    after_closing_parenthesis: GapStyle = GapStyle.NOTHING
    after_closing_square_bracket: GapStyle = GapStyle.SPACE
    after_comma: GapStyle = GapStyle.SPACE
    after_dot: GapStyle = GapStyle.NEWLINE
    after_opening_parenthesis: GapStyle = GapStyle.SPACE
    after_opening_square_bracket: GapStyle = GapStyle.NEWLINE
    after_semicolon: GapStyle = GapStyle.NEWLINE
    before_closing_parenthesis: GapStyle = GapStyle.SPACE
    before_closing_square_bracket: GapStyle = GapStyle.NEWLINE
    before_comma: GapStyle = GapStyle.NOTHING
    before_dot: GapStyle = GapStyle.SPACE
    before_opening_parenthesis: GapStyle = GapStyle.SPACE
    before_opening_square_bracket: GapStyle = GapStyle.SPACE
    before_semicolon: GapStyle = GapStyle.SPACE

    charset: Charset = Charset.UTF_8
    end_of_line: EndOfLineStyle = EndOfLineStyle.LF
    indent_style: IndentStyle = IndentStyle.SPACE
    indent_size: int = Field(default=2, ge=0, le=32)
    continuation_indent_size: int = Field(default=4, ge=0, le=32)
    max_line_length: int = Field(default=100, ge=1)
    wrap_list_items: WrappingStyle = WrappingStyle.FOR_LONG_LINES
    quote_style: QuoteStyle = QuoteStyle.TRIPLE_QUOTES_FOR_MULTILINE

    first_predicate_in_new_line: bool = False
    use_a_for_rdf_type: bool = True
    use_comma_by_default: bool = False
    comma_for_predicate: frozenset[IRI] = frozenset({RDF.type})
    no_comma_for_predicate: frozenset[IRI] = frozenset()
    align_predicates: bool = False
    align_objects: bool = False
    insert_final_newline: bool = True

    enable_double_formatting: bool = False
    double_formatter: Callable[[float], str] = Field(default=format_double, exclude=True)
    blank_node_id_generator: Callable[[BNode, int], str] = Field(default=default_blank_node_id, exclude=True)

    prefix_order: tuple[str, ...] = ("rdf", "rdfs", "xsd", "owl")
    subject_order: tuple[IRI, ...] = (
        RDFS.Class,
        OWL.Ontology,
        OWL.Class,
        RDF.Property,
        OWL.ObjectProperty,
        OWL.DatatypeProperty,
        OWL.AnnotationProperty,
        OWL.NamedIndividual,
        OWL.AllDifferent,
        OWL.Axiom,
    )
    predicate_order: tuple[IRI, ...] = (RDF.type, RDFS.label, RDFS.comment, DCTERMS.description)
    object_order: tuple[IRI, ...] = (
        OWL.NamedIndividual,
        OWL.ObjectProperty,
        OWL.DatatypeProperty,
        OWL.AnnotationProperty,
        OWL.FunctionalProperty,
        OWL.InverseFunctionalProperty,
        OWL.TransitiveProperty,
        OWL.SymmetricProperty,
        OWL.AsymmetricProperty,
        OWL.ReflexiveProperty,
        OWL.IrreflexiveProperty,
    )

    @model_validator(mode="after")
    def check_alignment_indent(self) -> "FormattingStyle":
        if self.indent_style is IndentStyle.TAB and (self.align_predicates or self.align_objects):
            raise ValueError("align_predicates/align_objects 需要以空格计列，不能与 TAB 缩进同时使用")
        return self

    @property
    def end_of_line_sequence(self) -> str:
        return self.end_of_line.sequence

    def with_changes(self, **changes: Any) -> "FormattingStyle":
        """基于当前样式创建修改后的副本，修改项同样经过校验。

        参数:
            **changes: 以字段名（snake_case）给出的新值。

        返回:
            FormattingStyle: 新的样式实例；原实例不变。
        """

        data = {name: getattr(self, name) for name in type(self).model_fields}
        data.update(changes)
        return type(self).model_validate(data)
