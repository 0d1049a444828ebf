from .blanknode import BlankNodeMetadata, BlankNodeResolver, ParseResult, TurtleParser, parse_turtle
from .common import ErrorCode, FormatterError, StyleConfigurationError, TurtleParseError
from .converter import RenderReport, TurtleFormatter
from .ordering import NodeOrdering
from .style import (
    Alignment,
    Charset,
    EndOfLineStyle,
    FormattingStyle,
    GapStyle,
    IndentStyle,
    KnownPrefix,
    QuoteStyle,
    WrappingStyle,
)

__all__ = [
    "BlankNodeMetadata",
    "BlankNodeResolver",
    "ParseResult",
    "TurtleParser",
    "parse_turtle",
    "ErrorCode",
    "FormatterError",
    "StyleConfigurationError",
    "TurtleParseError",
    "RenderReport",
    "TurtleFormatter",
    "NodeOrdering",
    "Alignment",
    "Charset",
    "EndOfLineStyle",
    "FormattingStyle",
    "GapStyle",
    "IndentStyle",
    "KnownPrefix",
    "QuoteStyle",
    "WrappingStyle",
]
