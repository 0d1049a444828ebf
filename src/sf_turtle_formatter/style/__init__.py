from .enums import Alignment, Charset, EndOfLineStyle, GapStyle, IndentStyle, QuoteStyle, WrappingStyle
from .formatting_style import (
    DEFAULT_EMPTY_BASE,
    FormattingStyle,
    KnownPrefix,
    default_blank_node_id,
    format_double,
)

__all__ = [
    "Alignment",
    "Charset",
    "EndOfLineStyle",
    "GapStyle",
    "IndentStyle",
    "QuoteStyle",
    "WrappingStyle",
    "DEFAULT_EMPTY_BASE",
    "FormattingStyle",
    "KnownPrefix",
    "default_blank_node_id",
    "format_double",
]
