from .metadata import EMPTY_METADATA, BlankNodeMetadata
from .parser import ParseResult, TurtleParser, parse_turtle
from .resolver import BlankNodeResolver, Resolution

__all__ = [
    "EMPTY_METADATA",
    "BlankNodeMetadata",
    "ParseResult",
    "TurtleParser",
    "parse_turtle",
    "BlankNodeResolver",
    "Resolution",
]
