from .engine import TurtleWriter
from .literals import LiteralWriter
from .sinks import OUTPUT_ERROR_MESSAGE, NullSink, OutputSink, StreamSink, TextSink
from .state import EmissionState

__all__ = [
    "TurtleWriter",
    "LiteralWriter",
    "OUTPUT_ERROR_MESSAGE",
    "NullSink",
    "OutputSink",
    "StreamSink",
    "TextSink",
    "EmissionState",
]
