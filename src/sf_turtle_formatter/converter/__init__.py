from .turtle_formatter import RenderReport, TurtleFormatter

__all__ = ["RenderReport", "TurtleFormatter"]
