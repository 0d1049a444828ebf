from .comparators import NodeOrdering

__all__ = ["NodeOrdering"]
