from .nodes import NodeKind, has_outgoing, list_items, node_kind, object_reference_count
from .prefixes import PrefixTable, bracketed, is_valid_local_name, is_valid_prefix_name

__all__ = [
    "NodeKind",
    "has_outgoing",
    "list_items",
    "node_kind",
    "object_reference_count",
    "PrefixTable",
    "bracketed",
    "is_valid_local_name",
    "is_valid_prefix_name",
]
