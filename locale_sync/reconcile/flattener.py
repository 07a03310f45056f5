"""Flattening of nested key trees into dot-path maps."""

from typing import Any, Dict

FlatKeyMap = Dict[str, Any]

PATH_SEPARATOR = "."


def is_object_node(value: Any) -> bool:
    """Return True for nodes that hold children.

    ``None`` and lists are leaves; only mappings are recursed into.
    """
    if value is None:
        return False
    return isinstance(value, dict)


def flatten(tree: Dict[str, Any], parent_key: str = "") -> FlatKeyMap:
    """Project a key tree onto an ordered ``path -> leaf`` map.

    Order is depth-first pre-order of ``tree``. Empty object nodes contribute
    nothing.
    """
    flat: FlatKeyMap = {}
    for key, value in tree.items():
        full_key = f"{parent_key}{PATH_SEPARATOR}{key}" if parent_key else key
        if is_object_node(value):
            flat.update(flatten(value, full_key))
        else:
            flat[full_key] = value
    return flat
