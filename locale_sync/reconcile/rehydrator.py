"""Merging of translated flat maps back into key trees."""

from typing import Any, Dict, List, Mapping

import structlog

from locale_sync.errors import StructuralConflictError

from .flattener import PATH_SEPARATOR, is_object_node

logger = structlog.get_logger(__name__)


def _check_path(tree: Dict[str, Any], segments: List[str], path: str) -> None:
    """Raise if writing ``path`` would overwrite existing content."""
    node: Any = tree
    for depth, segment in enumerate(segments[:-1]):
        if segment not in node:
            # Everything below is created fresh
            return
        child = node[segment]
        if not is_object_node(child):
            raise StructuralConflictError(
                f"Cannot write '{path}': '{PATH_SEPARATOR.join(segments[:depth + 1])}' holds a value",
                path=path,
                segment=segment,
            )
        node = child

    terminal = segments[-1]
    if terminal in node and is_object_node(node[terminal]) and node[terminal]:
        raise StructuralConflictError(
            f"Cannot write '{path}': it holds nested keys",
            path=path,
            segment=terminal,
        )


def rehydrate(tree: Dict[str, Any], translated: Mapping[str, Any]) -> Dict[str, Any]:
    """Write every ``path -> value`` of ``translated`` into ``tree``.

    Intermediate object nodes are created as needed; keys outside
    ``translated`` are left alone. All paths are checked before the first
    write, so a conflict leaves ``tree`` unchanged.

    Returns:
        The same ``tree`` object, for chaining

    Raises:
        StructuralConflictError: If a path runs through a leaf value
    """
    split_paths = [(path, path.split(PATH_SEPARATOR)) for path in translated]

    paths = set(translated)
    for path, segments in split_paths:
        _check_path(tree, segments, path)
        for depth in range(1, len(segments)):
            prefix = PATH_SEPARATOR.join(segments[:depth])
            if prefix in paths:
                raise StructuralConflictError(
                    f"Cannot write '{path}': '{prefix}' is written as a value in the same batch",
                    path=path,
                    segment=segments[depth - 1],
                )

    for path, segments in split_paths:
        node = tree
        for segment in segments[:-1]:
            if segment not in node:
                node[segment] = {}
            node = node[segment]
        node[segments[-1]] = translated[path]

    logger.debug("Tree rehydrated", keys=len(split_paths))
    return tree
