"""Tree builder: derives the nested category view from the flat node list.

Nodes are stored flat with a write-once ``parent_id``; the nested tree is
rebuilt on demand. Everything here is pure: no I/O, no mutation of the
input nodes.
"""

from __future__ import annotations

import uuid
from collections import defaultdict
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from src.modules.category.schemas import CategoryTreeNode


def _sort_key(node: Any) -> tuple:
    return (node.sort_order or 0, node.id)


def _group_by_parent(nodes: Iterable[Any]) -> dict[uuid.UUID | None, list[Any]]:
    grouped: dict[uuid.UUID | None, list[Any]] = defaultdict(list)
    for node in nodes:
        grouped[node.parent_id].append(node)
    for siblings in grouped.values():
        siblings.sort(key=_sort_key)
    return grouped


def _to_tree_node(node: Any, depth: int) -> CategoryTreeNode:
    return CategoryTreeNode(
        id=node.id,
        tenant_id=getattr(node, "tenant_id", None),
        parent_id=node.parent_id,
        name=node.name,
        kind=getattr(node, "kind", None),
        image_ref=getattr(node, "image_ref", None),
        sort_order=node.sort_order or 0,
        status=node.status,
        depth=depth,
    )


def build_tree(
    nodes: Sequence[Any],
    parent_id: uuid.UUID | None = None,
    *,
    depth: int = 0,
) -> list[CategoryTreeNode]:
    """Build the forest of nodes hanging under *parent_id*.

    Siblings are ordered by ``(sort_order, id)``. Nodes whose parent is not
    reachable from *parent_id* (orphans, or members of a parent cycle) are
    left out. Each node is placed at most once, so the walk terminates on
    any input. *depth* is the depth assigned to the returned top level.
    """
    grouped = _group_by_parent(nodes)
    placed: set[uuid.UUID] = set()
    if parent_id is not None:
        placed.add(parent_id)

    def _walk(current_parent: uuid.UUID | None, current_depth: int) -> list[CategoryTreeNode]:
        level: list[CategoryTreeNode] = []
        for node in grouped.get(current_parent, []):
            if node.id in placed:
                continue
            placed.add(node.id)
            tree_node = _to_tree_node(node, current_depth)
            tree_node.children = _walk(node.id, current_depth + 1)
            tree_node.is_leaf = not tree_node.children
            level.append(tree_node)
        return level

    return _walk(parent_id, depth)


def flatten_tree(roots: Iterable[CategoryTreeNode]) -> Iterator[CategoryTreeNode]:
    """Pre-order walk over a built tree."""
    for node in roots:
        yield node
        yield from flatten_tree(node.children)


def collect_subtree_ids(nodes: Sequence[Any], root_id: uuid.UUID) -> set[uuid.UUID]:
    """Return *root_id* plus the ids of every descendant found in *nodes*."""
    grouped = _group_by_parent(nodes)
    collected = {root_id}
    pending = [root_id]
    while pending:
        current = pending.pop()
        for child in grouped.get(current, []):
            if child.id not in collected:
                collected.add(child.id)
                pending.append(child.id)
    return collected


def compute_depth(nodes: Sequence[Any], node_id: uuid.UUID) -> int | None:
    """Depth of *node_id* (0 for a root), or None when its chain never reaches a root."""
    by_id = {node.id: node for node in nodes}
    depth = 0
    seen: set[uuid.UUID] = set()
    current = by_id.get(node_id)
    while current is not None:
        if current.parent_id is None:
            return depth
        if current.id in seen:
            return None
        seen.add(current.id)
        current = by_id.get(current.parent_id)
        depth += 1
    return None
