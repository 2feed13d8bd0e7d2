"""Locking policy resolver: decides where children may be added and where forms attach."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from src.config import settings
from src.modules.category.constants import (
    DEPTH_CATEGORY,
    DEPTH_CHILD_CATEGORY,
    DEPTH_SUB_CATEGORY,
)
from src.modules.category.schemas import CategoryTreeNode, LockingPolicy

_LOCK_FLAGS = {
    DEPTH_CATEGORY: "lock_category",
    DEPTH_SUB_CATEGORY: "lock_sub_category",
    DEPTH_CHILD_CATEGORY: "lock_child_category",
}


@dataclass(frozen=True)
class NodeActions:
    children_locked: bool
    can_add_child: bool
    can_attach_form: bool


def parse_policy(locking_json: dict | None) -> LockingPolicy | None:
    """Turn the stored sparse document into a policy; missing keys read as unlocked."""
    if not locking_json:
        return None
    return LockingPolicy.model_validate(locking_json)


def is_locked(policy: LockingPolicy | None, depth: int) -> bool:
    """Whether new nodes may not be created at *depth*.

    No policy means nothing is locked, and depth 0 is never lockable.
    """
    if policy is None:
        return False
    flag = _LOCK_FLAGS.get(depth)
    if flag is None:
        return False
    return bool(getattr(policy, flag))


def can_create_at(policy: LockingPolicy | None, depth: int, max_depth: int | None = None) -> bool:
    limit = settings.max_tree_depth if max_depth is None else max_depth
    return depth <= limit and not is_locked(policy, depth)


def node_actions(
    depth: int,
    is_leaf: bool,
    policy: LockingPolicy | None,
    max_depth: int | None = None,
) -> NodeActions:
    """Affordances for one node at *depth*.

    The add-child action is offered only when the level below is open. The
    form action is offered on every leaf, whatever the lock state, and on
    nodes whose child level is locked.
    """
    children_locked = is_locked(policy, depth + 1)
    return NodeActions(
        children_locked=children_locked,
        can_add_child=can_create_at(policy, depth + 1, max_depth),
        can_attach_form=is_leaf or children_locked,
    )


def annotate_tree(
    roots: Iterable[CategoryTreeNode],
    policy: LockingPolicy | None,
    form_category_ids: set | None = None,
    max_depth: int | None = None,
) -> None:
    """Stamp lock/leaf affordances onto every node of a built tree, in place."""
    form_ids = form_category_ids or set()
    for node in roots:
        node.is_leaf = not node.children
        actions = node_actions(node.depth, node.is_leaf, policy, max_depth)
        node.children_locked = actions.children_locked
        node.can_add_child = actions.can_add_child
        node.can_attach_form = actions.can_attach_form
        node.has_form = node.id in form_ids
        annotate_tree(node.children, policy, form_ids, max_depth)
