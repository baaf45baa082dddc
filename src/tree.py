"""Lookup, removal and status propagation over a project tree."""
from typing import Iterator, Optional, Tuple
from models import Node
from status import compute_status


def find_node(root: Node, node_id: str) -> Optional[Node]:
    """Depth-first search; first match wins."""
    if root.id == node_id:
        return root
    for child in root.children:
        found = find_node(child, node_id)
        if found is not None:
            return found
    return None


def find_parent_of(root: Node, child_id: str) -> Optional[Node]:
    for child in root.children:
        if child.id == child_id:
            return root
        found = find_parent_of(child, child_id)
        if found is not None:
            return found
    return None


def remove_node_by_id(parent: Node, node_id: str) -> bool:
    """Drop every node with ``node_id`` below ``parent``, subtree included.

    Keeps walking the surviving children so no copy of the id is left
    anywhere in the tree. Returns True if anything was removed.
    """
    kept = [c for c in parent.children if c.id != node_id]
    removed = len(kept) != len(parent.children)
    parent.children = kept
    for child in kept:
        if remove_node_by_id(child, node_id):
            removed = True
    return removed


def sync_statuses(root: Node) -> None:
    """Post-order pass stamping the derived status on every internal node.

    Leaves are left alone, their status is the source of truth.
    """
    if not root.children:
        return
    for child in root.children:
        sync_statuses(child)
    root.status = compute_status(root)


def iter_nodes(root: Node, include_collapsed: bool = True, depth: int = 0) -> Iterator[Tuple[Node, int]]:
    """Pre-order walk yielding (node, depth) for ``root``'s descendants.

    The root itself is not yielded. With ``include_collapsed`` False the
    children of collapsed nodes are skipped.
    """
    for child in root.children:
        yield child, depth
        if include_collapsed or not child.collapsed:
            yield from iter_nodes(child, include_collapsed, depth + 1)
