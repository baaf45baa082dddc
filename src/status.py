"""Derived status and progress, computed from a tree snapshot without mutating it.

Priority for an internal node, evaluated over its children's effective
statuses: all done -> done, any doing -> doing, any review -> review,
otherwise todo.
"""
from typing import Dict, NamedTuple
from models import Node, STATUSES

STATUS_LABELS: Dict[str, str] = {"todo": "To Do", "doing": "Doing", "review": "Review", "done": "Done"}


class LeafCount(NamedTuple):
    done: int
    total: int


def compute_status(node: Node) -> str:
    if not node.children:
        return node.status
    child_statuses = [compute_status(c) for c in node.children]
    if all(s == 'done' for s in child_statuses):
        return 'done'
    if 'doing' in child_statuses:
        return 'doing'
    if 'review' in child_statuses:
        return 'review'
    return 'todo'


def count_leaves(node: Node) -> LeafCount:
    """Count done/total over leaf descendants; a leaf counts itself."""
    if not node.children:
        return LeafCount(1 if node.status == 'done' else 0, 1)
    done = total = 0
    for child in node.children:
        c = count_leaves(child)
        done += c.done
        total += c.total
    return LeafCount(done, total)


def next_status(status: str) -> str:
    """todo -> doing -> review -> done -> todo. Unknown values restart at todo."""
    if status not in STATUSES:
        return STATUSES[0]
    return STATUSES[(STATUSES.index(status) + 1) % len(STATUSES)]


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)
