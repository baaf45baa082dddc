"""Data models for the tree tracker.

A project owns exactly one root Node; every other node is reachable from
it through ``children``. Status keys are "todo", "doing", "review" and
"done". Only leaves hold authoritative status, internal nodes carry a
cached copy of the derived value (see status.py / tree.py).
"""
from __future__ import annotations
import logging
import secrets
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

STATUSES: Tuple[str, ...] = ("todo", "doing", "review", "done")
DEFAULT_STATUS = "todo"

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    digits: List[str] = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Millisecond clock in base36 followed by a 5 char random suffix."""
    stamp = _base36(int(time.time() * 1000))
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(5))
    return stamp + suffix


@dataclass
class Node:
    """A single tree element.

    Fields:
        id: Opaque identifier, unique within its project.
        title: Non-empty, trimmed.
        description: Free text, "" when absent.
        status: One of STATUSES. Cached derived value on internal nodes.
        children: Ordered, exclusively owned child nodes.
        collapsed: Display state only.
    """
    id: str
    title: str
    description: str = ""
    status: str = DEFAULT_STATUS
    children: List["Node"] = field(default_factory=list)
    collapsed: bool = False

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'status': self.status,
            'children': [c.to_dict() for c in self.children],
            'collapsed': self.collapsed,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Optional["Node"]:
        """Build a node tree from stored data; None when ``raw`` is unusable."""
        if not isinstance(raw, Mapping):
            return None
        raw_title = raw.get('title')
        if raw_title is None:
            return None
        status = raw.get('status')
        if status not in STATUSES:
            if status is not None:
                logger.debug("unknown status %r reset to %s", status, DEFAULT_STATUS)
            status = DEFAULT_STATUS
        nid = raw.get('id')
        children: List[Node] = []
        raw_children = raw.get('children')
        if isinstance(raw_children, list):
            for raw_child in raw_children:
                child = cls.from_dict(raw_child)
                if child is not None:
                    children.append(child)
        return cls(
            id=str(nid) if nid else generate_id(),
            title=str(raw_title),
            description=str(raw.get('description') or ''),
            status=status,
            children=children,
            collapsed=bool(raw.get('collapsed', raw.get('_collapsed', False))),  # legacy key
        )


@dataclass
class Project:
    """A named tree. ``name`` always mirrors ``root.title``."""
    id: str
    name: str
    root: Node
    created_at: str = ""

    @classmethod
    def new(cls, name: str) -> "Project":
        return cls(
            id=generate_id(),
            name=name,
            root=Node(id=generate_id(), title=name),
            created_at=datetime.now().isoformat(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'createdAt': self.created_at,
            'root': self.root.to_dict(),
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Optional["Project"]:
        if not isinstance(raw, Mapping):
            return None
        root = Node.from_dict(raw.get('root'))  # type: ignore[arg-type]
        name = raw.get('name')
        if root is None and name is None:
            return None
        if root is None:
            root = Node(id=generate_id(), title=str(name))
        name = str(name) if name is not None else root.title
        root.title = name
        return cls(
            id=str(raw.get('id') or generate_id()),
            name=name,
            root=root,
            created_at=_created_at(raw.get('createdAt')),
        )

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Project(id={self.id}, name={self.name})"


def _created_at(value: Any) -> str:
    """Normalize a stored creation stamp; epoch milliseconds become ISO text."""
    if isinstance(value, bool):
        return ''
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000).isoformat()
        except (OverflowError, OSError, ValueError):
            return ''
    return str(value) if value else ''
