"""Project registry: the project collection, active selection and every tree mutation.

All commands validate before they touch a tree, then propagate derived
statuses from the project root and persist the whole registry. Invalid
input (blank title, unknown id, unknown status) is a silent no-op reported
through the return value.
"""
import logging
from typing import Any, Dict, Iterable, List, NamedTuple, Optional
from models import Node, Project, STATUSES, DEFAULT_STATUS, generate_id
from status import LeafCount, compute_status, count_leaves, next_status
from storage import Storage, StateDict
from tree import find_node, remove_node_by_id, sync_statuses

logger = logging.getLogger(__name__)


class ProjectSummary(NamedTuple):
    project: Project
    status: str
    leaves: LeafCount
    active: bool


class Registry:
    def __init__(self, projects: Optional[Iterable[Project]] = None,
                 storage: Optional[Storage] = None):
        self.projects: List[Project] = list(projects or [])
        self.storage: Optional[Storage] = storage
        self.active_id: Optional[str] = self.projects[0].id if self.projects else None

    # -------------------- loading / serialization --------------------
    @classmethod
    def from_dict(cls, state: Dict[str, Any], storage: Optional[Storage] = None) -> "Registry":
        projects: List[Project] = []
        raw_projects = state.get('projects') if isinstance(state, dict) else None
        for raw in raw_projects or []:
            project = Project.from_dict(raw)
            if project is None:
                logger.warning("skipping unreadable project entry")
                continue
            sync_statuses(project.root)
            projects.append(project)
        return cls(projects, storage)

    @classmethod
    def load(cls, storage: Storage) -> "Registry":
        return cls.from_dict(storage.load_state(), storage)

    def to_dict(self) -> StateDict:
        return {"projects": [p.to_dict() for p in self.projects]}

    def _commit(self) -> None:
        if self.storage is not None:
            self.storage.save_state(self.to_dict())

    # -------------------- queries --------------------
    def get_project(self, project_id: Optional[str]) -> Optional[Project]:
        for project in self.projects:
            if project.id == project_id:
                return project
        return None

    def active_project(self) -> Optional[Project]:
        return self.get_project(self.active_id)

    def _resolve(self, project_id: Optional[str]) -> Optional[Project]:
        return self.get_project(project_id) if project_id is not None else self.active_project()

    def summaries(self) -> List[ProjectSummary]:
        """Projects in registry order with live derived status and leaf counts."""
        return [
            ProjectSummary(p, compute_status(p.root), count_leaves(p.root), p.id == self.active_id)
            for p in self.projects
        ]

    def get_node(self, node_id: str, project_id: Optional[str] = None) -> Optional[Node]:
        project = self._resolve(project_id)
        if project is None:
            return None
        return find_node(project.root, node_id)

    def node_status(self, node_id: str, project_id: Optional[str] = None) -> Optional[str]:
        node = self.get_node(node_id, project_id)
        return compute_status(node) if node is not None else None

    def node_progress(self, node_id: str, project_id: Optional[str] = None) -> Optional[LeafCount]:
        node = self.get_node(node_id, project_id)
        return count_leaves(node) if node is not None else None

    # -------------------- selection --------------------
    def select(self, project_id: str) -> bool:
        if self.get_project(project_id) is None:
            return False
        self.active_id = project_id
        return True

    # -------------------- project commands --------------------
    def create_project(self, name: str) -> Optional[Project]:
        name = (name or '').strip()
        if not name:
            return None
        project = Project.new(name)
        self.projects.append(project)
        self.active_id = project.id
        self._commit()
        logger.info("created project %s (%s)", project.name, project.id)
        return project

    def rename_project(self, project_id: str, new_name: str) -> bool:
        new_name = (new_name or '').strip()
        project = self.get_project(project_id)
        if project is None or not new_name:
            return False
        project.name = new_name
        project.root.title = new_name
        self._commit()
        return True

    def delete_project(self, project_id: str) -> bool:
        """Remove a project for good. Callers confirm with the user first."""
        project = self.get_project(project_id)
        if project is None:
            return False
        self.projects.remove(project)
        if self.active_id == project_id:
            self.active_id = self.projects[0].id if self.projects else None
        self._commit()
        logger.info("deleted project %s (%s)", project.name, project.id)
        return True

    # -------------------- node commands --------------------
    def add_node(self, title: str, description: str = '', status: str = DEFAULT_STATUS,
                 parent_id: Optional[str] = None, project_id: Optional[str] = None) -> Optional[Node]:
        """Append a new leaf under ``parent_id`` (project root when omitted)."""
        title = (title or '').strip()
        project = self._resolve(project_id)
        if not title or project is None or status not in STATUSES:
            return None
        parent = project.root if parent_id is None else find_node(project.root, parent_id)
        if parent is None:
            return None
        node = Node(id=generate_id(), title=title, description=(description or '').strip(), status=status)
        parent.children.append(node)
        sync_statuses(project.root)
        self._commit()
        logger.debug("added node %s under %s", node.id, parent.id)
        return node

    def edit_node(self, node_id: str, title: str, description: str = '',
                  status: Optional[str] = None, project_id: Optional[str] = None) -> bool:
        """Update title/description; status only sticks on a leaf."""
        title = (title or '').strip()
        project = self._resolve(project_id)
        if not title or project is None or (status is not None and status not in STATUSES):
            return False
        node = find_node(project.root, node_id)
        if node is None:
            return False
        node.title = title
        node.description = (description or '').strip()
        if status is not None and node.is_leaf:
            node.status = status
        if node is project.root:
            project.name = title
        sync_statuses(project.root)
        self._commit()
        return True

    def delete_node(self, node_id: str, project_id: Optional[str] = None) -> bool:
        """Remove a node and its whole subtree. The root goes only with its project."""
        project = self._resolve(project_id)
        if project is None or node_id == project.root.id:
            return False
        if not remove_node_by_id(project.root, node_id):
            return False
        sync_statuses(project.root)
        self._commit()
        logger.debug("deleted node %s", node_id)
        return True

    def cycle_status(self, node_id: str, project_id: Optional[str] = None) -> bool:
        project = self._resolve(project_id)
        node = find_node(project.root, node_id) if project is not None else None
        if node is None or not node.is_leaf:
            return False
        node.status = next_status(node.status)
        sync_statuses(project.root)
        self._commit()
        return True

    def toggle_collapsed(self, node_id: str, project_id: Optional[str] = None) -> bool:
        project = self._resolve(project_id)
        node = find_node(project.root, node_id) if project is not None else None
        if node is None:
            return False
        node.collapsed = not node.collapsed
        self._commit()
        return True
