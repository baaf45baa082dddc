"""Persistence helpers (load/save) for the project registry and preferences.

The registry document is ``{"projects": [...]}`` and is always written
whole. Reading never raises: a missing or damaged file falls back to an
empty registry so the application stays usable.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

import config

logger = logging.getLogger(__name__)

PROJECTS_FILENAME = 'projects.json'
PREFS_FILENAME = 'prefs.json'

THEMES = ('dark', 'light')
DEFAULT_THEME = 'dark'

StateDict = Dict[str, List[Dict[str, Any]]]


def empty_state() -> StateDict:
    return {"projects": []}


def _umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


class Storage:
    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir: Path = Path(data_dir) if data_dir is not None else config.data_dir()

    @property
    def projects_file(self) -> Path:
        return self.data_dir / PROJECTS_FILENAME

    @property
    def prefs_file(self) -> Path:
        return self.data_dir / PREFS_FILENAME

    # -------------------- registry --------------------
    def load_state(self) -> StateDict:
        """Load the registry document from disk.

        Missing file, unreadable file, invalid JSON or an unexpected
        top-level shape -> empty structure (logged, not raised).
        """
        data = self._read_json(self.projects_file)
        if data is None:
            return empty_state()
        projects = data.get('projects') if isinstance(data, dict) else None
        if not isinstance(projects, list):
            logger.warning("%s has no project list; starting empty", self.projects_file)
            return empty_state()
        return {"projects": projects}

    def save_state(self, state: StateDict) -> None:
        """Persist the whole registry document (pretty-printed)."""
        self._write_json(self.projects_file, state)

    # -------------------- preferences --------------------
    def load_theme(self) -> str:
        data = self._read_json(self.prefs_file)
        theme = data.get('theme') if isinstance(data, dict) else None
        return theme if theme in THEMES else DEFAULT_THEME

    def save_theme(self, theme: str) -> None:
        if theme not in THEMES:
            theme = DEFAULT_THEME
        data = self._read_json(self.prefs_file)
        prefs = data if isinstance(data, dict) else {}
        prefs['theme'] = theme
        self._write_json(self.prefs_file, prefs)

    # -------------------- file helpers --------------------
    @staticmethod
    def _read_json(path: Path) -> Any:
        if not path.exists():
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, UnicodeDecodeError, ValueError, RecursionError) as exc:
            logger.warning("could not load %s (%s); using defaults", path, exc)
            return None

    @staticmethod
    def _write_json(path: Path, data: Any) -> None:
        """Write to a sibling temp file, then swap it in."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=path.name, suffix='.tmp', dir=str(path.parent))
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=4)
            os.chmod(tmp, 0o666 & ~_umask())
            os.replace(tmp, path)
        except BaseException:
            try:
                os.unlink(tmp)
            except FileNotFoundError:
                pass
            raise
