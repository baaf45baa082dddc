"""Configuration lookup.

Priority: real environment variable > project .env file > default.
The .env file lives in the project root (next to pyproject.toml) and is
read once; malformed lines are skipped.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
ENV_FILE = PROJECT_ROOT / '.env'

_ENV_CACHE: Optional[Dict[str, str]] = None


def read_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    try:
        text = path.read_text()
    except FileNotFoundError:
        return values
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("could not read %s: %s", path, exc)
        return values
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        v = v.strip().strip('"').strip("'")
        if k:
            values[k] = v
    return values


def _env_file_values() -> Dict[str, str]:
    global _ENV_CACHE
    if _ENV_CACHE is None:
        _ENV_CACHE = read_env_file(ENV_FILE)
    return _ENV_CACHE


def get(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.environ.get(key)
    if value:
        return value
    return _env_file_values().get(key, default)


def truthy(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def data_dir() -> Path:
    configured = get('TREEFLOW_DATA_DIR')
    return Path(configured).expanduser() if configured else PROJECT_ROOT / 'data'


def log_level() -> str:
    return (get('TREEFLOW_LOG_LEVEL') or 'WARNING').upper()


def alt_screen() -> bool:
    # Alt screen default ON; disable with TREEFLOW_ALT_SCREEN=0 (or false/no/off)
    return truthy(get('TREEFLOW_ALT_SCREEN'), True)
