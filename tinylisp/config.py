from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Defaults
_DEFAULT_LOAD_DIRS = [Path('.')]
_DEFAULT_RECURSION_LIMIT = 10000
_DEFAULT_LOG_LEVEL = 'WARNING'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_load_paths() -> List[Path]:
    return paths_from_env('TINYLISP_LOAD_PATH', _DEFAULT_LOAD_DIRS)


def get_recursion_limit() -> int:
    raw = os.environ.get('TINYLISP_RECURSION_LIMIT', '').strip()
    try:
        limit = int(raw) if raw else _DEFAULT_RECURSION_LIMIT
    except ValueError:
        return _DEFAULT_RECURSION_LIMIT
    # below this the interpreter cannot even start
    return max(limit, 100)


def get_log_level() -> str:
    return os.environ.get('TINYLISP_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper() or _DEFAULT_LOG_LEVEL


def resolve_load_path(name: str | os.PathLike) -> Path:
    """Resolve a file name for `load`: absolute paths as given, else the first hit on the load path."""
    path = Path(name)
    if path.is_absolute():
        return path
    for root in get_load_paths():
        candidate = root / path
        if candidate.is_file():
            return candidate
    raise FileNotFoundError(f"{name} not found on load path {[str(p) for p in get_load_paths()]}")
