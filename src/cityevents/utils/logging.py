"""
Project name and version for log lines (`service`, `version` fields).

Installed distribution metadata wins; from a source checkout the values are
read from the nearest pyproject.toml above this package.
"""

from functools import lru_cache
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any
import tomllib

DISTRIBUTION_NAME = "cityevents"


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    for directory in [start, *start.parents][:max_up]:
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


@lru_cache()
def _load_pyproject(start: Path) -> dict:
    pyproject = find_pyproject(start)
    if pyproject is None:
        return {}
    try:
        with pyproject.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def get_pyproject_value(key: str, start: str | Path | None = None, default: Any = None) -> Any:
    """
    Dotted lookup into pyproject.toml, e.g. get_pyproject_value("project.version").
    """
    start_path = Path(start).resolve() if start is not None else Path(__file__).resolve().parent
    node: Any = _load_pyproject(start_path)
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node


def get_project_name(default: str | None = DISTRIBUTION_NAME) -> str | None:
    return get_pyproject_value("project.name", default=default)


def get_project_version(default: str = "unknown") -> str:
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        return get_pyproject_value("project.version", default=default)


__all__ = [
    "find_pyproject",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
