"""Reads and rewrites of the generated ``package.json``."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from setup_react.jsonc import load_jsonc, write_json


def package_json_path(project_dir: str | Path) -> Path:
    return Path(project_dir) / "package.json"


def read_package_name(project_dir: str | Path) -> str:
    """Return the ``name`` field of ``package.json``.

    Falls back to the project directory's name when the field is absent.
    """
    data = load_jsonc(package_json_path(project_dir))
    name = data.get("name") if isinstance(data, dict) else None
    return name or Path(project_dir).resolve().name


def set_lint_staged(project_dir: str | Path, pattern: str, command: str) -> dict[str, Any]:
    """Replace the ``lint-staged`` section with ``{pattern: command}``.

    Returns the updated document.
    """
    path = package_json_path(project_dir)
    pkg = load_jsonc(path)
    pkg["lint-staged"] = {pattern: command}
    write_json(path, pkg)
    return pkg
