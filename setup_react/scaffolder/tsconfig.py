"""Path-alias rewriting for the TypeScript config files Vite generates."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from setup_react.config import AliasConfig
from setup_react.jsonc import load_jsonc, write_json


def apply_path_alias(config: dict[str, Any], alias: AliasConfig) -> dict[str, Any]:
    """Set ``baseUrl`` and ``paths`` under ``compilerOptions`` in place.

    ``compilerOptions`` is created when missing or ``null``.  Any existing
    ``paths`` mapping is replaced.
    """
    if config.get("compilerOptions") is None:
        config["compilerOptions"] = {}
    options = config["compilerOptions"]
    options["baseUrl"] = "."
    options["paths"] = {alias.pattern: [alias.target_pattern]}
    return config


def configure_path_aliases(project_dir: str | Path, alias: AliasConfig) -> list[Path]:
    """Rewrite every configured tsconfig file with the path alias.

    Comments in the files are dropped; the output is plain JSON.

    Raises:
        FileNotFoundError: If a tsconfig file is missing.
        json.JSONDecodeError: If a tsconfig file is not valid JSON after
            comment stripping.
    """
    written: list[Path] = []
    for name in alias.tsconfig_files:
        path = Path(project_dir) / name
        config = load_jsonc(path)
        write_json(path, apply_path_alias(config, alias))
        written.append(path)
    return written
