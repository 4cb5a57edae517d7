"""Shared pytest fixtures for the setup-react test suite.

Provides reusable fixtures for:
- A temporary directory laid out like a freshly scaffolded Vite react-ts app
- A Config pointing at that directory
- A mocked ``run_checked`` that records commands instead of running them
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from setup_react.config import Config


# ---------------------------------------------------------------------------
# Vite project layout
# ---------------------------------------------------------------------------

TSCONFIG_JSON = textwrap.dedent(
    """\
    {
      "files": [],
      "references": [
        { "path": "./tsconfig.app.json" },
        { "path": "./tsconfig.node.json" }
      ]
    }
    """
)

TSCONFIG_APP_JSON = textwrap.dedent(
    """\
    {
      "compilerOptions": {
        "tsBuildInfoFile": "./node_modules/.tmp/tsconfig.app.tsbuildinfo",
        "target": "ES2022",
        "useDefineForClassFields": true,
        "lib": ["ES2022", "DOM", "DOM.Iterable"],
        "module": "ESNext",
        "skipLibCheck": true,

        /* Bundler mode */
        "moduleResolution": "bundler",
        "allowImportingTsExtensions": true,
        "verbatimModuleSyntax": true,
        "moduleDetection": "force",
        "noEmit": true,
        "jsx": "react-jsx",

        /* Linting */
        "strict": true,
        "noUnusedLocals": true, // keep the build strict
        "noUnusedParameters": true,
        "noFallthroughCasesInSwitch": true
      },
      "include": ["src"]
    }
    """
)


@pytest.fixture
def vite_project(tmp_path: Path) -> Path:
    """Directory containing the files ``create vite --template react-ts`` leaves behind."""
    root = tmp_path / "my-app"
    (root / "src" / "assets").mkdir(parents=True)
    (root / "tsconfig.json").write_text(TSCONFIG_JSON, encoding="utf-8")
    (root / "tsconfig.app.json").write_text(TSCONFIG_APP_JSON, encoding="utf-8")
    (root / "package.json").write_text(
        json.dumps(
            {
                "name": "my-app",
                "private": True,
                "version": "0.0.0",
                "type": "module",
                "scripts": {"dev": "vite", "build": "tsc -b && vite build"},
            },
            indent=2,
        )
        + "\n",
        encoding="utf-8",
    )
    (root / "src" / "App.tsx").write_text("export default function App() {}\n")
    (root / "src" / "App.css").write_text("#root {}\n")
    (root / "src" / "assets" / "react.svg").write_text("<svg />\n")
    (root / "src" / "index.css").write_text(":root {}\n")
    (root / "README.md").write_text("# React + TypeScript + Vite\n")
    return root


@pytest.fixture
def project_config(vite_project: Path) -> Config:
    """Default Config bound to the ``vite_project`` directory."""
    return Config(project_dir=vite_project)


@pytest.fixture
def mock_run_checked():
    """Patch ``run_checked`` in the generator; commands are recorded, not run."""
    with patch(
        "setup_react.scaffolder.generator.run_checked", new_callable=AsyncMock
    ) as mocked:
        yield mocked

