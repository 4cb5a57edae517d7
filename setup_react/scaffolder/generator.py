"""Setup step implementations.

``ProjectScaffolder`` exposes one coroutine per setup step.  Each step runs
inside ``config.project_dir``, shells out through :func:`run_checked` (so a
failing package-manager command aborts the step) and returns a small result
dict that the pipeline records in its state.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Any

from setup_react.config import Config
from setup_react.utils import console, run_checked

from .package_json import read_package_name, set_lint_staged
from .templates import TemplateRenderer
from .tsconfig import configure_path_aliases


# Files the Vite react-ts template ships that the minimal app replaces.
BOILERPLATE_FILES: list[str] = ["src/App.css", "src/App.tsx"]
BOILERPLATE_DIRS: list[str] = ["src/assets"]


class ProjectScaffolder:
    """Runs the individual setup steps against one project directory."""

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.root = Path(config.project_dir)
        self.renderer = renderer or TemplateRenderer()

    # -- Helpers -----------------------------------------------------------

    async def _run(self, cmd: list[str]) -> None:
        await run_checked(cmd, cwd=self.root, timeout=self.config.command_timeout)

    def _build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the config."""
        pm = self.config.pm
        return {
            "project_name": self.root.resolve().name,
            "package_manager": pm.name,
            "alias_prefix": self.config.alias.prefix,
            "alias_target": self.config.alias.target,
            "shadcn_components": self.config.tooling.shadcn_components,
            "node_version": self.config.tooling.node_version,
            "install_command": " ".join(pm.install),
            "dev_command": pm.script("dev"),
            "build_command": pm.script("build"),
            "exec_command": " ".join(pm.exec),
        }

    async def _render(self, template: str, output: str, **extra: Any) -> Path:
        context = {**self._build_context(), **extra}
        path = await self.renderer.render_to_file(template, self.root / output, context)
        console.print(f"  [green]+[/green] wrote {output}")
        return path

    # -- Steps ---------------------------------------------------------------

    async def init_git(self) -> dict[str, Any]:
        """Initialise a git repository in the project directory."""
        await self._run(["git", "init"])
        return {"git_initialized": True}

    async def create_vite_app(self) -> dict[str, Any]:
        """Scaffold the Vite template into the project directory and install it."""
        pm = self.config.pm
        await self._run(pm.create_command("vite@latest", self.config.vite_template))
        await self._run(pm.install)
        return {"template": self.config.vite_template}

    async def add_tailwind(self) -> dict[str, Any]:
        """Install Tailwind CSS v4 and replace ``src/index.css`` with its import."""
        await self._run([*self.config.pm.add, "tailwindcss", "@tailwindcss/vite"])
        await self._render("src/index.css.j2", "src/index.css")
        return {"packages": ["tailwindcss", "@tailwindcss/vite"]}

    async def configure_aliases(self) -> dict[str, Any]:
        """Add the import path alias to the tsconfig files."""
        written = await asyncio.to_thread(
            configure_path_aliases, self.root, self.config.alias
        )
        for path in written:
            console.print(f"  [green]+[/green] updated {path.name}")
        return {"files": [p.name for p in written], "alias": self.config.alias.pattern}

    async def write_vite_config(self) -> dict[str, Any]:
        """Install Node typings and write ``vite.config.ts`` with plugins and alias."""
        await self._run([*self.config.pm.add_dev, "@types/node"])
        await self._render("vite.config.ts.j2", "vite.config.ts")
        return {"file": "vite.config.ts"}

    async def add_shadcn(self) -> dict[str, Any]:
        """Initialise shadcn/ui and add the configured components."""
        dlx = self.config.pm.dlx
        components = self.config.tooling.shadcn_components
        await self._run([*dlx, "shadcn@latest", "init", "--defaults"])
        if components:
            await self._run([*dlx, "shadcn@latest", "add", *components])
        return {"components": list(components)}

    async def replace_boilerplate(self) -> dict[str, Any]:
        """Remove the Vite demo files and write a minimal kebab-case app.

        Files that are already gone are skipped, so the step can be re-run.
        """
        removed: list[str] = []
        for rel in BOILERPLATE_FILES:
            path = self.root / rel
            if path.is_file():
                await asyncio.to_thread(path.unlink)
                removed.append(rel)
        for rel in BOILERPLATE_DIRS:
            path = self.root / rel
            if path.is_dir():
                await asyncio.to_thread(shutil.rmtree, path)
                removed.append(rel)
        for rel in removed:
            console.print(f"  [red]-[/red] removed {rel}")

        await self._render("src/app.tsx.j2", "src/app.tsx")
        await self._render("src/main.tsx.j2", "src/main.tsx")
        return {"removed": removed, "written": ["src/app.tsx", "src/main.tsx"]}

    async def write_readme(self) -> dict[str, Any]:
        """Replace the Vite README with a short getting-started guide."""
        name = await asyncio.to_thread(read_package_name, self.root)
        await self._render("README.md.j2", "README.md", project_name=name)
        return {"project_name": name}

    async def setup_prettier(self) -> dict[str, Any]:
        """Install Prettier with a husky pre-commit hook running lint-staged."""
        pm = self.config.pm
        tooling = self.config.tooling
        await self._run([*pm.add_dev, "prettier", "lint-staged", "husky"])
        await self._run([*pm.exec, "husky", "init"])
        await self._render("husky/pre-commit.j2", ".husky/pre-commit")

        pkg = await asyncio.to_thread(
            set_lint_staged,
            self.root,
            tooling.lint_staged_pattern,
            tooling.lint_staged_command,
        )
        console.print("  [green]+[/green] updated package.json (lint-staged)")
        return {"lint_staged": pkg["lint-staged"]}
