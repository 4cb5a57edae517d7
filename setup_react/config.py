"""setup-react configuration.

Typed configuration for the scaffolding run.  All settings use Pydantic v2
models so they are validated at construction time and can be read from a
JSON (or JSON-with-comments) file or from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from setup_react.jsonc import loads

PackageManagerName = Literal["pnpm", "npm", "yarn", "bun"]

ALL_STEPS: list[int] = [1, 2, 3, 4, 5, 6, 7, 8, 9]


class PackageManager(BaseModel):
    """Command vocabulary for one Node package manager.

    Each field holds the argv prefix for a verb, e.g. ``add_dev`` for pnpm
    is ``["pnpm", "add", "-D"]``.
    """

    name: str
    create: list[str]
    install: list[str]
    add: list[str]
    add_dev: list[str]
    dlx: list[str]
    exec: list[str]
    run: list[str]
    # npm needs ``--`` before arguments forwarded to the create-* package.
    create_args_separator: bool = False

    def create_command(self, package: str, template: str) -> list[str]:
        """Return the argv for scaffolding *package* into the current directory."""
        args = ["."]
        if self.create_args_separator:
            args.append("--")
        return [*self.create, package, *args, "--template", template]

    def script(self, name: str) -> str:
        """Return the shell text that runs a ``package.json`` script."""
        return " ".join([*self.run, name])


PACKAGE_MANAGERS: dict[str, PackageManager] = {
    "pnpm": PackageManager(
        name="pnpm",
        create=["pnpm", "create"],
        install=["pnpm", "install"],
        add=["pnpm", "add"],
        add_dev=["pnpm", "add", "-D"],
        dlx=["pnpm", "dlx"],
        exec=["pnpm", "exec"],
        run=["pnpm"],
    ),
    "npm": PackageManager(
        name="npm",
        create=["npm", "create"],
        install=["npm", "install"],
        add=["npm", "install"],
        add_dev=["npm", "install", "-D"],
        dlx=["npx", "--yes"],
        exec=["npx"],
        run=["npm", "run"],
        create_args_separator=True,
    ),
    "yarn": PackageManager(
        name="yarn",
        create=["yarn", "create"],
        install=["yarn", "install"],
        add=["yarn", "add"],
        add_dev=["yarn", "add", "-D"],
        dlx=["yarn", "dlx"],
        exec=["yarn", "exec"],
        run=["yarn"],
    ),
    "bun": PackageManager(
        name="bun",
        create=["bun", "create"],
        install=["bun", "install"],
        add=["bun", "add"],
        add_dev=["bun", "add", "-d"],
        dlx=["bunx"],
        exec=["bunx"],
        run=["bun", "run"],
    ),
}


class AliasConfig(BaseModel):
    """Import path alias written to the tsconfig files and ``vite.config.ts``."""

    prefix: str = Field(default="@", min_length=1)
    target: str = Field(default="./src", min_length=1)
    tsconfig_files: list[str] = Field(
        default_factory=lambda: ["tsconfig.json", "tsconfig.app.json"]
    )

    @property
    def pattern(self) -> str:
        """The ``paths`` key, e.g. ``"@/*"``."""
        return f"{self.prefix}/*"

    @property
    def target_pattern(self) -> str:
        """The ``paths`` value entry, e.g. ``"./src/*"``."""
        return f"{self.target.rstrip('/')}/*"


class ToolingConfig(BaseModel):
    """Options for the optional tooling added on top of the Vite template."""

    shadcn_components: list[str] = Field(default_factory=lambda: ["button"])
    lint_staged_pattern: str = Field(default="*")
    lint_staged_command: str = Field(default="prettier --write --ignore-unknown")
    node_version: int = Field(
        default=23, ge=1, description="Minimum Node.js major version"
    )


class Config(BaseModel):
    """Global setup-react configuration.

    Instances are created once by the CLI entry point (or by tests) and
    passed to :class:`~setup_react.pipeline.SetupPipeline`.
    """

    project_dir: Path = Field(default=Path("."))
    package_manager: PackageManagerName = Field(default="pnpm")
    vite_template: str = Field(default="react-ts")
    command_timeout: int = Field(
        default=900, ge=10, description="Per-command timeout in seconds"
    )
    alias: AliasConfig = Field(default_factory=AliasConfig)
    tooling: ToolingConfig = Field(default_factory=ToolingConfig)
    steps: list[int] = Field(default_factory=lambda: list(ALL_STEPS))
    state_file: Path | None = Field(default=None)

    @field_validator("steps")
    @classmethod
    def _normalise_steps(cls, value: list[int]) -> list[int]:
        for step in value:
            if step not in ALL_STEPS:
                raise ValueError(f"Invalid step number: {step} (must be 1-{ALL_STEPS[-1]})")
        return sorted(set(value))

    @property
    def pm(self) -> PackageManager:
        """Command table for the selected package manager."""
        return PACKAGE_MANAGERS[self.package_manager]

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a configuration file.

        The file may contain ``//`` and ``/* */`` comments.

        Raises:
            FileNotFoundError: If the file does not exist.
            json.JSONDecodeError: If the file is not valid JSON.
            pydantic.ValidationError: If a value fails validation.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate(loads(raw))

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SETUP_REACT_PROJECT_DIR, SETUP_REACT_PACKAGE_MANAGER,
            SETUP_REACT_TEMPLATE, SETUP_REACT_STEPS, SETUP_REACT_COMMAND_TIMEOUT,
            SETUP_REACT_COMPONENTS, SETUP_REACT_NODE_VERSION.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SETUP_REACT_PROJECT_DIR"):
            kwargs["project_dir"] = Path(os.environ["SETUP_REACT_PROJECT_DIR"])
        if os.environ.get("SETUP_REACT_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["SETUP_REACT_PACKAGE_MANAGER"]
        if os.environ.get("SETUP_REACT_TEMPLATE"):
            kwargs["vite_template"] = os.environ["SETUP_REACT_TEMPLATE"]
        if os.environ.get("SETUP_REACT_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["SETUP_REACT_COMMAND_TIMEOUT"])

        tooling_kwargs: dict[str, Any] = {}
        if os.environ.get("SETUP_REACT_COMPONENTS"):
            tooling_kwargs["shadcn_components"] = [
                c.strip() for c in os.environ["SETUP_REACT_COMPONENTS"].split(",") if c.strip()
            ]
        if os.environ.get("SETUP_REACT_NODE_VERSION"):
            tooling_kwargs["node_version"] = int(os.environ["SETUP_REACT_NODE_VERSION"])

        steps_str = os.environ.get("SETUP_REACT_STEPS", "")
        if steps_str.strip():
            kwargs["steps"] = [int(s.strip()) for s in steps_str.split(",") if s.strip()]

        return cls(tooling=ToolingConfig(**tooling_kwargs), **kwargs)
