"""setup-react pipeline orchestrator.

Runs the nine setup steps in order against a project directory:

Step 1: GIT          -- ``git init``.
Step 2: VITE         -- Scaffold the Vite react-ts template and install it.
Step 3: TAILWIND     -- Add Tailwind CSS and its Vite plugin.
Step 4: PATH ALIASES -- Add ``@/*`` to the tsconfig files.
Step 5: VITE CONFIG  -- Write ``vite.config.ts`` with plugins and alias.
Step 6: SHADCN       -- Initialise shadcn/ui and add components.
Step 7: BOILERPLATE  -- Replace the Vite demo with a minimal app.
Step 8: README       -- Write a short getting-started README.
Step 9: PRETTIER     -- Prettier + lint-staged + husky pre-commit hook.

Usage::

    setup-react ./my-app
    python -m setup_react.pipeline ./my-app --steps 4,5 --package-manager npm
"""

from __future__ import annotations

import asyncio
import shutil
import sys
import time
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.markup import escape
from rich.panel import Panel

from setup_react.config import ALL_STEPS, PACKAGE_MANAGERS, Config
from setup_react.scaffolder import ProjectScaffolder
from setup_react.utils import (
    STEP_NAMES,
    console,
    format_duration,
    parse_node_major,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
    save_json,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PipelineError(Exception):
    """Raised when a setup step cannot run."""

    def __init__(self, step: int, message: str) -> None:
        self.step = step
        super().__init__(f"Step {step} ({STEP_NAMES.get(step, '?')}): {message}")


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class SetupPipeline:
    """Drives the setup steps and records their outcome.

    Attributes:
        config: Run configuration.
        state: Dictionary accumulating per-step results and errors.
        scaffolder: Step implementations bound to ``config.project_dir``.
    """

    _STEP_METHODS: dict[int, str] = {
        1: "init_git",
        2: "create_vite_app",
        3: "add_tailwind",
        4: "configure_aliases",
        5: "write_vite_config",
        6: "add_shadcn",
        7: "replace_boilerplate",
        8: "write_readme",
        9: "setup_prettier",
    }

    def __init__(self, config: Config, scaffolder: ProjectScaffolder | None = None) -> None:
        self.config = config
        self.scaffolder = scaffolder or ProjectScaffolder(config)
        self.state: dict[str, Any] = {
            "started_at": datetime.now(timezone.utc).isoformat(),
            "project_dir": str(Path(config.project_dir).resolve()),
            "steps_completed": [],
            "steps_failed": [],
            "success": False,
        }

    # ------------------------------------------------------------------
    # State persistence
    # ------------------------------------------------------------------

    async def _save_state(self) -> None:
        """Persist the state dict when a state file is configured."""
        if self.config.state_file is None:
            return
        self.state["updated_at"] = datetime.now(timezone.utc).isoformat()
        await save_json(self.state, self.config.state_file)

    # ------------------------------------------------------------------
    # Pre-flight checks
    # ------------------------------------------------------------------

    async def _preflight(self) -> None:
        """Create the project directory and check the required tools.

        Missing tools and an old Node.js only produce warnings; the step that
        needs them fails with the command's own error.
        """
        Path(self.config.project_dir).mkdir(parents=True, exist_ok=True)

        pm = self.config.pm
        tools = sorted({"git", "node", pm.install[0], pm.dlx[0]})
        missing = [tool for tool in tools if shutil.which(tool) is None]
        if missing:
            print_warning(f"  Not found on PATH: {', '.join(missing)}")
        else:
            console.print(f"  [green]+[/green] Found {', '.join(tools)}")

        if "node" not in missing:
            returncode, stdout, _ = await run_command(["node", "--version"], timeout=30)
            major = parse_node_major(stdout) if returncode == 0 else None
            wanted = self.config.tooling.node_version
            if major is None:
                print_warning("  Could not determine the Node.js version.")
            elif major < wanted:
                print_warning(f"  Node.js {stdout} is older than the required v{wanted}.")

    # ------------------------------------------------------------------
    # Step dispatch
    # ------------------------------------------------------------------

    async def run(self) -> dict[str, Any]:
        """Execute the selected steps.

        Returns:
            The final state dictionary, including a top-level ``success``
            boolean.
        """
        pipeline_start = time.monotonic()

        console.print(
            Panel(
                f"[bold bright_cyan]setup-react[/bold bright_cyan]\n"
                f"Project : {Path(self.config.project_dir).resolve()}\n"
                f"Manager : {self.config.package_manager}\n"
                f"Steps   : {', '.join(str(s) for s in self.config.steps)}",
                title="[bold]Setup Start[/bold]",
                border_style="bright_cyan",
            )
        )

        await self._preflight()

        all_success = True

        for step in sorted(self.config.steps):
            step_name = STEP_NAMES.get(step, "UNKNOWN")
            step_start = time.monotonic()
            try:
                method_name = self._STEP_METHODS.get(step)
                if method_name is None:
                    raise PipelineError(step, "unknown step")

                print_step_header(step, step_name)
                result = await getattr(self.scaffolder, method_name)()

                elapsed = time.monotonic() - step_start
                self.state[f"step{step}"] = result
                self.state["steps_completed"].append(step)
                print_success(f"Step {step} ({step_name}) completed in {format_duration(elapsed)}")
                if result:
                    print_summary_table(result, title=f"Step {step} results")

            except PipelineError as exc:
                all_success = False
                self.state["steps_failed"].append(step)
                self.state[f"step{step}_error"] = str(exc)
                print_error(escape(str(exc)))
                break

            except Exception as exc:
                elapsed = time.monotonic() - step_start
                all_success = False
                self.state["steps_failed"].append(step)
                tb = traceback.format_exc()
                self.state[f"step{step}_error"] = tb
                print_error(
                    f"Step {step} ({step_name}) FAILED after "
                    f"{format_duration(elapsed)}: {escape(str(exc))}"
                )
                console.print(tb, style="dim", markup=False, highlight=False)
                # Later steps depend on the files earlier ones produce.
                break

            finally:
                await self._save_state()

        total_elapsed = time.monotonic() - pipeline_start
        self.state["success"] = all_success
        self.state["total_duration"] = format_duration(total_elapsed)
        self.state["finished_at"] = datetime.now(timezone.utc).isoformat()
        await self._save_state()

        self._print_final_summary(total_elapsed)
        return self.state

    def _print_final_summary(self, total_elapsed: float) -> None:
        """Print the final summary panel."""
        steps_ok = self.state.get("steps_completed", [])
        steps_fail = self.state.get("steps_failed", [])

        if self.state.get("success"):
            border_style = "bold green"
            status_text = "[bold green]SETUP SUCCEEDED[/bold green]"
        else:
            border_style = "bold red"
            status_text = "[bold red]SETUP FAILED[/bold red]"

        detail_lines = [
            status_text,
            "",
            f"Duration  : {format_duration(total_elapsed)}",
            f"Completed : {', '.join(str(s) for s in steps_ok) or 'none'}",
        ]
        if steps_fail:
            detail_lines.append(f"Failed    : {', '.join(str(s) for s in steps_fail)}")

        detail_lines.extend(["", f"Project   : {Path(self.config.project_dir).resolve()}"])
        if self.config.state_file is not None:
            detail_lines.append(f"State     : {self.config.state_file}")

        console.print()
        console.print(
            Panel(
                "\n".join(detail_lines),
                title="[bold]Setup Complete[/bold]",
                border_style=border_style,
            )
        )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def parse_steps(value: str) -> list[int]:
    """Parse ``"1,2,4"`` into a sorted, de-duplicated step list.

    Raises:
        ValueError: On a non-integer or out-of-range step.
    """
    steps = [int(s.strip()) for s in value.split(",") if s.strip()]
    for step in steps:
        if step not in ALL_STEPS:
            raise ValueError(f"Invalid step number: {step} (must be 1-{ALL_STEPS[-1]})")
    return sorted(set(steps))


def build_config(args: Any) -> Config:
    """Merge a config file (if any) with command-line overrides."""
    config = Config.load(Path(args.config)) if args.config else Config.from_env()

    overrides: dict[str, Any] = {}
    if args.project_dir is not None:
        overrides["project_dir"] = Path(args.project_dir)
    if args.package_manager:
        overrides["package_manager"] = args.package_manager
    if args.template:
        overrides["vite_template"] = args.template
    if args.steps:
        overrides["steps"] = parse_steps(args.steps)
    if args.state_file:
        overrides["state_file"] = Path(args.state_file)

    data = config.model_dump()
    data.update(overrides)
    if args.component:
        data["tooling"]["shadcn_components"] = list(args.component)
    return Config.model_validate(data)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``setup-react`` / ``python -m setup_react.pipeline``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Bootstrap a Vite + React + TypeScript project with Tailwind, shadcn/ui and Prettier",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  setup-react ./my-app\n"
            "  setup-react ./my-app --package-manager npm --component button --component card\n"
            "  setup-react . --steps 4,5,8\n"
        ),
    )
    parser.add_argument(
        "project_dir",
        nargs="?",
        default=None,
        help=(
            "Directory to set the project up in (default: project_dir from --config "
            "or SETUP_REACT_PROJECT_DIR, else the current directory)"
        ),
    )
    parser.add_argument(
        "--package-manager", "-p",
        choices=sorted(PACKAGE_MANAGERS),
        default=None,
        help="Package manager to drive (default: pnpm)",
    )
    parser.add_argument(
        "--template",
        default=None,
        help="create-vite template (default: react-ts)",
    )
    parser.add_argument(
        "--steps",
        default=None,
        help="Comma-separated steps to run (default: 1,2,3,4,5,6,7,8,9)",
    )
    parser.add_argument(
        "--component", "-c",
        action="append",
        default=None,
        help="shadcn/ui component to add; repeat for several (default: button)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON config file (comments allowed)",
    )
    parser.add_argument(
        "--state-file",
        default=None,
        help="Write the run state as JSON to this path",
    )

    args = parser.parse_args(argv)

    if args.config and not Path(args.config).exists():
        console.print(f"[bold red]Error:[/bold red] Config file not found: {args.config}")
        sys.exit(1)

    try:
        config = build_config(args)
    except (ValueError, ValidationError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}", highlight=False)
        sys.exit(1)

    pipeline = SetupPipeline(config)
    result = asyncio.run(pipeline.run())

    if result.get("success"):
        console.print("[bold green]Project setup completed successfully![/bold green]")
    else:
        console.print("[bold red]Project setup failed.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
