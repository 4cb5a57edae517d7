"""Tests for the Jinja2 template renderer and the bundled templates."""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError

from setup_react.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def context() -> dict:
    return {
        "project_name": "my-app",
        "package_manager": "pnpm",
        "alias_prefix": "@",
        "alias_target": "./src",
        "shadcn_components": ["button"],
        "node_version": 23,
        "install_command": "pnpm install",
        "dev_command": "pnpm dev",
        "build_command": "pnpm build",
        "exec_command": "pnpm exec",
    }


class TestBundledTemplates:
    def test_index_css(self, renderer, context):
        assert renderer.render("src/index.css.j2", context) == '@import "tailwindcss";\n'

    def test_vite_config(self, renderer, context):
        out = renderer.render("vite.config.ts.j2", context)
        assert 'import tailwindcss from "@tailwindcss/vite"' in out
        assert "plugins: [react(), tailwindcss()]," in out
        assert '"@": path.resolve(__dirname, "./src"),' in out
        assert out.endswith("})\n")

    def test_vite_config_custom_alias(self, renderer, context):
        out = renderer.render(
            "vite.config.ts.j2", {**context, "alias_prefix": "~", "alias_target": "./app"}
        )
        assert '"~": path.resolve(__dirname, "./app"),' in out

    def test_app_with_button(self, renderer, context):
        out = renderer.render("src/app.tsx.j2", context)
        assert out == (
            'import { Button } from "@/components/ui/button"\n'
            "\n"
            "function App() {\n"
            "  return (\n"
            '    <div className="flex min-h-svh items-center justify-center">\n'
            "      <Button>Click me</Button>\n"
            "    </div>\n"
            "  )\n"
            "}\n"
            "\n"
            "export default App\n"
        )

    def test_app_without_button(self, renderer, context):
        out = renderer.render("src/app.tsx.j2", {**context, "shadcn_components": []})
        assert "Button" not in out
        assert "my-app" in out
        assert out.startswith("function App() {\n")
        assert out.endswith("\nexport default App\n")

    def test_app_heading_is_a_string_literal(self, renderer, context):
        out = renderer.render(
            "src/app.tsx.j2", {**context, "shadcn_components": [], "project_name": "a{b<c}"}
        )
        assert '<h1 className="text-2xl font-semibold">{ "a{b\\u003cc}" }</h1>' in out
        assert "a{b<c}" not in out

    def test_main_imports_kebab_case_app(self, renderer, context):
        out = renderer.render("src/main.tsx.j2", context)
        assert 'import App from "./app"' in out
        assert 'createRoot(document.getElementById("root")!).render(' in out

    def test_readme(self, renderer, context):
        out = renderer.render("README.md.j2", context)
        assert out.startswith("# my-app\n\n## Getting Started\n")
        assert "- Node.js >= 23\n- pnpm\n" in out
        assert "```sh\npnpm install\n```" in out
        assert "```sh\npnpm dev\n```" in out
        assert out.endswith("```sh\npnpm build\n```\n")

    def test_pre_commit(self, renderer, context):
        assert renderer.render("husky/pre-commit.j2", context) == "pnpm exec lint-staged\n"

    def test_missing_variable_raises(self, renderer):
        with pytest.raises(UndefinedError):
            renderer.render("husky/pre-commit.j2", {})


class TestRenderToFile:
    @pytest.mark.asyncio
    async def test_creates_parent_dirs(self, renderer, context, tmp_path: Path):
        out = await renderer.render_to_file(
            "husky/pre-commit.j2", tmp_path / ".husky" / "pre-commit", context
        )
        assert out.read_text(encoding="utf-8") == "pnpm exec lint-staged\n"

    @pytest.mark.asyncio
    async def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "hello.txt.j2").write_text("hi {{ name }}\n", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path)
        out = await renderer.render_to_file("hello.txt.j2", tmp_path / "out.txt", {"name": "x"})
        assert out.read_text(encoding="utf-8") == "hi x\n"
