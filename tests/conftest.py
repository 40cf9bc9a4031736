"""Shared pytest fixtures for the App Creator test suite.

Provides reusable fixtures for:
- Temporary project directories
- A helper that writes a layer tree from a ``{relative_path: content}`` dict
- A small self-contained templates directory with its own catalog
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from app_creator.config import Config

LayerFactory = Callable[[str, dict[str, Any]], Path]


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Empty directory acting as the project tree."""
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    return project_dir


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Write ``{relative_path: content}`` under *root* and return *root*."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_layer(tmp_path: Path) -> LayerFactory:
    """Factory writing a layer tree under ``tmp_path/layers/<name>``."""

    def _make(name: str, files: dict[str, str | bytes]) -> Path:
        return write_tree(tmp_path / "layers" / name, files)

    return _make


# ---------------------------------------------------------------------------
# Templates directory
# ---------------------------------------------------------------------------

SAMPLE_CATALOG = textwrap.dedent("""\
    targets:
      - id: webresource
        name: Webresource App
        description: Dynamics webresource
        ui: [kendo, shadcn]
      - id: portal
        name: Portal App
        ui: []
      - id: powerpages
        name: Power Pages App
        layer: power-pages
        ui: [kendo]
    ui:
      - id: kendo
        name: Kendo UI
        tokens:
          KENDO_THEME: "@progress/kendo-theme-default"
      - id: shadcn
        name: shadcn/ui
""")


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """A minimal templates directory: base, two target layers, one UI layer.

    ``portal`` has no layer directory and ``shadcn`` has none either, so
    they exercise the skipped-optional-layer path.
    """
    root = tmp_path / "templates"
    root.mkdir()
    (root / "catalog.yaml").write_text(SAMPLE_CATALOG, encoding="utf-8")

    write_tree(root / "base", {
        "package.json": (
            '{\n  "name": "{{APP_NAME}}",\n  "version": "0.0.0",\n'
            '  "scripts": {"dev": "vite", "build": "vite build"},\n'
            '  "dependencies": {"react": "^19.0.0"}\n}\n'
        ),
        "README.md": "# {{APP_NAME}}\n\ntarget={{TARGET}} ui={{UI_LIBRARY}}\n",
        "src/App.tsx": "export default function App() { return null; }\n",
        "public/logo.png": b"\x89PNG\r\n\x1a\n\x00\xff{{APP_NAME}}\xfe",
    })
    write_tree(root / "targets" / "webresource", {
        "package.patch.json": '{"scripts": {"build": "vite build --mode production"}}\n',
        "src/services/AuthService.ts": "export const app = '{{APP_NAME}}';\n",
    })
    write_tree(root / "targets" / "power-pages", {
        "src/App.patch.tsx": "export default function App() { return 'pp'; }\n",
    })
    write_tree(root / "ui" / "kendo", {
        "package.patch.json": '{"dependencies": {"{{KENDO_THEME}}": "latest"}}\n',
        "src/index.patch.css": '@import "{{KENDO_THEME}}/dist/all.css";\n',
    })
    return root


@pytest.fixture
def config(templates_dir: Path, tmp_path: Path) -> Config:
    """Config pointing at the sample templates and an empty output directory."""
    output = tmp_path / "out"
    output.mkdir()
    return Config(templates_dir=templates_dir, output_dir=output)
