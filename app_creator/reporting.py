"""Post-composition reporting for the CLI.

Renders the summary table and the "next steps" text shown after a project is
created.  The next-steps text is a Jinja2 template under ``messages/`` so the
per-target wording can change without touching code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from rich.table import Table

from app_creator.catalog import Catalog
from app_creator.composer.pipeline import CompositionResult
from app_creator.utils import console, format_duration, print_summary_table

_DEFAULT_MESSAGES_DIR = Path(__file__).parent / "messages"


class MessageRenderer:
    """Renders Jinja2 message templates for terminal output."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_MESSAGES_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        template = self.env.get_template(template_path)
        return template.render(**context)

    def next_steps(self, result: CompositionResult, in_place: bool = False) -> str:
        """Render the "next steps" text for a finished composition."""
        return self.render(
            "next_steps.txt.j2",
            {
                "project_name": result.project_name,
                "target": result.target,
                "ui": result.ui,
                "in_place": in_place,
            },
        )


def print_composition_summary(result: CompositionResult) -> None:
    """Print a key/value table describing *result*."""
    print_summary_table(
        {
            "Project": result.project_name,
            "Location": str(result.project_root),
            "Target": result.target,
            "UI library": result.ui or "none",
            "Layers applied": ", ".join(result.applied_layers) or "none",
            "Layers skipped": ", ".join(result.skipped_layers) or "none",
            "Files written": str(result.written_files),
            "Files with tokens": str(len(result.rewritten_files)),
            "Duration": format_duration(result.duration),
        },
        title="Project created",
    )


def print_catalog(catalog: Catalog) -> None:
    """Print the available targets and the UI libraries each accepts."""
    table = Table(title="Available targets", show_header=True, header_style="bold cyan")
    table.add_column("Target", style="bold", no_wrap=True)
    table.add_column("Name")
    table.add_column("UI libraries")
    table.add_column("Description", style="dim")

    for target in catalog.targets:
        table.add_row(
            target.id,
            target.name,
            ", ".join(target.ui) or "-",
            target.description,
        )

    console.print(table)
    console.print()
