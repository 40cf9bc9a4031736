"""Command-line entry point for App Creator.

Usage::

    app-creator my-app --target webresource --ui kendo
    app-creator my-app -t portal -o ./projects
    app-creator --list
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from app_creator.catalog import load_catalog
from app_creator.composer.pipeline import ProjectComposer
from app_creator.config import Config
from app_creator.errors import AppCreatorError
from app_creator.reporting import MessageRenderer, print_catalog, print_composition_summary
from app_creator.utils import console, create_progress, print_error, print_success


def _parse_token(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{raw}'")
    return key, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="app-creator",
        description="App Creator -- scaffold applications from layered templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  app-creator my-app --target webresource --ui kendo\n"
            "  app-creator my-app -t powerpages --no-ui\n"
            "  app-creator . -t portal --token API_VERSION=9.2\n"
            "  app-creator --list\n"
        ),
    )

    parser.add_argument(
        "project_name",
        nargs="?",
        help="Project name (lowercase, digits, '-' and '_'), or '.' for the output directory itself",
    )
    parser.add_argument("--target", "-t", help="Target application flavor")
    ui_group = parser.add_mutually_exclusive_group()
    ui_group.add_argument(
        "--ui", "-u",
        default=None,
        help="UI library (default: the target's first accepted library)",
    )
    ui_group.add_argument(
        "--no-ui",
        action="store_true",
        help="Do not apply a UI library layer",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory of the project (default: current directory)",
    )
    parser.add_argument(
        "--templates",
        default=None,
        help="Templates directory (default: bundled templates)",
    )
    parser.add_argument(
        "--token",
        action="append",
        type=_parse_token,
        default=[],
        metavar="KEY=VALUE",
        help="Extra token to substitute; may be repeated",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Compose into an existing non-empty directory",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available targets and UI libraries, then exit",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``app-creator`` and ``python -m app_creator``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
    except ValueError as exc:
        # Also covers pydantic's ValidationError.
        print_error(f"Error: invalid configuration: {exc}")
        sys.exit(1)
    if args.templates:
        config.templates_dir = Path(args.templates)
    if args.output:
        config.output_dir = Path(args.output)
    config.overwrite = args.force

    try:
        catalog = load_catalog(config.catalog_path)
    except AppCreatorError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    if args.list:
        print_catalog(catalog)
        return

    if not args.project_name or not args.target:
        parser.error("project_name and --target are required (or use --list)")

    try:
        ui = None if args.no_ui else (args.ui or catalog.default_ui(args.target))
        composer = ProjectComposer(config, catalog)

        console.print(
            f"\n[green]Creating[/green] [bold]{args.target}[/bold] app: "
            f"[cyan]{args.project_name}[/cyan]\n"
        )
        with create_progress() as progress:
            progress.add_task("Composing project...", total=None)
            result = asyncio.run(
                composer.compose(args.project_name, args.target, ui, dict(args.token))
            )
    except (AppCreatorError, OSError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    print_composition_summary(result)
    print_success("Project created successfully.")
    console.print()
    console.print(MessageRenderer().next_steps(result, in_place=args.project_name == "."))


if __name__ == "__main__":
    main()
