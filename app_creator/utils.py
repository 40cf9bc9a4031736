"""Shared utility functions for App Creator.

Provides JSON I/O, file-system helpers, name validation, and Rich-based
console reporting.  The composition engine itself stays silent; only the CLI
and the optional-layer warning print through the shared ``console``.
"""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from app_creator.errors import StructuredDocumentError

console = Console()

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------

_PROJECT_NAME_RE = re.compile(r"^[a-z0-9_-]+$")


def is_valid_project_name(name: str) -> bool:
    """Return ``True`` if *name* may be used as a project name.

    Accepts lowercase letters, digits, hyphens and underscores, or the single
    ``"."`` meaning "use the current directory".
    """
    return name == "." or bool(_PROJECT_NAME_RE.match(name))


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path, encoding: str = "utf-8") -> dict[str, Any]:
    """Load a JSON file whose top-level value must be an object.

    Raises:
        FileNotFoundError: If the file does not exist.
        StructuredDocumentError: If the file is not *encoding* text, not
            valid JSON, or its top-level value is not an object.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_bytes().decode(encoding)
    except UnicodeDecodeError as exc:
        raise StructuredDocumentError(file_path, f"not valid {encoding} text") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StructuredDocumentError(file_path, f"invalid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise StructuredDocumentError(
            file_path, f"expected a JSON object, got {type(data).__name__}"
        )
    return data


def load_json_if_exists(path: str | Path, encoding: str = "utf-8") -> dict[str, Any] | None:
    """Like :func:`load_json` but returns ``None`` for a missing file."""
    file_path = Path(path)
    if not file_path.exists():
        return None
    return load_json(file_path, encoding=encoding)


def dump_json(data: dict[str, Any] | list[Any], indent: int = 2) -> str:
    """Serialise *data* the way every JSON file in a project is written.

    Human-readable indentation, non-ASCII kept verbatim, trailing newline.
    """
    return json.dumps(data, indent=indent, ensure_ascii=False) + "\n"


async def save_json(
    data: dict[str, Any] | list[Any],
    path: str | Path,
    indent: int = 2,
    encoding: str = "utf-8",
) -> None:
    """Save data as pretty-printed JSON, fully overwriting *path*.

    Parent directories are created automatically and the write runs in a
    worker thread so the event loop is not blocked.
    """
    file_path = Path(path)
    content = dump_json(data, indent=indent)
    ensure_dir(file_path.parent)
    await asyncio.to_thread(file_path.write_text, content, encoding)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Idempotent; this is the single place directories are created before a
    write.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def is_empty_dir(path: str | Path) -> bool:
    """Return ``True`` if *path* is missing or an empty directory."""
    dir_path = Path(path)
    if not dir_path.exists():
        return True
    return dir_path.is_dir() and not any(dir_path.iterdir())


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(0.42)  -> "0.4s"
        format_duration(65.2)  -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def create_progress() -> Progress:
    """Create a Rich spinner used by the CLI while a project is composed."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
