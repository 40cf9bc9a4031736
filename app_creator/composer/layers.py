"""Layer composition: apply template layers onto a project tree.

A layer is a directory tree that mirrors the project layout.  Applying it
walks every entry and, per file name, does one of three things:

* ``<name>.patch.json`` is merged into ``<name>.json`` (see
  :func:`app_creator.composer.merge.merge_json`);
* ``<name>.patch.<ext>`` for script/markup/stylesheet kinds is copied to
  ``<name>.<ext>``, replacing whatever is there;
* anything else is copied to the same relative path.

Every step overwrites, so re-applying a layer converges to the same tree.
"""

from __future__ import annotations

import asyncio
import re
import shutil
from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from app_creator.composer.merge import merge_json
from app_creator.errors import LayerNotFoundError
from app_creator.utils import (
    ensure_dir,
    load_json,
    load_json_if_exists,
    print_warning,
    save_json,
)

# ---------------------------------------------------------------------------
# Naming conventions
# ---------------------------------------------------------------------------

PATCH_MARKER = "patch"
RENAMED_EXTENSIONS: tuple[str, ...] = ("ts", "tsx", "js", "jsx", "css")

_STRUCTURED_RE = re.compile(rf"^(?P<stem>.*)\.{PATCH_MARKER}\.json$")
_RENAMED_RE = re.compile(
    rf"^(?P<stem>.*)\.{PATCH_MARKER}\.(?P<ext>{'|'.join(RENAMED_EXTENSIONS)})$"
)


class EntryKind(str, Enum):
    """How a layer file is carried into the project tree."""

    STRUCTURED = "structured"
    RENAMED = "renamed"
    VERBATIM = "verbatim"


def classify_entry(name: str) -> EntryKind:
    """Classify a layer file by its name alone."""
    if _STRUCTURED_RE.match(name):
        return EntryKind.STRUCTURED
    if _RENAMED_RE.match(name):
        return EntryKind.RENAMED
    return EntryKind.VERBATIM


def target_name(name: str) -> str:
    """Return the file name a layer entry is written under.

    Examples::

        target_name("package.patch.json") -> "package.json"
        target_name("App.patch.tsx")      -> "App.tsx"
        target_name("logo.patch.svg")     -> "logo.patch.svg"
    """
    match = _STRUCTURED_RE.match(name)
    if match:
        return f"{match['stem']}.json"
    match = _RENAMED_RE.match(name)
    if match:
        return f"{match['stem']}.{match['ext']}"
    return name


# ---------------------------------------------------------------------------
# Layer model
# ---------------------------------------------------------------------------


class LayerKind(str, Enum):
    BASE = "base"
    TARGET = "target"
    UI = "ui"


class Layer(BaseModel):
    """A named layer root.  Precedence is given by application order."""

    name: str
    kind: LayerKind
    root: Path
    required: bool = Field(
        default=False, description="Fail instead of skipping when the root is missing"
    )

    @property
    def exists(self) -> bool:
        return self.root.is_dir()


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


async def apply_layer(
    layer_root: str | Path,
    project_root: str | Path,
    *,
    encoding: str = "utf-8",
    indent: int = 2,
) -> list[Path]:
    """Apply a single layer onto *project_root*.

    Args:
        layer_root: Root directory of the layer.  Read-only.
        project_root: Project tree to write into; created if missing.
        encoding: Encoding of ``.json`` documents taking part in a merge.
        indent: Indentation used when writing merged documents.

    Returns:
        The project paths written by this call, in walk order.

    Raises:
        LayerNotFoundError: If *layer_root* is not a directory.  Nothing is
            written in that case.
        StructuredDocumentError: If a patch document or its existing target is
            not a JSON object.  Files written earlier in the walk stay.
    """
    layer_root = Path(layer_root)
    project_root = Path(project_root)
    if not layer_root.is_dir():
        raise LayerNotFoundError(layer_root)

    written: list[Path] = []
    ensure_dir(project_root)
    await _apply_dir(layer_root, project_root, written, encoding, indent)
    return written


async def apply_layers(
    layers: Iterable[Layer],
    project_root: str | Path,
    *,
    encoding: str = "utf-8",
    indent: int = 2,
) -> tuple[list[Layer], list[Layer], list[Path]]:
    """Apply *layers* strictly in order.

    Optional layers whose root is missing are skipped with a warning;
    a missing required layer raises :class:`LayerNotFoundError`.

    Returns:
        ``(applied, skipped, written_paths)``.
    """
    applied: list[Layer] = []
    skipped: list[Layer] = []
    written: list[Path] = []

    for layer in layers:
        if not layer.exists and not layer.required:
            print_warning(f"  Skipping {layer.kind.value} layer '{layer.name}': {layer.root} not found")
            skipped.append(layer)
            continue
        written.extend(
            await apply_layer(layer.root, project_root, encoding=encoding, indent=indent)
        )
        applied.append(layer)

    return applied, skipped, written


async def _apply_dir(
    layer_dir: Path,
    project_dir: Path,
    written: list[Path],
    encoding: str,
    indent: int,
) -> None:
    for entry in sorted(layer_dir.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            ensure_dir(project_dir / entry.name)
            await _apply_dir(entry, project_dir / entry.name, written, encoding, indent)
            continue

        target = project_dir / target_name(entry.name)
        ensure_dir(target.parent)

        if classify_entry(entry.name) is EntryKind.STRUCTURED:
            await _merge_document(entry, target, encoding, indent)
        else:
            await asyncio.to_thread(_copy_file, entry, target)
        written.append(target)


def _copy_file(source: Path, target: Path) -> None:
    # copyfile raises IsADirectoryError for a directory destination.
    shutil.copyfile(source, target)
    shutil.copystat(source, target)


async def _merge_document(patch_path: Path, target: Path, encoding: str, indent: int) -> None:
    base = await asyncio.to_thread(load_json_if_exists, target, encoding)
    patch = await asyncio.to_thread(load_json, patch_path, encoding)
    merged = merge_json(base or {}, patch)
    await save_json(merged, target, indent=indent, encoding=encoding)
