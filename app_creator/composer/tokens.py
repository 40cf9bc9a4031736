"""Token substitution over a composed project tree.

Placeholders have the form ``{{NAME}}``: case-sensitive, no whitespace inside
the braces.  Substitution is purely textual and single-pass.  A replacement
value that itself looks like a placeholder is not guaranteed to be expanded;
nested tokens are unsupported.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path

TOKEN_OPEN = "{{"
TOKEN_CLOSE = "}}"


def placeholder(name: str) -> str:
    """Return the delimited form of a token name."""
    return f"{TOKEN_OPEN}{name}{TOKEN_CLOSE}"


def is_text(data: bytes, encoding: str = "utf-8") -> bool:
    """Return ``True`` if *data* decodes cleanly with *encoding*."""
    try:
        data.decode(encoding)
    except UnicodeDecodeError:
        return False
    return True


def render_tokens(text: str, tokens: Mapping[str, str]) -> str:
    """Replace every ``{{name}}`` in *text* with its value from *tokens*."""
    for name, value in tokens.items():
        text = text.replace(placeholder(name), value)
    return text


async def substitute_tokens(
    root_dir: str | Path,
    tokens: Mapping[str, str],
    *,
    encoding: str = "utf-8",
) -> list[Path]:
    """Replace placeholders in every text file under *root_dir*.

    Files that do not decode with *encoding* are left untouched, as are files
    in which no placeholder occurs (no write, so timestamps are preserved).

    Returns:
        The files that were rewritten.

    Raises:
        FileNotFoundError: If *root_dir* is not a directory.
    """
    root = Path(root_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Project directory not found: {root}")

    changed: list[Path] = []
    for path in sorted(p for p in root.rglob("*") if p.is_file()):
        if await asyncio.to_thread(_substitute_file, path, tokens, encoding):
            changed.append(path)
    return changed


def _substitute_file(path: Path, tokens: Mapping[str, str], encoding: str) -> bool:
    data = path.read_bytes()
    if not is_text(data, encoding):
        return False

    content = data.decode(encoding)
    updated = render_tokens(content, tokens)
    if updated == content:
        return False

    path.write_bytes(updated.encode(encoding))
    return True
