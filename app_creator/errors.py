"""Exception hierarchy for App Creator.

Every failure raised by the composition engine derives from
``AppCreatorError`` so the CLI can report it in one place.  The layer and
document errors additionally inherit from the matching built-in exception so
callers that only know about ``FileNotFoundError`` / ``ValueError`` still
catch them.
"""

from __future__ import annotations

from pathlib import Path


class AppCreatorError(Exception):
    """Base class for all App Creator errors."""


class LayerNotFoundError(AppCreatorError, FileNotFoundError):
    """Raised when a layer root directory does not exist."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Layer directory not found: {self.path}")


class StructuredDocumentError(AppCreatorError, ValueError):
    """Raised when a JSON document taking part in a merge is unusable.

    Covers both files that fail to parse and files whose top-level value is
    not a JSON object.
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot merge {self.path}: {reason}")


class CatalogError(AppCreatorError):
    """Raised for unknown targets, UI libraries, or a malformed catalog."""


class ProjectNameError(AppCreatorError, ValueError):
    """Raised when a project name is not usable as a directory/package name."""


class OutputExistsError(AppCreatorError, FileExistsError):
    """Raised when the project directory already exists and is not empty."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"Output directory already exists and is not empty: {self.path}"
        )
