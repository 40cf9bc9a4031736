"""App Creator configuration.

Typed configuration for the composition pipeline.  Settings use Pydantic v2
models so they are validated at construction time and can be serialised
to/from JSON or read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"


class Config(BaseModel):
    """Global App Creator configuration.

    Created once by the CLI (or by tests) and handed to
    :class:`~app_creator.composer.pipeline.ProjectComposer`.
    """

    templates_dir: Path = Field(
        default=DEFAULT_TEMPLATES_DIR,
        description="Root holding base/, targets/, ui/ and catalog.yaml",
    )
    output_dir: Path = Field(
        default=Path("."), description="Parent directory of generated projects"
    )
    encoding: str = Field(
        default="utf-8", description="Text encoding for JSON documents and token files"
    )
    json_indent: int = Field(
        default=2, ge=0, description="Indentation of merged JSON documents"
    )
    overwrite: bool = Field(
        default=False,
        description="Compose into an existing non-empty project directory",
    )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def base_layer_dir(self) -> Path:
        """The mandatory base layer."""
        return self.templates_dir / "base"

    @property
    def targets_dir(self) -> Path:
        """Directory containing one layer per target flavor."""
        return self.templates_dir / "targets"

    @property
    def ui_dir(self) -> Path:
        """Directory containing one layer per UI library."""
        return self.templates_dir / "ui"

    @property
    def catalog_path(self) -> Path:
        """Path to the ``catalog.yaml`` describing targets and UI libraries."""
        return self.templates_dir / "catalog.yaml"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            APP_CREATOR_TEMPLATES_DIR, APP_CREATOR_OUTPUT_DIR,
            APP_CREATOR_ENCODING, APP_CREATOR_JSON_INDENT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("APP_CREATOR_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["APP_CREATOR_TEMPLATES_DIR"])
        if os.environ.get("APP_CREATOR_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["APP_CREATOR_OUTPUT_DIR"])
        if os.environ.get("APP_CREATOR_ENCODING"):
            kwargs["encoding"] = os.environ["APP_CREATOR_ENCODING"]
        if os.environ.get("APP_CREATOR_JSON_INDENT"):
            kwargs["json_indent"] = int(os.environ["APP_CREATOR_JSON_INDENT"])
        return cls(**kwargs)
