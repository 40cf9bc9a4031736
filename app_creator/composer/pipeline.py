"""Composition pipeline: base layer, target layer, UI layer, then tokens.

``ProjectComposer`` is the glue between the CLI and the engine.  It resolves
which layers to apply from the catalog, applies them strictly in order and
runs token substitution over the finished tree.  It never prompts, prints a
banner, or shells out; that is left to the caller.

Quick usage::

    from app_creator.composer import ProjectComposer
    from app_creator.config import Config

    composer = ProjectComposer(Config(output_dir=Path("/tmp/out")))
    result = await composer.compose("acme", target="webresource", ui="kendo")
"""

from __future__ import annotations

import time
from pathlib import Path

from pydantic import BaseModel, Field

from app_creator.catalog import Catalog, load_catalog
from app_creator.composer.layers import Layer, LayerKind, apply_layers
from app_creator.composer.tokens import substitute_tokens
from app_creator.config import Config
from app_creator.errors import OutputExistsError, ProjectNameError
from app_creator.utils import ensure_dir, is_empty_dir, is_valid_project_name


class CompositionResult(BaseModel):
    """What a :meth:`ProjectComposer.compose` run produced, for reporting."""

    project_name: str
    project_root: Path
    target: str
    ui: str | None = None
    applied_layers: list[str] = Field(default_factory=list)
    skipped_layers: list[str] = Field(default_factory=list)
    written_files: int = 0
    rewritten_files: list[Path] = Field(default_factory=list)
    tokens: dict[str, str] = Field(default_factory=dict)
    duration: float = 0.0


class ProjectComposer:
    """Builds a project directory from the layers of a templates directory.

    Attributes:
        config: Global configuration (templates location, output directory).
        catalog: Targets and UI libraries available in ``config.templates_dir``.
    """

    def __init__(self, config: Config, catalog: Catalog | None = None) -> None:
        self.config = config
        self.catalog = catalog if catalog is not None else load_catalog(config.catalog_path)

    # -- Layer / token resolution -------------------------------------------

    def resolve_layers(self, target: str, ui: str | None = None) -> list[Layer]:
        """Return the layers for a target/UI pair in application order."""
        target_spec, ui_spec = self.catalog.validate_choice(target, ui)

        layers = [
            Layer(
                name="base",
                kind=LayerKind.BASE,
                root=self.config.base_layer_dir,
                required=True,
            ),
            Layer(
                name=target_spec.id,
                kind=LayerKind.TARGET,
                root=self.config.targets_dir / target_spec.layer_name,
            ),
        ]
        if ui_spec is not None:
            layers.append(
                Layer(
                    name=ui_spec.id,
                    kind=LayerKind.UI,
                    root=self.config.ui_dir / ui_spec.layer_name,
                )
            )
        return layers

    def build_tokens(
        self,
        project_name: str,
        target: str,
        ui: str | None = None,
        extra: dict[str, str] | None = None,
    ) -> dict[str, str]:
        """Assemble the token map: built-ins, UI library tokens, then *extra*."""
        tokens: dict[str, str] = {
            "APP_NAME": project_name,
            "PROJECT_NAME": project_name,
            "TARGET": target,
            "UI_LIBRARY": ui or "",
        }
        if ui is not None:
            tokens.update(self.catalog.ui_library(ui).tokens)
        if extra:
            tokens.update(extra)
        return tokens

    def project_root_for(self, project_name: str) -> tuple[str, Path]:
        """Resolve ``(effective_name, project_root)`` for *project_name*.

        ``"."`` composes into the output directory itself and takes its name.

        Raises:
            ProjectNameError: If the name contains characters other than
                lowercase letters, digits, ``-`` and ``_``.
        """
        if not is_valid_project_name(project_name):
            raise ProjectNameError(
                f"Invalid project name '{project_name}': use lowercase letters, "
                "numbers, hyphens and underscores, or '.' for the current directory"
            )
        if project_name == ".":
            root = self.config.output_dir.resolve()
            return root.name, root
        return project_name, self.config.output_dir / project_name

    # -- Main entry point ---------------------------------------------------

    async def compose(
        self,
        project_name: str,
        target: str,
        ui: str | None = None,
        tokens: dict[str, str] | None = None,
    ) -> CompositionResult:
        """Compose a project and return a summary of what was done.

        Raises:
            ProjectNameError: For an unusable project name.
            CatalogError: For an unknown target/UI or a rejected combination.
            OutputExistsError: If the project directory is not empty and
                ``config.overwrite`` is false.
            LayerNotFoundError: If the base layer is missing.
            StructuredDocumentError: If a JSON merge input is invalid.
        """
        started = time.monotonic()
        name, project_root = self.project_root_for(project_name)
        layers = self.resolve_layers(target, ui)

        if not self.config.overwrite and not is_empty_dir(project_root):
            raise OutputExistsError(project_root)
        ensure_dir(project_root)

        applied, skipped, written = await apply_layers(
            layers,
            project_root,
            encoding=self.config.encoding,
            indent=self.config.json_indent,
        )

        token_map = self.build_tokens(name, target, ui, tokens)
        rewritten = await substitute_tokens(
            project_root, token_map, encoding=self.config.encoding
        )

        return CompositionResult(
            project_name=name,
            project_root=project_root,
            target=target,
            ui=ui,
            applied_layers=[layer.name for layer in applied],
            skipped_layers=[layer.name for layer in skipped],
            written_files=len(set(written)),
            rewritten_files=rewritten,
            tokens=token_map,
            duration=time.monotonic() - started,
        )
