"""Template catalog: which targets and UI libraries exist.

The catalog lives next to the layers as ``catalog.yaml``::

    targets:
      - id: webresource
        name: Webresource App
        description: React app for Dynamics 365 webresources
        ui: [kendo, shadcn]
    ui:
      - id: kendo
        name: Kendo UI
        tokens:
          KENDO_THEME: "@progress/kendo-theme-default"

Each target maps to ``targets/<layer>/`` and each UI library to
``ui/<layer>/`` (``layer`` defaults to the id).  A target's ``ui`` list names
the UI libraries it accepts; an empty list means the target takes no UI layer.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from app_creator.errors import CatalogError


class TargetSpec(BaseModel):
    """An application flavor the tool can generate."""

    id: str
    name: str
    description: str = ""
    layer: str | None = Field(default=None, description="Directory under targets/")
    ui: list[str] = Field(default_factory=list, description="Accepted UI library ids")

    @property
    def layer_name(self) -> str:
        return self.layer or self.id


class UiSpec(BaseModel):
    """A UI library overlay."""

    id: str
    name: str
    description: str = ""
    layer: str | None = Field(default=None, description="Directory under ui/")
    tokens: dict[str, str] = Field(
        default_factory=dict, description="Extra tokens contributed by this library"
    )

    @property
    def layer_name(self) -> str:
        return self.layer or self.id


class Catalog(BaseModel):
    """All targets and UI libraries known to a templates directory."""

    targets: list[TargetSpec] = Field(default_factory=list)
    ui: list[UiSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> "Catalog":
        target_ids = [t.id for t in self.targets]
        ui_ids = [u.id for u in self.ui]
        for label, ids in (("target", target_ids), ("ui", ui_ids)):
            duplicates = sorted({i for i in ids if ids.count(i) > 1})
            if duplicates:
                raise ValueError(f"duplicate {label} ids: {', '.join(duplicates)}")
        for target in self.targets:
            unknown = [u for u in target.ui if u not in ui_ids]
            if unknown:
                raise ValueError(
                    f"target '{target.id}' references unknown ui: {', '.join(unknown)}"
                )
        return self

    # -- Lookup ------------------------------------------------------------

    def target(self, target_id: str) -> TargetSpec:
        for spec in self.targets:
            if spec.id == target_id:
                return spec
        known = ", ".join(t.id for t in self.targets) or "none"
        raise CatalogError(f"Unknown target '{target_id}' (known: {known})")

    def ui_library(self, ui_id: str) -> UiSpec:
        for spec in self.ui:
            if spec.id == ui_id:
                return spec
        known = ", ".join(u.id for u in self.ui) or "none"
        raise CatalogError(f"Unknown UI library '{ui_id}' (known: {known})")

    def default_ui(self, target_id: str) -> str | None:
        """First UI library accepted by *target_id*, or ``None``."""
        accepted = self.target(target_id).ui
        return accepted[0] if accepted else None

    def validate_choice(
        self, target_id: str, ui_id: str | None
    ) -> tuple[TargetSpec, UiSpec | None]:
        """Resolve a target/UI pair, rejecting combinations the target does not accept."""
        target = self.target(target_id)
        if ui_id is None:
            return target, None
        ui = self.ui_library(ui_id)
        if ui.id not in target.ui:
            accepted = ", ".join(target.ui) or "none"
            raise CatalogError(
                f"Target '{target.id}' does not support UI library '{ui.id}' "
                f"(accepted: {accepted})"
            )
        return target, ui


def load_catalog(path: str | Path) -> Catalog:
    """Parse and validate a ``catalog.yaml`` file.

    Raises:
        CatalogError: If the file is missing, not valid YAML, or does not
            describe a valid catalog.
    """
    catalog_path = Path(path)
    if not catalog_path.is_file():
        raise CatalogError(f"Catalog not found: {catalog_path}")

    try:
        raw = yaml.safe_load(catalog_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise CatalogError(f"Invalid YAML in {catalog_path}: {exc}") from exc

    try:
        return Catalog.model_validate(raw or {})
    except ValidationError as exc:
        raise CatalogError(f"Invalid catalog {catalog_path}: {exc}") from exc
