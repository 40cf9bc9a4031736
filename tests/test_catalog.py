"""Unit tests for the template catalog (app_creator.catalog).

Tests cover:
- load_catalog on valid, missing, malformed and inconsistent files
- Lookup helpers and target/UI validation
- The bundled catalog shipped with the package
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from app_creator.catalog import Catalog, TargetSpec, UiSpec, load_catalog
from app_creator.config import DEFAULT_TEMPLATES_DIR
from app_creator.errors import CatalogError

pytestmark = pytest.mark.unit


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "catalog.yaml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


class TestLoadCatalog:
    def test_loads_sample(self, templates_dir):
        catalog = load_catalog(templates_dir / "catalog.yaml")
        assert [t.id for t in catalog.targets] == ["webresource", "portal", "powerpages"]
        assert [u.id for u in catalog.ui] == ["kendo", "shadcn"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="not found"):
            load_catalog(tmp_path / "catalog.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = _write(tmp_path, "targets: [unclosed\n")
        with pytest.raises(CatalogError, match="Invalid YAML"):
            load_catalog(path)

    def test_empty_file_is_empty_catalog(self, tmp_path):
        catalog = load_catalog(_write(tmp_path, ""))
        assert catalog.targets == []
        assert catalog.ui == []

    def test_missing_required_field(self, tmp_path):
        path = _write(tmp_path, """\
            targets:
              - id: web
        """)
        with pytest.raises(CatalogError, match="Invalid catalog"):
            load_catalog(path)

    def test_duplicate_ids(self, tmp_path):
        path = _write(tmp_path, """\
            targets:
              - {id: web, name: A}
              - {id: web, name: B}
        """)
        with pytest.raises(CatalogError, match="duplicate target ids: web"):
            load_catalog(path)

    def test_unknown_ui_reference(self, tmp_path):
        path = _write(tmp_path, """\
            targets:
              - {id: web, name: Web, ui: [material]}
        """)
        with pytest.raises(CatalogError, match="unknown ui: material"):
            load_catalog(path)


class TestCatalogLookup:
    @pytest.fixture
    def catalog(self) -> Catalog:
        return Catalog(
            targets=[
                TargetSpec(id="web", name="Web", ui=["kendo", "shadcn"]),
                TargetSpec(id="mobile", name="Mobile", layer="expo"),
            ],
            ui=[
                UiSpec(id="kendo", name="Kendo", tokens={"KENDO_THEME": "default"}),
                UiSpec(id="shadcn", name="shadcn"),
            ],
        )

    def test_layer_name_defaults_to_id(self, catalog):
        assert catalog.target("web").layer_name == "web"
        assert catalog.target("mobile").layer_name == "expo"
        assert catalog.ui_library("kendo").layer_name == "kendo"

    def test_unknown_target_lists_known(self, catalog):
        with pytest.raises(CatalogError, match="known: web, mobile"):
            catalog.target("desktop")

    def test_unknown_ui(self, catalog):
        with pytest.raises(CatalogError, match="Unknown UI library"):
            catalog.ui_library("bootstrap")

    def test_default_ui(self, catalog):
        assert catalog.default_ui("web") == "kendo"
        assert catalog.default_ui("mobile") is None

    def test_validate_choice(self, catalog):
        target, ui = catalog.validate_choice("web", "shadcn")
        assert target.id == "web"
        assert ui is not None and ui.id == "shadcn"

    def test_validate_choice_without_ui(self, catalog):
        target, ui = catalog.validate_choice("mobile", None)
        assert target.id == "mobile"
        assert ui is None

    def test_validate_choice_rejects_combination(self, catalog):
        with pytest.raises(CatalogError, match="accepted: none"):
            catalog.validate_choice("mobile", "kendo")


class TestBundledCatalog:
    def test_bundled_catalog_is_valid(self):
        catalog = load_catalog(DEFAULT_TEMPLATES_DIR / "catalog.yaml")
        assert {t.id for t in catalog.targets} == {"webresource", "portal", "powerpages", "mobile"}
        assert catalog.target("webresource").ui == ["kendo", "shadcn"]
        assert catalog.target("mobile").ui == []

    def test_bundled_layers_exist(self):
        catalog = load_catalog(DEFAULT_TEMPLATES_DIR / "catalog.yaml")
        assert (DEFAULT_TEMPLATES_DIR / "base").is_dir()
        for target in catalog.targets:
            assert (DEFAULT_TEMPLATES_DIR / "targets" / target.layer_name).is_dir()
        for ui in catalog.ui:
            assert (DEFAULT_TEMPLATES_DIR / "ui" / ui.layer_name).is_dir()
