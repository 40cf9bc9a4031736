"""Layered template composition engine.

Applies a base layer and optional overlays onto a project directory, merging
``*.patch.json`` manifests structurally and renaming ``*.patch.<ext>`` files,
then replaces ``{{TOKEN}}`` placeholders across the finished tree.

Quick usage::

    from app_creator.composer import apply_layer, substitute_tokens

    await apply_layer("templates/base", "acme")
    await apply_layer("templates/targets/webresource", "acme")
    await substitute_tokens("acme", {"APP_NAME": "acme"})
"""

from app_creator.composer.layers import (
    EntryKind,
    Layer,
    LayerKind,
    apply_layer,
    apply_layers,
    classify_entry,
    target_name,
)
from app_creator.composer.merge import MERGEABLE_KEYS, merge_json
from app_creator.composer.pipeline import CompositionResult, ProjectComposer
from app_creator.composer.tokens import is_text, render_tokens, substitute_tokens

__all__ = [
    "MERGEABLE_KEYS",
    "CompositionResult",
    "EntryKind",
    "Layer",
    "LayerKind",
    "ProjectComposer",
    "apply_layer",
    "apply_layers",
    "classify_entry",
    "is_text",
    "merge_json",
    "render_tokens",
    "substitute_tokens",
    "target_name",
]
