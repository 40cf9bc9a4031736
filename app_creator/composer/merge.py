"""Structured merge of JSON manifests.

Used when a layer ships ``<name>.patch.json``: the patch is merged into the
existing ``<name>.json`` instead of replacing it.  The policy is
shallow: top-level keys from the patch overwrite the base, except for the
dependency maps and the script map, which are merged key-by-key.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

MERGEABLE_KEYS: tuple[str, ...] = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "scripts",
)


def merge_json(base: Mapping[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *patch* into *base* and return a new document.

    1. Every top-level key of *patch* overwrites the same key of *base*.
    2. For each key in :data:`MERGEABLE_KEYS` defined by either side, the
       result holds the union of both sub-mappings, patch entries winning.
    3. Keys absent from both documents never appear.

    A collection key counts as defined whenever it is present, even with a
    ``null`` or non-object value; such a value contributes no entries, so
    ``{"scripts": None}`` merged with ``{}`` yields ``{"scripts": {}}`` rather
    than keeping the ``null``.

    Neither argument is mutated.

    Example::

        >>> merge_json(
        ...     {"name": "app", "dependencies": {"a": "1.0"}},
        ...     {"dependencies": {"a": "2.0", "b": "1.0"}},
        ... )
        {'name': 'app', 'dependencies': {'a': '2.0', 'b': '1.0'}}
    """
    result: dict[str, Any] = copy.deepcopy({**base, **patch})

    for key in MERGEABLE_KEYS:
        if key in base or key in patch:
            result[key] = {
                **copy.deepcopy(_as_mapping(base.get(key))),
                **copy.deepcopy(_as_mapping(patch.get(key))),
            }

    return result


def _as_mapping(value: Any) -> Mapping[str, Any]:
    # A null or non-object collection contributes no entries.
    if isinstance(value, Mapping):
        return value
    return {}
