"""
Deep clone and field-level merge of property bags.

Overlays are applied key by key. Nested mappings are merged recursively so
sibling keys set by earlier overlays survive; any other value replaces what
was there. A key present in an overlay always overrides, even when its value
is ``None``, zero or empty.
"""

import copy
from collections.abc import Mapping, MutableMapping
from typing import Any, TypeVar

T = TypeVar("T")


def deep_clone(value: T) -> T:
    """Return a structural copy of ``value`` sharing no mutable parts with it."""
    return copy.deepcopy(value)


def deep_merge(target: MutableMapping, overlay: Mapping) -> MutableMapping:
    """Merge ``overlay`` into ``target`` in place and return ``target``.

    Args:
        target: Mapping to update
        overlay: Partial values to apply

    Values taken from ``overlay`` are deep-copied, so later mutation of
    ``target`` never reaches back into the overlay.
    """
    for key, value in overlay.items():
        current = target.get(key)
        if isinstance(value, Mapping) and isinstance(current, MutableMapping):
            deep_merge(current, value)
        else:
            target[key] = deep_clone(value)
    return target


def reset(target: MutableMapping, snapshot: Mapping) -> MutableMapping:
    """Make ``target`` equal to a fresh copy of ``snapshot``, keeping its identity."""
    target.clear()
    target.update(deep_clone(dict(snapshot)))
    return target
