"""Helpers for merging and copying attribute maps."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

K = TypeVar("K")
V = TypeVar("V")


def merge_override(target: dict[K, V], source: Mapping[K, V]) -> dict[K, V]:
    """Write every key of ``source`` into ``target``.

    Returns ``target`` itself so callers can keep updating a live map.
    """
    for key, value in source.items():
        target[key] = value
    return target


def merge_fill(target: dict[K, V], source: Mapping[K, V]) -> dict[K, V]:
    """Add keys from ``source`` that are missing (or ``None``) in ``target``."""
    for key, value in source.items():
        if target.get(key) is None:
            target[key] = value
    return target


def shallow_copy(attrs: Mapping[K, V]) -> dict[K, V]:
    return dict(attrs)


def copy_nested(mapping: Mapping[K, Any]) -> dict[K, Any]:
    """Copy ``mapping`` and one nested level of dict or list values."""
    result: dict[K, Any] = {}
    for key, value in mapping.items():
        if isinstance(value, Mapping):
            result[key] = dict(value)
        elif isinstance(value, list):
            result[key] = list(value)
        else:
            result[key] = value
    return result


def attrs_from_list(attr_list: Iterable[Any]) -> dict[str, Any]:
    # Later duplicates win, matching DOT's left-to-right evaluation.
    attrs: dict[str, Any] = {}
    for attr in attr_list:
        attrs[attr.id] = attr.eq
    return attrs
