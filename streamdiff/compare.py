"""Structural comparison that reports the first differing path.

Rules: None only equals None; dataclasses compare by type, then field by
field in declaration order; mappings by key, where a missing key differs
from a key holding None; sets compare unordered; lists and tuples element
by element, then by length; scalars by exact type and value, so ``True``
differs from ``1``.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Set
from typing import Any, List, Optional, Tuple

from .errors import DivergenceError
from .models import Divergence, PathPart, render_path


class _Missing:
    def __repr__(self):
        return "<missing>"


MISSING = _Missing()


def first_divergence(left: Any, right: Any) -> Optional[Divergence]:
    return _walk(left, right, [])


def assert_equivalent(left: Any, right: Any, labels: Tuple[str, str] = ("buffered", "streaming")) -> None:
    div = first_divergence(left, right)
    if div is not None:
        raise DivergenceError(div.path, div.left, div.right, labels=labels, reason=div.reason)


def _diff(path: List[PathPart], a: Any, b: Any, reason: str) -> Divergence:
    return Divergence(render_path(path), a, b, reason)


def _walk(a: Any, b: Any, path: List[PathPart]) -> Optional[Divergence]:
    if a is None or b is None:
        return None if a is b else _diff(path, a, b, "null vs present")

    if dataclasses.is_dataclass(a) and not isinstance(a, type):
        if type(a) is not type(b):
            return _diff(path, a, b, f"type {type(a).__name__} vs {type(b).__name__}")
        for f in dataclasses.fields(a):
            d = _walk(getattr(a, f.name), getattr(b, f.name), path + [f.name])
            if d is not None:
                return d
        return None

    if isinstance(a, Mapping):
        if not isinstance(b, Mapping):
            return _diff(path, a, b, f"object vs {type(b).__name__}")
        for k in a:
            if k not in b:
                return _diff(path + [k], a[k], MISSING, "property missing on the right")
            d = _walk(a[k], b[k], path + [k])
            if d is not None:
                return d
        for k in b:
            if k not in a:
                return _diff(path + [k], MISSING, b[k], "property missing on the left")
        return None

    if isinstance(a, Set):
        if not isinstance(b, Set):
            return _diff(path, a, b, f"set vs {type(b).__name__}")
        if a != b:
            only_a, only_b = a - b, b - a
            return _diff(path, a, b, f"set members differ (left only: {_short(only_a)}, right only: {_short(only_b)})")
        return None

    if isinstance(a, (list, tuple)):
        if not isinstance(b, (list, tuple)):
            return _diff(path, a, b, f"array vs {type(b).__name__}")
        for i, (x, y) in enumerate(zip(a, b)):
            d = _walk(x, y, path + [i])
            if d is not None:
                return d
        if len(a) != len(b):
            i = min(len(a), len(b))
            return _diff(path + [i], a[i] if i < len(a) else MISSING, b[i] if i < len(b) else MISSING,
                         f"length {len(a)} vs {len(b)}")
        return None

    if type(a) is not type(b):
        return _diff(path, a, b, f"type {type(a).__name__} vs {type(b).__name__}")
    if a != b:
        return _diff(path, a, b, "values differ")
    return None


def _short(items, limit: int = 3) -> str:
    items = sorted(map(repr, items))
    more = f", +{len(items) - limit}" if len(items) > limit else ""
    return "[" + ", ".join(items[:limit]) + more + "]"
