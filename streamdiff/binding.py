"""Bind plain JSON values (dict / list / scalars) to Python types.

Both parse paths produce plain values first and then run them through
:func:`bind`, so any disagreement between the paths comes from the parsers
and not from this module.  Validation is pydantic's ``TypeAdapter`` (lax
mode), which covers dataclasses, ``Optional``, ``List``, ``Tuple``,
``Set``/``FrozenSet`` and ``Dict[str, T]`` targets.

With ``case_insensitive`` every JSON object key is lower-cased before
validation, so dataclass fields are expected to have lower-case names.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .errors import ParseFailure
from .models import render_path


@lru_cache(maxsize=None)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


def bind(tp: Any, value: Any, *, case_insensitive: bool = True) -> Any:
    if tp is Any:
        return value
    if case_insensitive:
        value = fold_keys(value)
    try:
        return _adapter(tp).validate_python(value)
    except ValidationError as e:
        err = e.errors()[0]
        # loc 에는 field 이름 / index 외에 union member 태그(str)도 섞일 수 있음
        raise ParseFailure(f"{err['msg']} ({e.error_count()} error(s))",
                           render_path(list(err["loc"]))) from e


def fold_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {k.lower(): fold_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [fold_keys(v) for v in value]
    return value
