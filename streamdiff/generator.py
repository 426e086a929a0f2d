"""Seeded random value generator built on a :class:`ValueRegistry`.

One ``numpy.random.Generator`` is shared by every nested ``create`` call, so
for a fixed seed and a fixed sequence of calls the produced graph is always
the same.  A generator instance must not be used from concurrent tasks: draw
order is part of its contract.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, List, Optional, TypeVar

import numpy as np

from .config import HARNESS_CONFIG
from .registry import GenFn, ValueRegistry

LOGGER = logging.getLogger("streamdiff.generator")
LOGGER.addHandler(logging.NullHandler())

T = TypeVar("T")

INT32_MAX = 2**31 - 1
UNICODE_LIMIT = 0x110000
SURROGATE_LO, SURROGATE_HI = 0xD800, 0xDFFF


def generate_seed() -> int:
    return int(np.random.SeedSequence().entropy)


class RandomGenerator:
    def __init__(self, seed: Optional[int] = None, registry: Optional[ValueRegistry] = None):
        if seed is None:
            seed = generate_seed()
        LOGGER.info("Using seed: %d", seed)
        self._seed = int(seed)
        self._rng = np.random.default_rng(self._seed)
        self.registry = registry if registry is not None else ValueRegistry()

        # 기본 등록 (사용자 등록보다 먼저 → first registration wins)
        lo, hi = HARNESS_CONFIG["string_length"]
        self.register(int, lambda r: r.next_int(0, INT32_MAX - 1))
        self.register(str, lambda r: r.next_string(r.next_int(lo, hi)))

    @property
    def seed(self) -> int:
        return self._seed

    # ------------------------------------------------------------------
    # registration
    # ------------------------------------------------------------------
    def register(self, key: Hashable, gen_fn: GenFn) -> "RandomGenerator":
        self.registry.register(key, gen_fn)
        return self

    # ------------------------------------------------------------------
    # draws
    # ------------------------------------------------------------------
    def next_int(self, lo: int, hi: int) -> int:
        """Uniform integer in ``[lo, hi]`` (one draw)."""
        return int(self._rng.integers(lo, hi, endpoint=True))

    def next_float(self) -> float:
        """Uniform float in ``[0, 1)`` (one draw)."""
        return float(self._rng.random())

    def next_string(self, length: int) -> str:
        """``length`` Unicode scalar values drawn from the whole code space.

        Surrogate code points are redrawn, so a single character may consume
        more than one draw.  Most draws land outside the BMP (four UTF-8 bytes).
        """
        chars = []
        for _ in range(length):
            cp = int(self._rng.integers(0, UNICODE_LIMIT))
            while SURROGATE_LO <= cp <= SURROGATE_HI:
                cp = int(self._rng.integers(0, UNICODE_LIMIT))
            chars.append(chr(cp))
        return "".join(chars)

    # ------------------------------------------------------------------
    # composition
    # ------------------------------------------------------------------
    def create(self, key: Hashable) -> Any:
        return self.registry.resolve(key)(self)

    def create_array(self, key: Hashable, min_count: int, max_count: Optional[int] = None) -> List[Any]:
        """``create(key)`` repeated ``min_count`` times, or a random count.

        With ``max_count`` the count is drawn from ``[min_count, max_count]``
        before any element is drawn.
        """
        if max_count is None:
            count = min_count
        else:
            if min_count < 0 or min_count > max_count:
                raise ValueError(f"invalid count range [{min_count}, {max_count}]")
            count = self.next_int(min_count, max_count)
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        return [self.create(key) for _ in range(count)]

    def null_or(self, null_probability: float, gen_fn: Callable[[], T]) -> Optional[T]:
        """None with probability ``null_probability``, else ``gen_fn()``.

        The None branch consumes exactly one draw and never calls
        ``gen_fn``; the other branch consumes one draw plus whatever
        ``gen_fn`` draws.  A draw equal to ``null_probability`` is present.
        """
        if self.next_float() < null_probability:
            return None
        return gen_fn()
