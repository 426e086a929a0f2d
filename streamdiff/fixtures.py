"""Fixture graph used to reproduce the large-input streaming divergence.

Shape (one root element)::

    FixtureRecord
     ├─ a : Optional[int]
     ├─ b : Optional[NestedValue]  ── value : Optional[int]
     ├─ c : Optional[str]
     └─ d : FrozenSet[str]          (0‥5 strings, deduplicated)

The draw order of the fields (a, b, c, d) is part of the fixture: changing it
changes every dataset generated from a given seed.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, FrozenSet, List, Optional, Tuple

from .config import HARNESS_CONFIG
from .errors import DivergenceError, ParseFailure
from .generator import RandomGenerator, generate_seed
from .harness import RoundTripHarness

LOGGER = logging.getLogger("streamdiff.fixtures")
LOGGER.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class NestedValue:
    value: Optional[int]


@dataclass(frozen=True)
class FixtureRecord:
    a: Optional[int]
    b: Optional[NestedValue]
    c: Optional[str]
    d: FrozenSet[str]


def register_fixture_graph(gen: RandomGenerator, null_probability: Optional[float] = None) -> RandomGenerator:
    p = HARNESS_CONFIG["null_probability"] if null_probability is None else null_probability
    lo, hi = HARNESS_CONFIG["set_size"]
    return (
        gen
        .register(NestedValue, lambda r: NestedValue(value=r.null_or(p, lambda: r.create(int))))
        .register(FixtureRecord, lambda r: FixtureRecord(
            a=r.null_or(p, lambda: r.create(int)),
            b=r.null_or(p, lambda: r.create(NestedValue)),
            c=r.null_or(p, lambda: r.create(str)),
            d=frozenset(r.create_array(str, lo, hi)),
        ))
    )


def build_fixture(seed: Optional[int] = None, count: Optional[int] = None) -> List[FixtureRecord]:
    """``count`` records from a fixed seed (defaults come from HARNESS_CONFIG)."""
    if seed is None:
        seed = HARNESS_CONFIG["seed"]
    if count is None:
        count = HARNESS_CONFIG["record_count"]
    gen = register_fixture_graph(RandomGenerator(seed))
    return gen.create_array(FixtureRecord, count)


def constant_fixture(count: int = 1 << 14) -> List[FixtureRecord]:
    """The same single record repeated; the non-random control case."""
    rec = FixtureRecord(a=0, b=NestedValue(value=None), c=None, d=frozenset())
    return [rec] * count


def find_failing_seed(count: int = 1 << 16, attempts: int = 1, harness: Any = None) -> Optional[Tuple[int, Exception]]:
    """Try fresh random seeds until a run fails; return ``(seed, error)``.

    Only ParseFailure and DivergenceError count as a hit; anything else
    propagates.
    """
    if harness is None:
        harness = RoundTripHarness()
    for attempt in range(attempts):
        seed = generate_seed()
        data = register_fixture_graph(RandomGenerator(seed)).create_array(FixtureRecord, count)
        try:
            harness.check(data, List[FixtureRecord])
        except (ParseFailure, DivergenceError) as e:
            LOGGER.warning("seed %d failed on attempt %d: %s", seed, attempt + 1, e)
            return seed, e
    return None
