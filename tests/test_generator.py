"""
RandomGenerator
───────────────
1) seed 고정 → 동일 그래프
2) null_or 의 조건부 draw 소비
3) create_array 개수 범위 / draw 순서
4) 기본 int / str 생성기
"""
import logging

import pytest
from hypothesis import given, settings, strategies as st

from streamdiff import json_util
from streamdiff.errors import UnregisteredTypeError
from streamdiff.fixtures import FixtureRecord, register_fixture_graph
from streamdiff.generator import INT32_MAX, RandomGenerator


def _graph_digest(seed, n=40):
    gen = register_fixture_graph(RandomGenerator(seed))
    return json_util.digest(json_util.dumpb(gen.create_array(FixtureRecord, n)))


@settings(max_examples=20, deadline=None)
@given(st.integers(min_value=0, max_value=2**32 - 1))
def test_same_seed_same_graph(seed):
    assert _graph_digest(seed) == _graph_digest(seed)


def test_different_seeds_differ():
    assert _graph_digest(1) != _graph_digest(2)


def test_seed_is_logged(caplog):
    caplog.set_level(logging.INFO, logger="streamdiff.generator")
    gen = RandomGenerator()
    assert isinstance(gen.seed, int)
    assert f"Using seed: {gen.seed}" in caplog.text


# ----------------------------------------------------------------------
# registration
# ----------------------------------------------------------------------
def test_duplicate_registration_keeps_first():
    class Thing:
        pass

    gen = RandomGenerator(1).register(Thing, lambda r: "first").register(Thing, lambda r: "second")
    assert gen.create(Thing) == "first"


def test_defaults_cannot_be_overridden():
    gen = RandomGenerator(1).register(int, lambda r: -1)
    assert all(0 <= gen.create(int) < INT32_MAX for _ in range(100))


def test_unregistered_create():
    with pytest.raises(UnregisteredTypeError):
        RandomGenerator(1).create(bytes)


def test_generator_errors_propagate_unchanged():
    def boom(r):
        raise ZeroDivisionError("from user generator")

    gen = RandomGenerator(1).register("boom", boom)
    with pytest.raises(ZeroDivisionError, match="from user generator"):
        gen.create("boom")


# ----------------------------------------------------------------------
# null_or
# ----------------------------------------------------------------------
class _Counter:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return "x"


def test_null_or_always_null_never_calls():
    gen, stub = RandomGenerator(3), _Counter()
    assert all(gen.null_or(1.0, stub) is None for _ in range(500))
    assert stub.calls == 0


def test_null_or_never_null_always_calls():
    gen, stub = RandomGenerator(3), _Counter()
    assert all(gen.null_or(0.0, stub) == "x" for _ in range(500))
    assert stub.calls == 500


def test_null_branch_consumes_exactly_one_draw():
    g1, g2 = RandomGenerator(11), RandomGenerator(11)
    g1.null_or(1.0, lambda: g1.next_float())
    g2.next_float()
    assert g1.next_float() == g2.next_float()


def test_present_branch_draws_after_the_coin():
    g1, g2 = RandomGenerator(11), RandomGenerator(11)
    v = g1.null_or(0.0, lambda: g1.create(int))
    g2.next_float()
    assert v == g2.create(int)


@pytest.mark.parametrize("draw, expected", [(0.4999, None), (0.5, "x"), (0.7, "x")])
def test_null_or_boundary(monkeypatch, draw, expected):
    gen = RandomGenerator(0)
    monkeypatch.setattr(gen, "next_float", lambda: draw)
    assert gen.null_or(0.5, lambda: "x") == expected


# ----------------------------------------------------------------------
# create_array
# ----------------------------------------------------------------------
@given(
    seed=st.integers(min_value=0, max_value=2**31),
    lo=st.integers(min_value=0, max_value=8),
    span=st.integers(min_value=0, max_value=8),
)
def test_create_array_count_in_range(seed, lo, span):
    out = RandomGenerator(seed).create_array(int, lo, lo + span)
    assert lo <= len(out) <= lo + span


def test_create_array_zero_range_is_empty():
    gen = RandomGenerator(5)
    assert all(gen.create_array(str, 0, 0) == [] for _ in range(50))


def test_create_array_fixed_count():
    assert len(RandomGenerator(5).create_array(str, 7)) == 7


def test_create_array_count_drawn_before_elements():
    g1, g2 = RandomGenerator(21), RandomGenerator(21)
    arr = g1.create_array(int, 2, 6)
    n = g2.next_int(2, 6)
    assert arr == [g2.create(int) for _ in range(n)]


@pytest.mark.parametrize("lo, hi", [(3, 2), (-1, 4)])
def test_create_array_bad_range(lo, hi):
    with pytest.raises(ValueError):
        RandomGenerator(5).create_array(int, lo, hi)


# ----------------------------------------------------------------------
# default str generator
# ----------------------------------------------------------------------
def test_strings_are_valid_scalar_values():
    gen = RandomGenerator(1234)
    strings = [gen.create(str) for _ in range(300)]
    assert all(5 <= len(s) <= 9 for s in strings)
    assert not any(0xD800 <= ord(ch) <= 0xDFFF for s in strings for ch in s)
    # 대부분의 코드포인트가 BMP 밖 → UTF-8 4 byte
    assert any(ord(ch) > 0xFFFF for s in strings for ch in s)
    for s in strings:
        s.encode("utf-8")
