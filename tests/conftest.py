"""Shared fixtures and Hypothesis profiles.

    pytest tests/ -v
    pytest tests/ -v --hypothesis-profile=dev
"""
import pytest
from hypothesis import settings

from streamdiff.fixtures import FixtureRecord, NestedValue

settings.register_profile("ci", max_examples=50, deadline=None, print_blob=True)
settings.register_profile("dev", max_examples=10, deadline=None)
settings.load_profile("ci")


@pytest.fixture
def ascii_records():
    """50 predictable records (ASCII only) so byte offsets are easy to compute."""
    return [
        FixtureRecord(a=i, b=NestedValue(value=i * 2 if i % 3 else None), c=f"s{i}", d=frozenset({"x", f"y{i}"}))
        for i in range(50)
    ]
