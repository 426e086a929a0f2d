"""streamdiff - differential round-trip harness for buffered vs streaming JSON parsing."""

__version__ = "0.1.0"

from .errors import (
    StreamDiffError,
    UnregisteredTypeError,
    SerializationFailure,
    ParseFailure,
    DivergenceError,
    StorageMismatchError,
    RunCancelled,
)
from .models import Divergence, RunReport, render_path
from .registry import ValueRegistry
from .generator import RandomGenerator
from .cancel import CancellationToken
from .codec import JsonCodec
from .compare import first_divergence, assert_equivalent
from .harness import RoundTripHarness
from .fixtures import (
    NestedValue,
    FixtureRecord,
    register_fixture_graph,
    build_fixture,
    constant_fixture,
    find_failing_seed,
)

__all__ = [
    "StreamDiffError",
    "UnregisteredTypeError",
    "SerializationFailure",
    "ParseFailure",
    "DivergenceError",
    "StorageMismatchError",
    "RunCancelled",
    "Divergence",
    "RunReport",
    "render_path",
    "ValueRegistry",
    "RandomGenerator",
    "CancellationToken",
    "JsonCodec",
    "first_divergence",
    "assert_equivalent",
    "RoundTripHarness",
    "NestedValue",
    "FixtureRecord",
    "register_fixture_graph",
    "build_fixture",
    "constant_fixture",
    "find_failing_seed",
]
