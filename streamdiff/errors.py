"""Error taxonomy shared by the generator, codec and harness."""
from __future__ import annotations

from typing import Any, Optional, Tuple


class StreamDiffError(RuntimeError):
    """Base class for every error raised by streamdiff."""
    pass


class UnregisteredTypeError(StreamDiffError, LookupError):
    """No generator is registered for the requested type key."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"Failed to generate type {key_name(key)}: was not registered.")


class SerializationFailure(StreamDiffError):
    """Writing the serialized buffer failed; the run is aborted."""
    pass


class ParseFailure(StreamDiffError):
    """A deserialization path rejected its input at ``path``."""

    def __init__(self, message: str, path: Optional[str] = None, source: Optional[str] = None):
        self.path = path
        self.source = source
        self.reason = message
        where = f" (path: {path})" if path else ""
        super().__init__(f"{message}{where}")

    def with_source(self, source: str) -> "ParseFailure":
        self.source = source
        return self


class DivergenceError(StreamDiffError):
    """Both paths succeeded but produced structurally different values."""

    def __init__(
        self,
        path: str,
        value_a: Any,
        value_b: Any,
        labels: Tuple[str, str] = ("buffered", "streaming"),
        reason: str = "values differ",
    ):
        self.path = path
        self.value_a = value_a
        self.value_b = value_b
        self.labels = labels
        super().__init__(
            f"{labels[0]} and {labels[1]} results diverge at {path}: {reason} "
            f"({labels[0]}={value_a!r}, {labels[1]}={value_b!r})"
        )


class StorageMismatchError(StreamDiffError):
    """The snapshot read and the streamed read observed different bytes."""
    pass


class RunCancelled(Exception):
    """A run was aborted through its CancellationToken (not a StreamDiffError)."""
    pass


def key_name(key: Any) -> str:
    if isinstance(key, type):
        return f"{key.__module__}.{key.__qualname__}"
    return repr(key)
