"""Type-keyed table of random value generators.

Keys are usually the Python class a generator produces (``int``, ``str``,
a dataclass) but any hashable works.  Registration is *insert-if-absent*:
the first generator registered for a key wins and later registrations for
the same key are ignored without error.  This is what lets
:class:`~streamdiff.generator.RandomGenerator` install its defaults first
and still accept user registrations for new keys afterwards.

Registering the same key twice with different logic is a caller error.  It
is not detected at runtime; the second function is simply never used.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Hashable, Iterator

from .errors import UnregisteredTypeError, key_name

LOGGER = logging.getLogger("streamdiff.registry")
LOGGER.addHandler(logging.NullHandler())

GenFn = Callable[[Any], Any]


class ValueRegistry:
    def __init__(self):
        self._funcs: Dict[Hashable, GenFn] = {}

    def register(self, key: Hashable, gen_fn: GenFn) -> bool:
        """Add ``gen_fn`` for ``key`` unless one exists; return True if added."""
        if key in self._funcs:
            LOGGER.debug("ignoring duplicate registration for %s", key_name(key))
            return False
        self._funcs[key] = gen_fn
        return True

    def resolve(self, key: Hashable) -> GenFn:
        try:
            return self._funcs[key]
        except KeyError:
            raise UnregisteredTypeError(key) from None

    def keys(self) -> Iterator[Hashable]:
        return iter(self._funcs)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._funcs

    def __len__(self) -> int:
        return len(self._funcs)
