"""Streaming JSON decoder: ijson push parser fed chunk by chunk.

Chunks are pulled from any binary ``read(n)`` source through
``asyncio.to_thread`` and pushed into ``ijson.parse_coro``.  Parse events
are assembled into plain Python values while the current structural path
is tracked, so a parse error can be reported as ``$[7924].b.value``
rather than a byte offset.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, List, Optional

import ijson

from .cancel import NEVER, CancellationToken
from .config import HARNESS_CONFIG
from .errors import ParseFailure, RunCancelled
from .models import render_path

LOGGER = logging.getLogger("streamdiff.stream_decoder")
LOGGER.addHandler(logging.NullHandler())

_PARSE_ERRORS = (ijson.JSONError, UnicodeDecodeError)


class PathBuilder:
    """Build a value from ijson ``(prefix, event, value)`` events."""

    def __init__(self):
        self.value: Any = None
        self._stack: List[list] = []   # [container, key | index | None]
        self._done = False             # innermost value at path is complete

    @property
    def path(self) -> str:
        return render_path([k for _, k in self._stack if k is not None])

    @property
    def where(self) -> str:
        return ("after " if self._done else "at ") + self.path

    def feed(self, events) -> None:
        for _prefix, ev, val in events:
            self.event(ev, val)
        del events[:]

    def event(self, ev: str, val: Any) -> None:
        if ev == "map_key":
            self._stack[-1][1] = val
            self._done = False
        elif ev == "start_map":
            self._put({}, container=True)
        elif ev == "start_array":
            self._put([], container=True)
        elif ev in ("end_map", "end_array"):
            self._stack.pop()
            self._done = True
        else:
            self._put(val)

    def _put(self, v: Any, container: bool = False) -> None:
        if self._stack:
            top = self._stack[-1]
            parent = top[0]
            if isinstance(parent, list):
                parent.append(v)
                top[1] = len(parent) - 1
            else:
                parent[top[1]] = v
        else:
            self.value = v
        if container:
            self._stack.append([v, None])
        self._done = not container


class StreamDecoder:
    def __init__(self, chunk_size: Optional[int] = None):
        self.chunk_size = chunk_size or HARNESS_CONFIG["chunk_size"]

    async def decode(self, source, token: Optional[CancellationToken] = None) -> Any:
        token = token or NEVER
        builder = PathBuilder()
        events = ijson.sendable_list()
        coro = ijson.parse_coro(events, use_float=True)
        n_chunks = 0
        try:
            while True:
                token.raise_if_cancelled()
                chunk = await asyncio.to_thread(source.read, self.chunk_size)
                if not chunk:
                    break
                n_chunks += 1
                coro.send(chunk)
                builder.feed(events)
            coro.close()
            builder.feed(events)
        except _PARSE_ERRORS as e:
            builder.feed(events)
            raise ParseFailure(f"streaming parse failed {builder.where} (chunk {n_chunks}): {e}",
                               builder.path, source="streaming") from e
        except (RunCancelled, asyncio.CancelledError):
            with contextlib.suppress(*_PARSE_ERRORS):
                coro.close()
            raise
        LOGGER.debug("streamed %d chunk(s) of %d bytes", n_chunks, self.chunk_size)
        return builder.value


def locate_error(data: bytes) -> Optional[str]:
    """Path at which ``data`` stops being valid JSON, or None if it parses."""
    builder = PathBuilder()
    events = ijson.sendable_list()
    coro = ijson.parse_coro(events, use_float=True)
    try:
        coro.send(data)
        builder.feed(events)
        coro.close()
    except _PARSE_ERRORS:
        builder.feed(events)
        return builder.path
    return None
