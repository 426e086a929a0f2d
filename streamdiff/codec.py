"""JSON codec adapter exposing a buffered and a streaming entry point.

serialize / buffered parse: orjson.  Streaming parse: ijson.  Both parse
paths return plain values which are then bound to the requested type by
:mod:`streamdiff.binding`.  Any object with the same three methods can be
handed to :class:`~streamdiff.harness.RoundTripHarness` instead.
"""
from __future__ import annotations

from typing import Any, BinaryIO, Optional

from . import json_util
from .binding import bind
from .cancel import CancellationToken
from .decoder import BufferedDecoder
from .errors import ParseFailure
from .stream_decoder import StreamDecoder


class JsonCodec:
    def __init__(self, case_insensitive: bool = True, chunk_size: Optional[int] = None):
        self.case_insensitive = case_insensitive
        self.buffered = BufferedDecoder()
        self.stream = StreamDecoder(chunk_size)

    @property
    def chunk_size(self) -> int:
        return self.stream.chunk_size

    def serialize(self, value: Any) -> bytes:
        return json_util.dumpb(value)

    def deserialize(self, text: str, type_: Any = None) -> Any:
        return self._bind(self.buffered.decode(text), type_, "buffered")

    async def deserialize_stream(
        self, source: BinaryIO, type_: Any = None, token: Optional[CancellationToken] = None
    ) -> Any:
        plain = await self.stream.decode(source, token)
        return self._bind(plain, type_, "streaming")

    def _bind(self, plain: Any, type_: Any, source: str) -> Any:
        if type_ is None:
            return plain
        try:
            return bind(type_, plain, case_insensitive=self.case_insensitive)
        except ParseFailure as e:
            raise e.with_source(source)
