"""Round-trip harness: serialize once, parse twice, diff.

A run goes through fixed phases, each awaited before the next starts:

1. acquire a scratch sink (temp file or ``BytesIO``)
2. serialize the data and write it to the sink
3. rewind and snapshot the whole buffer as text
4. path A: parse the snapshot text (buffered)
5. rewind and parse the sink incrementally (streaming)
6. compare A with B, then optionally the original data with A

A buffered parse failure stops the run before the streaming path is tried.
Parse failures are logged with their structural path and re-raised; nothing
is retried.  The scratch sink is released on every exit path.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, BinaryIO, Optional

from . import json_util
from .cancel import NEVER, CancellationToken
from .codec import JsonCodec
from .compare import assert_equivalent
from .config import HARNESS_CONFIG
from .errors import ParseFailure, SerializationFailure, StorageMismatchError
from .models import RunReport
from .storage import scratch_buffer

LOGGER = logging.getLogger("streamdiff.harness")
LOGGER.addHandler(logging.NullHandler())


class DigestingReader:
    """``read(n)`` proxy that hashes every byte handed to the consumer."""

    def __init__(self, raw: BinaryIO):
        self.raw = raw
        self._h = json_util.hasher()
        self.nbytes = 0

    def read(self, n: int = -1) -> bytes:
        chunk = self.raw.read(n)
        self._h.update(chunk)
        self.nbytes += len(chunk)
        return chunk

    def hexdigest(self) -> str:
        return self._h.hexdigest()


class RoundTripHarness:
    def __init__(
        self,
        codec=None,
        *,
        storage: Optional[str] = None,
        tmp_dir: Optional[str] = None,
        check_original: bool = True,
    ):
        self.codec = codec if codec is not None else JsonCodec()
        self.storage = storage or HARNESS_CONFIG["storage"]
        self.tmp_dir = tmp_dir if tmp_dir is not None else HARNESS_CONFIG["tmp_dir"]
        self.check_original = check_original

    # ------------------------------------------------------------------
    def check(self, data: Any, type_: Any = None, token: Optional[CancellationToken] = None) -> RunReport:
        """Synchronous wrapper around :meth:`run`."""
        return asyncio.run(self.run(data, type_, token))

    async def run(self, data: Any, type_: Any = None, token: Optional[CancellationToken] = None) -> RunReport:
        token = token or NEVER
        timings = {}
        token.raise_if_cancelled()

        with scratch_buffer(self.storage, self.tmp_dir) as sink:
            # 1) serialize -----------------------------------------------------
            t0 = time.perf_counter()
            try:
                payload = self.codec.serialize(data)
            except Exception as e:
                raise SerializationFailure(f"serialization failed: {e}") from e
            await self._write(sink, payload)
            token.raise_if_cancelled()
            timings["serialize"] = (time.perf_counter() - t0) * 1000

            # 2) rewind & snapshot ---------------------------------------------
            sink.seek(0)
            raw = await asyncio.to_thread(sink.read)
            token.raise_if_cancelled()
            # 깨진 UTF-8 은 U+FFFD 로 치환 (snapshot 자체는 항상 성공)
            text = raw.decode("utf-8", "replace")
            digest = json_util.digest(raw)
            LOGGER.debug("serialized %d bytes (xxh3=%s)", len(raw), digest)

            # 3) path A: buffered ----------------------------------------------
            t0 = time.perf_counter()
            try:
                result_a = self.codec.deserialize(text, type_)
            except ParseFailure as e:
                LOGGER.error("buffered parse failed, error path: %s", e.path)
                raise
            timings["buffered"] = (time.perf_counter() - t0) * 1000

            # 4) path B: streaming ---------------------------------------------
            t0 = time.perf_counter()
            sink.seek(0)
            reader = DigestingReader(sink)
            try:
                result_b = await self.codec.deserialize_stream(reader, type_, token)
            except ParseFailure as e:
                LOGGER.error("streaming parse failed, error path: %s", e.path)
                raise
            timings["streaming"] = (time.perf_counter() - t0) * 1000
            if reader.nbytes != len(raw) or reader.hexdigest() != digest:
                raise StorageMismatchError(
                    f"streamed {reader.nbytes} bytes (xxh3={reader.hexdigest()}) "
                    f"but snapshot has {len(raw)} bytes (xxh3={digest})"
                )

        # 5) compare -----------------------------------------------------------
        t0 = time.perf_counter()
        assert_equivalent(result_a, result_b, labels=("buffered", "streaming"))
        if self.check_original and type_ is not None:
            assert_equivalent(data, result_a, labels=("original", "buffered"))
        timings["compare"] = (time.perf_counter() - t0) * 1000
        LOGGER.debug("run timings (ms): %s", timings)

        return RunReport(
            count=len(data) if hasattr(data, "__len__") else None,
            byte_size=len(raw),
            digest=digest,
            storage=self.storage,
            chunk_size=getattr(self.codec, "chunk_size", HARNESS_CONFIG["chunk_size"]),
            timings_ms=timings,
        )

    @staticmethod
    async def _write(sink: BinaryIO, payload: bytes) -> None:
        try:
            await asyncio.to_thread(sink.write, payload)
            await asyncio.to_thread(sink.flush)
        except OSError as e:
            raise SerializationFailure(f"writing serialized buffer failed: {e}") from e
