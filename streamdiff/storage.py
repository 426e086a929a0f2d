"""Scratch byte sinks scoped to a single harness run."""
from __future__ import annotations

import io
import logging
import os
import tempfile
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

LOGGER = logging.getLogger("streamdiff.storage")
LOGGER.addHandler(logging.NullHandler())

STORAGE_KINDS = ("file", "memory")


@contextmanager
def scratch_buffer(kind: str = "file", tmp_dir: Optional[str] = None) -> Iterator[BinaryIO]:
    """Yield a readable / writable / seekable binary sink.

    ``file`` creates a named temporary file; ``memory`` uses ``io.BytesIO``.
    The sink is closed, and the file unlinked, on every exit path.
    """
    if kind == "memory":
        buf = io.BytesIO()
        try:
            yield buf
        finally:
            buf.close()
        return
    if kind != "file":
        raise ValueError(f"unknown storage kind '{kind}' (choose from {', '.join(STORAGE_KINDS)})")

    if tmp_dir is not None:
        os.makedirs(tmp_dir, exist_ok=True)
    fh = tempfile.NamedTemporaryFile(mode="w+b", prefix="streamdiff-", suffix=".json",
                                     dir=tmp_dir, delete=False)
    LOGGER.debug("scratch file %s", fh.name)
    try:
        yield fh
    finally:
        try:
            fh.close()
        finally:
            os.unlink(fh.name)
