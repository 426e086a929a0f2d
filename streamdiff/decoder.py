"""Buffered decoder: the whole document is in memory before parsing."""
from __future__ import annotations

from typing import Any

import orjson

from . import json_util
from .errors import ParseFailure
from .stream_decoder import locate_error


class BufferedDecoder:
    def decode(self, text: str) -> Any:
        try:
            return json_util.loads(text)
        except orjson.JSONDecodeError as e:
            # orjson 은 byte offset 만 알려줌 → 구조 경로는 이벤트 파서로 재탐색
            path = locate_error(text.encode("utf-8", "replace")) or "$"
            raise ParseFailure(f"buffered parse failed: {e}", path, source="buffered") from e
