import orjson
import xxhash


def _default(o):
    # set 은 orjson 이 직접 지원하지 않음 → 정렬된 배열 (hash seed 무관하게 동일 바이트)
    if isinstance(o, (set, frozenset)):
        try:
            return sorted(o)
        except TypeError:
            return list(o)
    raise TypeError(f"Type is not JSON serializable: {type(o).__name__}")


def dumpb(o) -> bytes:
    return orjson.dumps(o, default=_default)


def dumps(o) -> str:
    return dumpb(o).decode()


def loads(data):
    return orjson.loads(data)


def digest(data: bytes) -> str:
    return xxhash.xxh3_64_hexdigest(data)


def hasher():
    return xxhash.xxh3_64()
