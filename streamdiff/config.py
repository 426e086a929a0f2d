"""streamdiff 기본 파라미터 (환경변수로 일부 덮어쓰기 가능)"""
import os

HARNESS_CONFIG = {
    "chunk_size": int(os.environ.get("STREAMDIFF_CHUNK_SIZE", "16384")),  # 스트리밍 read 단위 (bytes)
    "storage": os.environ.get("STREAMDIFF_STORAGE", "file"),             # "file" | "memory"
    "tmp_dir": os.environ.get("STREAMDIFF_TMP_DIR") or None,
    "null_probability": 0.5,
    "string_length": (5, 9),    # inclusive
    "set_size": (0, 5),         # inclusive
    "record_count": 8000,
    "seed": int(os.environ.get("STREAMDIFF_SEED", "1905742104")),
}
