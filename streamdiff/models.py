from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Union

PathPart = Union[int, str]


def render_path(parts: Sequence[PathPart]) -> str:
    """``[3, "b", "value"]`` → ``$[3].b.value``"""
    out = ["$"]
    for p in parts:
        if isinstance(p, int):
            out.append(f"[{p}]")
        elif p.isidentifier():
            out.append(f".{p}")
        else:
            out.append("['" + p.replace("'", "\\'") + "']")
    return "".join(out)


@dataclass
class Divergence:
    path: str
    left: Any
    right: Any
    reason: str = "values differ"


@dataclass
class RunReport:
    count: Optional[int]
    byte_size: int
    digest: str
    storage: str
    chunk_size: int
    timings_ms: Dict[str, float] = field(default_factory=dict)
