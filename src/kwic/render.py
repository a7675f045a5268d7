# src/kwic/render.py
from __future__ import annotations
import json
from typing import Iterable, Iterator, List, Optional, TextIO

from .index import KwicIndex
from .models import IndexEntry


def iter_rendered(index: KwicIndex) -> Iterator[str]:
    """One output line per rank, rank 0 first."""
    for rank in range(index.rank_count()):
        yield index.text_at_as_string(rank)


def write_index(index: KwicIndex, stream: TextIO) -> int:
    n = 0
    for text in iter_rendered(index):
        stream.write(text + "\n")
        n += 1
    return n


def to_rows(entries: Iterable[IndexEntry]) -> List[dict]:
    return [e.to_dict() for e in entries]


def to_json(entries: Iterable[IndexEntry], indent: Optional[int] = 2) -> str:
    return json.dumps(to_rows(entries), ensure_ascii=False, indent=indent)


def format_table(entries: Iterable[IndexEntry]) -> str:
    rows = list(entries)
    if not rows:
        return "(no entries)"
    out = ["#      Line   Shift  Text"]
    for e in rows:
        out.append(f"{e.rank:<6} {e.line:<6} {e.offset:<6} {e.text}")
    return "\n".join(out)
