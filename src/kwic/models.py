# src/kwic/models.py
"""
Data models for the KWIC engine.

This module defines three small, focused data containers:

- ShiftRef: one circular shift, identified by (line, offset) only.
- Ranking: the sorted sequence of all shift references of one run.
- IndexEntry: the result object handed to renderers, CLI and web API.

These classes do not contain business logic; word data lives in the
LineStore and is resolved on demand.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Iterator, Tuple


@dataclass(frozen=True, slots=True, order=True)
class ShiftRef:
    """
    A circular shift of one stored line, without any copied word data.

    Attributes
    ----------
    line : int
        Zero-based index of the source line in the LineStore.
    offset : int
        Index of the word the rotation starts at, in [0, word_count(line)).
        Words before it are moved, in order, to the end.
    """
    line: int
    offset: int


@dataclass(frozen=True, slots=True)
class Ranking:
    """
    The alphabetical order of every ShiftRef produced for one snapshot.

    Built once and never updated: mutating the LineStore afterwards does not
    reorder it. `first_words` holds the first word of each rank as it was in
    the snapshot the order was computed from.
    """
    refs: Tuple[ShiftRef, ...] = field(default_factory=tuple)
    first_words: Tuple[str, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.refs)

    def __getitem__(self, rank: int) -> ShiftRef:
        return self.refs[rank]

    def __iter__(self) -> Iterator[ShiftRef]:
        return iter(self.refs)


@dataclass(frozen=True, slots=True)
class IndexEntry:
    """
    One row of the KWIC listing.

    Attributes
    ----------
    rank : int
        Zero-based position in the alphabetical order.
    line : int
        Source line index.
    offset : int
        Rotation start word within the source line.
    words : tuple[str, ...]
        The rotated word sequence, resolved against the store at access time.
    text : str
        ``words`` joined with single spaces.
    """
    rank: int
    line: int
    offset: int
    words: Tuple[str, ...]
    text: str

    def to_dict(self) -> dict:
        d = asdict(self)
        d["words"] = list(self.words)
        return d
