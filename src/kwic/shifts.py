# src/kwic/shifts.py
from __future__ import annotations
from typing import List, Sequence, Tuple

from .errors import OutOfRangeError
from .line_store import LineStore
from .models import ShiftRef


def rotate(words: Sequence[str], offset: int) -> Tuple[str, ...]:
    """
    Rotation of `words` starting at `offset`:
    word[k], ..., word[n-1], word[0], ..., word[k-1].
    Same as moving the first word to the end k times.
    """
    n = len(words)
    if not 0 <= offset < n:
        raise OutOfRangeError("offset", offset, n)
    return tuple(words[offset:]) + tuple(words[:offset])


def shifts_for_line(store: LineStore, line: int) -> List[ShiftRef]:
    """One ShiftRef per word of the line; a line without words yields none."""
    return [ShiftRef(line, k) for k in range(store.word_count(line))]


def circular_shifts(store: LineStore) -> List[ShiftRef]:
    """Every circular shift of every line, in (line, offset) order."""
    out: List[ShiftRef] = []
    for line in range(store.line_count()):
        out.extend(shifts_for_line(store, line))
    return out


def shift_count(store: LineStore) -> int:
    return store.word_total()


def resolve(store: LineStore, ref: ShiftRef) -> Tuple[str, ...]:
    """Realize the word sequence of `ref` against the store's current words."""
    return rotate(store.line_as_words(ref.line), ref.offset)
